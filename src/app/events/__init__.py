"""Sinais de sessão (publish/subscribe com ciclo de vida explícito)."""

from app.events.bus import EventBus, SessionSignal

__all__ = [
    "EventBus",
    "SessionSignal",
]
