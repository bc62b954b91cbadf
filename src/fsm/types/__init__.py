"""Registro imutável de transições de autenticação e resultado das tentativas."""

from fsm.types.transition import StateTransition, TransitionResult

__all__ = [
    "StateTransition",
    "TransitionResult",
]
