"""Protocolo do dono do estado de sessão.

RefreshScheduler e VisibilityMonitor dependem deste contrato em vez do
SessionManager concreto: leem o estado atual a cada uso e só o alteram
através destas operações.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from api.connectors.cafe.models import UserSession


class SessionControlProtocol(Protocol):
    @property
    def is_authenticated(self) -> bool:
        ...

    async def refresh_session(self) -> UserSession:
        ...

    async def validate_session(self) -> None:
        ...
