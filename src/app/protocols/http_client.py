"""Protocolos HTTP usados pelo app.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from api.connectors.cafe.models import RegisterData, UserSession


class AuthApiProtocol(Protocol):
    """Contrato mínimo para o cliente de identidade."""

    async def register(self, data: RegisterData) -> UserSession: ...

    async def login(self, phone_number: str) -> UserSession: ...

    async def refresh_access(self) -> None: ...

    async def get_current_user(self) -> UserSession: ...

    async def logout(self, user_id: int) -> None: ...

    async def aclose(self) -> None: ...
