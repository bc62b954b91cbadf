"""Snapshot do estado de autenticação exposto aos colaboradores."""

from __future__ import annotations

from dataclasses import dataclass

from api.connectors.cafe.models import UserSession


@dataclass(frozen=True, slots=True)
class AuthState:
    """Estado de autenticação.

    Atributos:
        session: Identidade atual (None quando anônimo)
        is_loading: True até a primeira validação terminar

    is_authenticated é sempre derivado de session, nunca atribuído.
    """

    session: UserSession | None = None
    is_loading: bool = True

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None
