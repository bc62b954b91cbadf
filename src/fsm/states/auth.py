"""
Estados canônicos de autenticação do cliente.

Não há estado terminal: o ciclo ANONYMOUS <-> AUTHENTICATED se repete
durante toda a vida do processo.
"""

from enum import StrEnum


class AuthStatus(StrEnum):
    """
    Estados de autenticação.

    - UNKNOWN: inicial, primeira validação ainda não concluída (is_loading)
    - ANONYMOUS: sem identidade
    - AUTHENTICATED: identidade instalada
    """

    UNKNOWN = "UNKNOWN"
    ANONYMOUS = "ANONYMOUS"
    AUTHENTICATED = "AUTHENTICATED"

    def __str__(self) -> str:
        return self.value


# Estado inicial padrão
DEFAULT_INITIAL_STATE: AuthStatus = AuthStatus.UNKNOWN


def is_loading(state: AuthStatus) -> bool:
    """True enquanto a primeira validação não terminou."""
    return state is AuthStatus.UNKNOWN
