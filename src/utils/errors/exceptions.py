"""Taxonomia de erros do cliente de sessão.

- NetworkError: transporte inacessível (sem resposta)
- HttpError: rejeição estruturada do servidor (status + detail)
- ValidationError: rejeição com lista de erros por campo
"""

from __future__ import annotations

from typing import Any


class SessionClientError(RuntimeError):
    """Base para falhas recuperáveis do cliente de sessão."""


class NetworkError(SessionClientError):
    """Falha de conexão/timeout: nenhuma resposta recebida."""


class HttpError(SessionClientError):
    """Erro de requisição HTTP sem dados sensíveis."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail

    @property
    def is_unauthorized(self) -> bool:
        """True se o servidor rejeitou as credenciais (401)."""
        return self.status_code == 401


class ValidationError(HttpError):
    """Rejeição com mensagens por campo (detail em formato de lista)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: Any = None,
        messages: list[str] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, detail=detail)
        self.messages = messages or []
