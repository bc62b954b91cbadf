"""Protocolo de notificação ao usuário.

Substitui os toasts da interface: o SessionManager informa sucesso e
falha de login/cadastro/logout sem conhecer a camada de apresentação.
"""

from __future__ import annotations

from typing import Protocol


class NotifierProtocol(Protocol):
    """Contrato mínimo para mensagens ao usuário."""

    def success(self, message: str) -> None:
        """Exibe confirmação de operação."""
        ...

    def error(self, message: str) -> None:
        """Exibe mensagem de falha já classificada."""
        ...
