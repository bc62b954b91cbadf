"""Correlation id por operação de sessão.

Cada operação do SessionManager (login, logout, validação) e cada tick
do agendador roda sob um correlation_id próprio, propagado nos logs e
no header X-Correlation-ID das requisições.

Uso:
    with correlation_scope("login"):
        ...  # logs e requisições compartilham o mesmo id
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

CORRELATION_HEADER = "X-Correlation-ID"

# ContextVar é isolado por Task do asyncio
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Retorna o correlation_id do contexto atual (vazio se não definido)."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> Token[str]:
    """Define o correlation_id no contexto atual.

    Args:
        correlation_id: ID a definir. Se None, gera um novo.

    Returns:
        Token para reset posterior via reset_correlation_id().
    """
    value = correlation_id or generate_correlation_id()
    return _correlation_id.set(value)


def reset_correlation_id(token: Token[str]) -> None:
    """Restaura o correlation_id ao valor anterior."""
    _correlation_id.reset(token)


def generate_correlation_id(prefix: str = "") -> str:
    """Gera um novo correlation_id, opcionalmente prefixado pela operação."""
    value = uuid.uuid4().hex
    return f"{prefix}-{value}" if prefix else value


@contextmanager
def correlation_scope(operation: str) -> Iterator[str]:
    """Executa um bloco sob correlation_id novo, a menos que já exista um."""
    current = get_correlation_id()
    if current:
        yield current
        return
    token = set_correlation_id(generate_correlation_id(operation))
    try:
        yield get_correlation_id()
    finally:
        reset_correlation_id(token)
