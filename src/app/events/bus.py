"""Publish/subscribe de sinais de sessão.

O EventBus é criado no composition root e injetado por referência:
cada colaborador se inscreve na construção e remove a inscrição no
teardown. Não existe instância global.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class SessionSignal(StrEnum):
    """Sinais difundidos pelo cliente de sessão.

    - SESSION_EXPIRED: credenciais irrecuperáveis ou logout (sem payload)
    - STATE_CHANGED: estado local mudou (badges de carrinho etc.)
    - APP_FOREGROUND / APP_BACKGROUND: transições de visibilidade da aplicação
    """

    SESSION_EXPIRED = "session_expired"
    STATE_CHANGED = "state_changed"
    APP_FOREGROUND = "app_foreground"
    APP_BACKGROUND = "app_background"


class EventBus:
    """Lista explícita de observers por sinal.

    Handlers são chamados de forma síncrona, na ordem de inscrição, sobre
    uma cópia da lista: um handler pode se inscrever, sair ou publicar
    novamente sem afetar a entrega em curso.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: dict[SessionSignal, list[Callable[[SessionSignal], None]]] = {}

    def subscribe(
        self,
        signal: SessionSignal,
        handler: Callable[[SessionSignal], None],
    ) -> Callable[[], None]:
        """Inscreve handler no sinal.

        Returns:
            Função sem argumentos que desfaz a inscrição.
        """
        self._handlers.setdefault(signal, []).append(handler)
        return lambda: self.unsubscribe(signal, handler)

    def unsubscribe(
        self,
        signal: SessionSignal,
        handler: Callable[[SessionSignal], None],
    ) -> None:
        """Remove handler; chamada repetida é no-op."""
        handlers = self._handlers.get(signal, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, signal: SessionSignal) -> int:
        """Entrega o sinal a todos os inscritos.

        Falha de um handler é registrada e não impede os demais.

        Returns:
            Quantidade de handlers notificados.
        """
        handlers = list(self._handlers.get(signal, []))
        logger.debug(
            "signal_published",
            extra={"signal": signal.value, "subscribers": len(handlers)},
        )
        for handler in handlers:
            try:
                handler(signal)
            except Exception:
                logger.exception(
                    "signal_handler_failed",
                    extra={"signal": signal.value},
                )
        return len(handlers)

    def subscriber_count(self, signal: SessionSignal) -> int:
        """Quantidade de handlers inscritos no sinal."""
        return len(self._handlers.get(signal, []))

    def clear(self) -> None:
        """Remove todas as inscrições."""
        self._handlers.clear()
