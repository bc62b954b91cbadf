"""Revalidação leve quando a aplicação volta ao primeiro plano.

Em APP_FOREGROUND, enquanto autenticado, dispara exatamente uma
validate_session() (busca da identidade atual, sem renovar credenciais).
Não interage com o contador de falhas do agendador.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.events import SessionSignal

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.events import EventBus
    from app.protocols import SessionControlProtocol

logger = logging.getLogger(__name__)


class VisibilityMonitor:
    """Inscrito em APP_FOREGROUND apenas enquanto ativo."""

    def __init__(self, session: SessionControlProtocol, event_bus: EventBus) -> None:
        self._session = session
        self._event_bus = event_bus
        self._unsubscribe: Callable[[], None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def is_active(self) -> bool:
        return self._unsubscribe is not None

    def activate(self) -> None:
        """Inscreve no sinal de primeiro plano (idempotente)."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self._event_bus.subscribe(
            SessionSignal.APP_FOREGROUND, self._on_signal
        )

    def deactivate(self) -> None:
        """Remove a inscrição (idempotente). Validações em curso seguem."""
        if self._unsubscribe is None:
            return
        self._unsubscribe()
        self._unsubscribe = None

    async def on_foreground(self) -> None:
        """Forma aguardável da reação ao primeiro plano."""
        if not self.is_active or not self._session.is_authenticated:
            return
        logger.info("foreground_revalidation")
        await self._session.validate_session()

    async def drain(self) -> None:
        """Aguarda revalidações disparadas pelo sinal."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _on_signal(self, signal: SessionSignal) -> None:
        task = asyncio.get_running_loop().create_task(self.on_foreground())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
