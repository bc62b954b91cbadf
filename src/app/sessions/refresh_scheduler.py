"""Renovação proativa de credenciais enquanto autenticado.

Regras:
- um timer por sessão autenticada: criado em start(), cancelado em stop()
- single-flight: tick durante renovação em curso é descartado, nunca enfileirado
- circuit breaker: após `failure_threshold` falhas consecutivas o timer para
  e só volta com uma nova transição para AUTHENTICATED

Estado e configuração são relidos a cada tick/agendamento; nada é capturado
em closures.
"""

from __future__ import annotations

import asyncio
import contextvars
import logging
from typing import TYPE_CHECKING

from app.observability import correlation_scope, record_refresh_outcome
from config.settings import get_token_refresh_settings
from utils.errors import SessionClientError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.protocols import SessionControlProtocol
    from config.settings import TokenRefreshSettings

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Agendador de renovação com single-flight e circuit breaker."""

    def __init__(
        self,
        session: SessionControlProtocol,
        settings_provider: Callable[[], TokenRefreshSettings] = get_token_refresh_settings,
    ) -> None:
        self._session = session
        self._settings_provider = settings_provider
        self._handle: asyncio.TimerHandle | None = None
        self._run_id = 0
        self._in_flight = False
        self._failure_count = 0
        self._circuit_open = False
        self._interval_ms: int | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def is_running(self) -> bool:
        """True enquanto existe timer armado."""
        return self._handle is not None

    @property
    def is_circuit_open(self) -> bool:
        return self._circuit_open

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def interval_ms(self) -> int | None:
        """Intervalo do timer atualmente armado (None se parado)."""
        return self._interval_ms

    def start(self) -> None:
        """Inicia um novo ciclo: zera contador, flag e circuito; arma o timer.

        Deve ser chamado dentro de um event loop em execução.
        """
        self._cancel_handle()
        self._run_id += 1
        self._in_flight = False
        self._failure_count = 0
        self._circuit_open = False
        self._arm()
        logger.info(
            "refresh_scheduler_started",
            extra={"interval_ms": self._interval_ms, "run_id": self._run_id},
        )

    def stop(self) -> None:
        """Cancela o timer de forma síncrona.

        Renovações já em curso não são abortadas; a conclusão delas é
        descartada porque o run_id muda.
        """
        was_running = self.is_running
        self._cancel_handle()
        self._run_id += 1
        self._in_flight = False
        if was_running:
            logger.info("refresh_scheduler_stopped", extra={"run_id": self._run_id})

    async def tick(self) -> None:
        """Executa uma tentativa de renovação (no-op se não aplicável)."""
        if self._handle is None or not self._session.is_authenticated:
            return
        if self._in_flight:
            logger.debug("refresh_tick_skipped", extra={"reason": "in_flight"})
            record_refresh_outcome("skipped", self._failure_count)
            return

        run_id = self._run_id
        self._in_flight = True
        with correlation_scope("refresh"):
            try:
                await self._session.refresh_session()
            except SessionClientError as exc:
                if run_id == self._run_id:
                    self._register_failure(exc)
                return
            finally:
                if run_id == self._run_id:
                    self._in_flight = False

            if run_id == self._run_id:
                self._failure_count = 0
                record_refresh_outcome("ok", 0)
                logger.info(
                    "token_refreshed",
                    extra={"next_refresh_in_ms": self._interval_ms},
                )

    async def drain(self) -> None:
        """Aguarda ticks disparados pelo timer que ainda estão em curso."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _register_failure(self, exc: SessionClientError) -> None:
        threshold = self._settings_provider().failure_threshold
        self._failure_count += 1
        logger.warning(
            "token_refresh_failed",
            extra={
                "attempt": self._failure_count,
                "threshold": threshold,
                "error_type": type(exc).__name__,
                "status_code": getattr(exc, "status_code", None),
            },
        )
        if self._failure_count >= threshold:
            self._cancel_handle()
            self._circuit_open = True
            record_refresh_outcome("circuit_open", self._failure_count)
            logger.error(
                "refresh_circuit_open",
                extra={"failure_count": self._failure_count},
            )
        else:
            record_refresh_outcome("failed", self._failure_count)

    def _arm(self) -> None:
        self._interval_ms = self._settings_provider().interval_ms
        loop = asyncio.get_running_loop()
        # Contexto vazio: ticks não herdam o correlation_id de quem chamou start()
        self._handle = loop.call_later(
            self._interval_ms / 1000,
            self._on_timer,
            self._run_id,
            context=contextvars.Context(),
        )

    def _on_timer(self, run_id: int) -> None:
        if run_id != self._run_id or self._handle is None:
            return
        # Próximo tick é armado antes: ticks independem da duração da renovação
        self._arm()
        task = asyncio.create_task(self.tick())
        self._tasks.add(task)
        task.add_done_callback(self._on_tick_done)

    def _on_tick_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "refresh_tick_crashed",
                exc_info=exc,
                extra={"error_type": type(exc).__name__},
            )

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._interval_ms = None
