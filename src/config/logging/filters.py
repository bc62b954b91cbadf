"""Filter de logging para injeção de contexto.

Campos injetados:
- correlation_id: ID da operação de sessão em andamento
- service: Nome do serviço (ex: cafe_session)
- environment: Ambiente de execução
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class SessionContextFilter(logging.Filter):
    """Injeta correlation_id, service e environment em cada record.

    Nunca enriquece com dados de identidade (telefone, nome).
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
        environment: str = "development",
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")
        self._environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        correlation_id passado via `extra` tem precedência.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        record.environment = self._environment
        return True
