"""Configuração centralizada de logging.

Um único handler JSON no root logger, com filter que injeta
correlation_id, service e environment em cada record.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.filters import SessionContextFilter
from config.logging.formatters import create_json_formatter
from config.settings.base.core import VALID_LOG_LEVELS

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_SERVICE_NAME = "cafe_session"


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    environment: str = "development",
) -> None:
    """Configura logging JSON estruturado para o cliente.

    Deve ser chamada uma vez na inicialização (app.bootstrap).

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id da
            operação corrente (ex: app.observability.get_correlation_id).
        environment: Ambiente de execução, repetido em cada record.

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(
        SessionContextFilter(service_name, correlation_id_getter, environment)
    )

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def log_fallback(
    logger: logging.Logger,
    component: str,
    reason: str | None = None,
) -> None:
    """Registra que um caminho degradado foi usado (sem PII).

    Ex: logout que limpa apenas o estado local porque o servidor
    não respondeu.

    Args:
        logger: Logger instance.
        component: Nome do componente (ex: "logout").
        reason: Razão do fallback (ex: "NetworkError").
    """
    extra: dict[str, object] = {
        "fallback_used": True,
        "component": component,
    }
    if reason:
        extra["reason"] = reason

    logger.warning("Fallback applied for %s", component, extra=extra)
