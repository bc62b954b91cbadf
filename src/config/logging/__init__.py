"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging

    # Na inicialização (app.bootstrap.initialize_app)
    configure_logging(level="INFO", service_name="cafe_session")

    # Em qualquer módulo
    logger = logging.getLogger(__name__)
    logger.info("token_refreshed", extra={"interval_ms": 840000})

Campos obrigatórios em todo log: correlation_id, service, environment,
level, logger, message, asctime. Nunca logar telefones ou cookies.
"""

from config.logging.config import configure_logging, log_fallback
from config.logging.filters import SessionContextFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "SessionContextFilter",
    "configure_logging",
    "create_json_formatter",
    "log_fallback",
]
