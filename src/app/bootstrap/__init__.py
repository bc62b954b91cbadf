"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging e conecta
EventBus -> AuthApiClient -> SessionManager.

Uso:
    from app.bootstrap import create_session_manager, initialize_app

    initialize_app()
    async with create_session_manager() as manager:
        await manager.login("998901234567")
"""

from __future__ import annotations

import logging

from app.bootstrap.factory import create_session_manager
from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_api_settings,
    get_base_settings,
    get_token_refresh_settings,
)

logger = logging.getLogger(__name__)

STRICT_VALIDATION_ENVS = {"staging", "production"}

__all__ = [
    "create_session_manager",
    "initialize_app",
    "validate_runtime_settings",
]


def initialize_app() -> None:
    """Configura logging estruturado JSON a partir das settings base.

    Deve ser chamada uma vez no início do processo.
    """
    base = get_base_settings()
    configure_logging(
        level="DEBUG" if base.debug else base.log_level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
        environment=base.environment,
    )
    validate_runtime_settings()


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    strict_mode = base.environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"api: {error}" for error in get_api_settings().validate())
    errors.extend(
        f"token_refresh: {error}" for error in get_token_refresh_settings().validate()
    )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok"},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {base.environment}:\n{details}")
