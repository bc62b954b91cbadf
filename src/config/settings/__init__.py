"""Agregador de settings do cafe_session.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Backend settings
from config.settings.api import (
    DEFAULT_API_BASE_URL,
    ApiSettings,
    get_api_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    TokenRefreshSettings,
    compute_refresh_interval_ms,
    get_base_settings,
    get_token_refresh_settings,
)

__all__ = [
    # Constants
    "DEFAULT_API_BASE_URL",
    # Backend
    "ApiSettings",
    # Base
    "BaseSettings",
    "Environment",
    "TokenRefreshSettings",
    "compute_refresh_interval_ms",
    "get_api_settings",
    "get_base_settings",
    "get_token_refresh_settings",
]
