"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.session import (
    TokenRefreshSettings,
    compute_refresh_interval_ms,
    get_token_refresh_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "Environment",
    # Token refresh
    "TokenRefreshSettings",
    "compute_refresh_interval_ms",
    "get_base_settings",
    "get_token_refresh_settings",
]
