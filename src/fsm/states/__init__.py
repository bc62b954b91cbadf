"""
Exports públicos do módulo fsm/states.
"""

from fsm.states.auth import (
    DEFAULT_INITIAL_STATE,
    AuthStatus,
    is_loading,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "AuthStatus",
    "is_loading",
]
