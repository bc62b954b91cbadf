"""
Exports públicos do módulo fsm/manager.
"""

from fsm.manager.machine import MAX_HISTORY, AuthStateMachine

__all__ = [
    "MAX_HISTORY",
    "AuthStateMachine",
]
