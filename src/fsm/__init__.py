"""
Módulo FSM: máquina de estados de autenticação.

Estrutura:
    - states/: AuthStatus (UNKNOWN, ANONYMOUS, AUTHENTICATED)
    - transitions/: grafo de transições (VALID_TRANSITIONS)
    - manager/: AuthStateMachine
    - types/: StateTransition, TransitionResult
"""

from fsm.manager import MAX_HISTORY, AuthStateMachine
from fsm.states import DEFAULT_INITIAL_STATE, AuthStatus, is_loading
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "MAX_HISTORY",
    "VALID_TRANSITIONS",
    "AuthStateMachine",
    "AuthStatus",
    "StateTransition",
    "TransitionResult",
    "get_valid_targets",
    "is_loading",
    "is_transition_valid",
    "validate_transition_map",
]
