"""
Máquina de estados de autenticação.

Controla transições UNKNOWN/ANONYMOUS/AUTHENTICATED e mantém histórico
limitado para auditoria.
"""

from collections import deque
from typing import Any

from fsm.states.auth import DEFAULT_INITIAL_STATE, AuthStatus, is_loading
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult

# Histórico limitado: o processo pode alternar estados indefinidamente
MAX_HISTORY = 50


class AuthStateMachine:
    """
    Máquina de estados do cliente de sessão.

    Attributes:
        current_state: Estado atual
        history: Últimas transições realizadas
    """

    __slots__ = ("_current_state", "_history")

    def __init__(self, initial_state: AuthStatus | None = None) -> None:
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: deque[StateTransition] = deque(maxlen=MAX_HISTORY)

    @property
    def current_state(self) -> AuthStatus:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def is_loading(self) -> bool:
        return is_loading(self._current_state)

    def can_transition_to(self, target: AuthStatus) -> bool:
        """Verifica se pode transitar para o estado alvo."""
        return is_transition_valid(self._current_state, target)

    def get_valid_targets(self) -> frozenset[AuthStatus]:
        """Retorna destinos válidos a partir do estado atual."""
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: AuthStatus,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'login', 'validate')
            metadata: Dados adicionais para auditoria (nunca PII)

        Returns:
            TransitionResult com sucesso/falha e dados da transição
        """
        if not is_transition_valid(self._current_state, target):
            return TransitionResult(
                success=False,
                error_reason=(
                    f"Transição inválida: {self._current_state.name} → {target.name}"
                ),
            )

        transition = StateTransition(
            from_state=self._current_state,
            to_state=target,
            trigger=trigger,
            metadata=metadata or {},
        )
        self._current_state = target
        self._history.append(transition)

        return TransitionResult(success=True, transition=transition)

    def get_state_summary(self) -> dict[str, Any]:
        """Resumo do estado atual (seguro para logs)."""
        return {
            "current_state": self._current_state.name,
            "is_loading": self.is_loading,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }
