"""
Regras de transição válidas entre estados de autenticação.

Atualizar a identidade dentro de AUTHENTICATED não é transição.
"""

from fsm.states.auth import AuthStatus

# Tipagem explícita do mapa de transições
TransitionMap = dict[AuthStatus, frozenset[AuthStatus]]

# Chave: estado de origem; valor: destinos permitidos
VALID_TRANSITIONS: TransitionMap = {
    # UNKNOWN: resultado da primeira validação (ou login antes dela)
    AuthStatus.UNKNOWN: frozenset({
        AuthStatus.ANONYMOUS,
        AuthStatus.AUTHENTICATED,
    }),

    # ANONYMOUS: login ou cadastro bem-sucedido
    AuthStatus.ANONYMOUS: frozenset({
        AuthStatus.AUTHENTICATED,
    }),

    # AUTHENTICATED: logout, 401 irrecuperável ou validação falha
    AuthStatus.AUTHENTICATED: frozenset({
        AuthStatus.ANONYMOUS,
    }),
}


def get_valid_targets(state: AuthStatus) -> frozenset[AuthStatus]:
    """Retorna os destinos válidos a partir de um estado."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: AuthStatus, to_state: AuthStatus) -> bool:
    """Verifica se a transição é permitida."""
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - Nenhum estado (exceto UNKNOWN) é beco sem saída
    - Nenhuma transição volta para UNKNOWN

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in AuthStatus:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")
        elif not VALID_TRANSITIONS[state]:
            errors.append(f"Estado {state.name} não tem saída")

    for from_state, targets in VALID_TRANSITIONS.items():
        if AuthStatus.UNKNOWN in targets:
            errors.append(f"Transição {from_state.name} → UNKNOWN não permitida")

    return errors
