"""
Regras de transição válidas entre estados da verificação.

O grafo é linear nas estratégias (Sent → Inbox → round trip) e cada
estratégia pode encerrar a tentativa assim que obtém evidência.
"""

from fsm.states.verification import TERMINAL_STATES, VerificationState

TransitionMap = dict[VerificationState, frozenset[VerificationState]]

VALID_TRANSITIONS: TransitionMap = {
    VerificationState.START: frozenset({
        VerificationState.FOLDER_SYNC,
    }),

    # Único ponto que produz ERROR
    VerificationState.FOLDER_SYNC: frozenset({
        VerificationState.CHECK_SENT,
        VerificationState.ERROR,
    }),

    VerificationState.CHECK_SENT: frozenset({
        VerificationState.CHECK_INBOX,
        VerificationState.SUCCESS,
        VerificationState.MISMATCH,
    }),

    VerificationState.CHECK_INBOX: frozenset({
        VerificationState.ROUND_TRIP,
        VerificationState.SUCCESS,
        VerificationState.MISMATCH,
    }),

    # Sem evidência após o round trip o desfecho é SUCCESS (fallback)
    VerificationState.ROUND_TRIP: frozenset({
        VerificationState.SUCCESS,
        VerificationState.MISMATCH,
    }),

    VerificationState.SUCCESS: frozenset(),
    VerificationState.MISMATCH: frozenset(),
    VerificationState.ERROR: frozenset(),
}


def get_valid_targets(state: VerificationState) -> frozenset[VerificationState]:
    """Retorna os destinos válidos (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(
    from_state: VerificationState,
    to_state: VerificationState,
) -> bool:
    """Verifica se uma transição é permitida pelo mapa."""
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Valida a integridade do mapa de transições.

    Verifica:
    - Todos os estados do enum estão no mapa
    - Estados terminais têm conjunto vazio
    - Todo estado não-terminal alcança algum terminal

    Returns:
        Lista de erros encontrados (vazia se válido)
    """
    errors: list[str] = []

    for state in VerificationState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        targets = VALID_TRANSITIONS.get(state, frozenset())
        if targets:
            errors.append(
                f"Estado terminal {state.name} não deveria ter transições: {targets}"
            )

    for state in set(VerificationState) - TERMINAL_STATES:
        if not _reaches_terminal(state):
            errors.append(f"Estado {state.name} não alcança estado terminal")

    return errors


def _reaches_terminal(state: VerificationState) -> bool:
    pending = [state]
    seen: set[VerificationState] = set()
    while pending:
        current = pending.pop()
        if current in TERMINAL_STATES:
            return True
        if current in seen:
            continue
        seen.add(current)
        pending.extend(VALID_TRANSITIONS.get(current, frozenset()))
    return False
