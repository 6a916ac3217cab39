"""
Módulo FSM — máquina de estados da verificação de identidade.

Cada tentativa de verificação percorre as estratégias em ordem fixa
(FolderSync → Sent → Inbox → round trip) e termina em SUCCESS,
MISMATCH ou ERROR.

Estrutura:
    - states/: VerificationState e conjuntos de estados
    - transitions/: Regras de transição (VALID_TRANSITIONS)
    - rules/: Guards (incluindo a exigência de evidência normalizada)
    - manager/: VerificationStateMachine
    - types/: StateTransition, TransitionResult
"""

from fsm.manager import (
    INITIAL_STATES,
    VerificationStateMachine,
    create_verification_fsm,
)
from fsm.rules import (
    EVIDENCE_SOURCE_KEY,
    FALLBACK_KEY,
    GuardResult,
    evaluate_guards,
)
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    VerificationState,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import (
    StateTransition,
    TransitionRejectedError,
    TransitionResult,
)

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "EVIDENCE_SOURCE_KEY",
    "FALLBACK_KEY",
    "INITIAL_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "GuardResult",
    "StateTransition",
    "TransitionRejectedError",
    "TransitionResult",
    "VerificationState",
    "VerificationStateMachine",
    "create_verification_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
