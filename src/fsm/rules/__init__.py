"""
Exports públicos do módulo fsm/rules.
"""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    EVIDENCE_SOURCE_KEY,
    FALLBACK_KEY,
    Guard,
    GuardResult,
    evaluate_guards,
    guard_conclusive_requires_evidence,
    guard_same_state,
    guard_terminal_state,
    guard_valid_state,
)

__all__ = [
    "DEFAULT_GUARDS",
    "EVIDENCE_SOURCE_KEY",
    "FALLBACK_KEY",
    "Guard",
    "GuardResult",
    "evaluate_guards",
    "guard_conclusive_requires_evidence",
    "guard_same_state",
    "guard_terminal_state",
    "guard_valid_state",
]
