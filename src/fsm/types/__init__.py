"""
Exports públicos do módulo fsm/types.
"""

from fsm.types.transition import (
    StateTransition,
    TransitionRejectedError,
    TransitionResult,
)

__all__ = [
    "StateTransition",
    "TransitionRejectedError",
    "TransitionResult",
]
