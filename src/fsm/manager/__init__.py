"""
Exports públicos do módulo fsm/manager.
"""

from fsm.manager.machine import (
    INITIAL_STATES,
    VerificationStateMachine,
    create_verification_fsm,
)

__all__ = [
    "INITIAL_STATES",
    "VerificationStateMachine",
    "create_verification_fsm",
]
