"""Use cases de verificação de identidade e setup de conta."""

from .account_setup import (
    AccountSetupOutcome,
    AccountSetupRequest,
    AccountSetupUseCase,
)
from .check_mailbox_access import CheckMailboxAccessUseCase
from .verify_mailbox_identity import VerifyMailboxIdentityUseCase

__all__ = [
    "AccountSetupOutcome",
    "AccountSetupRequest",
    "AccountSetupUseCase",
    "CheckMailboxAccessUseCase",
    "VerifyMailboxIdentityUseCase",
]
