"""Resultado da verificação de identidade.

`VerificationResult` é uma união fechada de três variantes. Quem
consome deve usar `match` com `assert_never` no ramo final para que
uma variante nova quebre a checagem de tipos em vez de cair em um
default silencioso.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Success:
    """Endereço aceito (por evidência ou por fallback)."""


@dataclass(frozen=True, slots=True)
class EmailMismatch:
    """Evidência contradiz o endereço digitado.

    Attributes:
        entered_email: Endereço digitado, já normalizado
        actual_email: Endereço encontrado no servidor, normalizado
    """

    entered_email: str
    actual_email: str


@dataclass(frozen=True, slots=True)
class VerificationError:
    """Falha de transporte antes de qualquer estratégia rodar."""

    message: str


VerificationResult: TypeAlias = Success | EmailMismatch | VerificationError


@dataclass(frozen=True, slots=True)
class HasAccess:
    """A mensagem enviada ao endereço digitado chegou a este Inbox."""


@dataclass(frozen=True, slots=True)
class NoAccess:
    """A mensagem não chegou (ou não pôde ser enviada): caixa de outra pessoa."""


@dataclass(frozen=True, slots=True)
class AccessCheckError:
    """A checagem não pôde rodar (transporte, FolderSync ou Inbox ausente)."""

    message: str


# Checagem de acesso a caixa delegada, oferecida após um EmailMismatch
AccessVerificationResult: TypeAlias = HasAccess | NoAccess | AccessCheckError


class VerificationStage(StrEnum):
    """Etapas reportadas ao callback de progresso."""

    VERIFYING_ACCOUNT = "verifying_account"
    VERIFYING_EMAIL = "verifying_email"
    SENDING_TEST_EMAIL = "sending_test_email"


class EvidenceSource(StrEnum):
    """Origem do endereço usado como evidência."""

    SENT = "sent"
    INBOX = "inbox"
    ROUND_TRIP = "round_trip"


__all__ = [
    "AccessCheckError",
    "AccessVerificationResult",
    "EmailMismatch",
    "EvidenceSource",
    "HasAccess",
    "NoAccess",
    "Success",
    "VerificationError",
    "VerificationResult",
    "VerificationStage",
]
