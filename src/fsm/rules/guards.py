"""
Guards e invariantes para transições da verificação.

Além do mapa de transições, os guards protegem a regra central do
fluxo: SUCCESS/MISMATCH só são conclusivos quando há um endereço
normalizado extraído do servidor. A única exceção é o fallback
SUCCESS ao fim do round trip, marcado explicitamente no metadata.
"""

from collections.abc import Callable, Mapping
from typing import Any

from fsm.states.verification import (
    TERMINAL_STATES,
    VerificationState,
)

# Chaves de metadata lidas pelos guards
EVIDENCE_SOURCE_KEY = "evidence_source"
FALLBACK_KEY = "fallback"


class GuardResult:
    """
    Resultado da avaliação de um guard.

    Attributes:
        allowed: Se a transição é permitida
        reason: Motivo do bloqueio (se allowed=False)
    """

    __slots__ = ("allowed", "reason")

    def __init__(self, allowed: bool, reason: str | None = None) -> None:
        self.allowed = allowed
        self.reason = reason

    @classmethod
    def allow(cls) -> "GuardResult":
        """Cria resultado permitindo a transição."""
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "GuardResult":
        """Cria resultado negando a transição."""
        return cls(allowed=False, reason=reason)


Guard = Callable[
    [VerificationState, VerificationState, Mapping[str, Any]],
    GuardResult,
]


def guard_valid_state(
    from_state: VerificationState,
    to_state: VerificationState,
    metadata: Mapping[str, Any],
) -> GuardResult:
    """Guard: ambos os estados precisam ser membros do enum."""
    if not isinstance(from_state, VerificationState):
        return GuardResult.deny(f"Estado de origem inválido: {from_state}")

    if not isinstance(to_state, VerificationState):
        return GuardResult.deny(f"Estado de destino inválido: {to_state}")

    return GuardResult.allow()


def guard_terminal_state(
    from_state: VerificationState,
    to_state: VerificationState,
    metadata: Mapping[str, Any],
) -> GuardResult:
    """Guard: estados terminais não permitem saída."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(
            f"Estado {from_state.name} é terminal, não permite transição"
        )
    return GuardResult.allow()


def guard_same_state(
    from_state: VerificationState,
    to_state: VerificationState,
    metadata: Mapping[str, Any],
) -> GuardResult:
    """Guard: nenhuma estratégia é repetida na mesma tentativa."""
    if from_state == to_state:
        return GuardResult.deny(
            f"Transição reflexiva não permitida: {from_state.name} → {to_state.name}"
        )
    return GuardResult.allow()


def guard_conclusive_requires_evidence(
    from_state: VerificationState,
    to_state: VerificationState,
    metadata: Mapping[str, Any],
) -> GuardResult:
    """
    Guard: desfecho conclusivo exige fonte de evidência.

    MISMATCH sempre exige `evidence_source`. SUCCESS exige
    `evidence_source`, exceto quando sai de ROUND_TRIP com
    `fallback=True` (ausência de evidência aceita o endereço).
    """
    if to_state not in (VerificationState.SUCCESS, VerificationState.MISMATCH):
        return GuardResult.allow()

    if metadata.get(EVIDENCE_SOURCE_KEY):
        return GuardResult.allow()

    if (
        to_state == VerificationState.SUCCESS
        and from_state == VerificationState.ROUND_TRIP
        and metadata.get(FALLBACK_KEY) is True
    ):
        return GuardResult.allow()

    return GuardResult.deny(
        f"{to_state.name} a partir de {from_state.name} exige evidência normalizada"
    )


# Aplicados em ordem; o primeiro deny interrompe
DEFAULT_GUARDS: list[Guard] = [
    guard_valid_state,
    guard_terminal_state,
    guard_same_state,
    guard_conclusive_requires_evidence,
]


def evaluate_guards(
    from_state: VerificationState,
    to_state: VerificationState,
    metadata: Mapping[str, Any] | None = None,
    guards: list[Guard] | None = None,
) -> GuardResult:
    """
    Avalia todos os guards para uma transição.

    Args:
        from_state: Estado de origem
        to_state: Estado de destino
        metadata: Metadata da transição (sem PII)
        guards: Lista de guards a aplicar (usa DEFAULT_GUARDS se None)

    Returns:
        GuardResult do primeiro guard que negar, ou allow() se todos passarem
    """
    guards_to_apply = guards if guards is not None else DEFAULT_GUARDS
    context = metadata or {}

    for guard in guards_to_apply:
        result = guard(from_state, to_state, context)
        if not result.allowed:
            return result

    return GuardResult.allow()
