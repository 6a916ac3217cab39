"""
Máquina de estados de uma tentativa de verificação.

Mantém o estado atual, valida cada transição contra o mapa e os
guards, e guarda o histórico para o log de auditoria ao final da
tentativa.
"""

from typing import Any

from fsm.rules.guards import GuardResult, evaluate_guards
from fsm.states.verification import (
    DEFAULT_INITIAL_STATE,
    VerificationState,
    is_terminal,
)
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import (
    StateTransition,
    TransitionRejectedError,
    TransitionResult,
)


class VerificationStateMachine:
    """
    Máquina de estados de uma tentativa de verificação.

    Attributes:
        current_state: Estado atual da máquina
        history: Histórico de transições realizadas
    """

    __slots__ = ("_attempt_id", "_current_state", "_history")

    def __init__(
        self,
        initial_state: VerificationState | None = None,
        attempt_id: str = "",
    ) -> None:
        """
        Args:
            initial_state: Estado inicial (usa DEFAULT_INITIAL_STATE se None)
            attempt_id: Identificador da tentativa para logs
        """
        self._current_state = initial_state or DEFAULT_INITIAL_STATE
        self._history: list[StateTransition] = []
        self._attempt_id = attempt_id

    @property
    def current_state(self) -> VerificationState:
        """Estado atual da máquina."""
        return self._current_state

    @property
    def history(self) -> list[StateTransition]:
        """Histórico de transições (cópia para evitar mutação externa)."""
        return list(self._history)

    @property
    def attempt_id(self) -> str:
        return self._attempt_id

    @property
    def is_terminal(self) -> bool:
        """Verifica se a tentativa terminou."""
        return is_terminal(self._current_state)

    def can_transition_to(
        self,
        target: VerificationState,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        """Verifica se pode transitar para o estado alvo."""
        if not is_transition_valid(self._current_state, target):
            return False
        return evaluate_guards(self._current_state, target, metadata).allowed

    def get_valid_targets(self) -> frozenset[VerificationState]:
        """Retorna estados de destino válidos a partir do estado atual."""
        return get_valid_targets(self._current_state)

    def transition(
        self,
        target: VerificationState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Tenta realizar uma transição de estado.

        Args:
            target: Estado de destino
            trigger: Identificador do gatilho (ex: 'sent_no_evidence')
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

        guard_result: GuardResult = evaluate_guards(
            self._current_state, target, metadata
        )
        if not guard_result.allowed:
            return TransitionResult(
                success=False,
                error_reason=guard_result.reason,
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

    def advance(
        self,
        target: VerificationState,
        trigger: str,
        metadata: dict[str, Any] | None = None,
    ) -> StateTransition:
        """
        Igual a `transition`, mas levanta erro se a transição for recusada.

        Raises:
            TransitionRejectedError: Se o mapa ou um guard recusar.
        """
        result = self.transition(target, trigger, metadata)
        if not result.success or result.transition is None:
            raise TransitionRejectedError(result.error_reason or "transição recusada")
        return result.transition

    def get_state_summary(self) -> dict[str, Any]:
        """Retorna resumo do estado atual (seguro para logs)."""
        return {
            "attempt_id": self._attempt_id,
            "current_state": self._current_state.name,
            "is_terminal": self.is_terminal,
            "transition_count": len(self._history),
            "valid_targets": sorted(s.name for s in self.get_valid_targets()),
        }

    def get_history_summary(self) -> list[dict[str, Any]]:
        """Retorna histórico em formato seguro para logs."""
        return [t.to_log_dict() for t in self._history]


def create_verification_fsm(attempt_id: str) -> VerificationStateMachine:
    """Cria uma máquina nova no estado START."""
    return VerificationStateMachine(attempt_id=attempt_id)


INITIAL_STATES = frozenset({DEFAULT_INITIAL_STATE})
