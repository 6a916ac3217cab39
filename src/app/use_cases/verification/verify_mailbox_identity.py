"""Use case de verificação de identidade da caixa postal.

Infere se o endereço digitado pertence à caixa acessível com as
credenciais informadas. As estratégias rodam em ordem fixa:

    FolderSync → From em Enviados → To no Inbox → round trip

A primeira que produzir um endereço normalizado decide entre
Success e EmailMismatch. Só a montagem do transporte e o FolderSync
viram VerificationError; qualquer outra falha degrada para a próxima
estratégia e, esgotadas todas, o endereço é aceito (um mismatch
confirmado nunca é rebaixado para Success).
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.domain.mailbox import FolderType
from app.domain.verification import (
    EmailMismatch,
    EvidenceSource,
    Success,
    VerificationError,
    VerificationResult,
    VerificationStage,
)
from app.observability import (
    correlation_scope,
    record_latency,
    record_verification_outcome,
)
from app.services.identity import (
    AddressField,
    RoundTripProbe,
    addresses_match,
    check_folder,
    extract_address,
)
from app.use_cases.verification.transport_lifecycle import close_transport
from config.logging import log_fallback
from fsm import (
    EVIDENCE_SOURCE_KEY,
    FALLBACK_KEY,
    VerificationState,
    VerificationStateMachine,
    create_verification_fsm,
)
from utils.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.mailbox import ConnectionSettings, Folder
    from app.protocols.mail_transport import (
        MailTransportFactoryProtocol,
        MailTransportProtocol,
    )

    StatusCallback = Callable[[VerificationStage], None]

logger = logging.getLogger(__name__)

_COMPONENT = "verification"


class VerifyMailboxIdentityUseCase:
    """Orquestra as estratégias de verificação sobre a FSM."""

    def __init__(
        self,
        transport_factory: MailTransportFactoryProtocol,
        round_trip_probe: RoundTripProbe,
    ) -> None:
        self._transport_factory = transport_factory
        self._round_trip_probe = round_trip_probe

    async def verify(
        self,
        candidate_email: str,
        connection: ConnectionSettings,
        on_status: StatusCallback | None = None,
    ) -> VerificationResult:
        """Verifica o endereço com um transporte exclusivo da tentativa.

        O transporte é fechado ao final, inclusive em cancelamento.
        """
        try:
            transport = self._transport_factory.create(connection)
        except (TransportError, ValueError) as exc:
            # Certificado inválido, senha do certificado ausente etc.
            logger.warning(
                "verification_transport_setup_failed",
                extra={"component": _COMPONENT, "error": str(exc)},
            )
            record_verification_outcome("error", "transport_setup")
            return VerificationError(message=str(exc))

        try:
            return await self.verify_with_transport(candidate_email, transport, on_status)
        finally:
            await close_transport(transport, _COMPONENT)

    async def verify_with_transport(
        self,
        candidate_email: str,
        transport: MailTransportProtocol,
        on_status: StatusCallback | None = None,
    ) -> VerificationResult:
        """Executa o fluxo completo sobre um transporte já montado."""
        with correlation_scope() as correlation_id:
            machine = create_verification_fsm(attempt_id=correlation_id)
            started = time.perf_counter()
            try:
                return await self._run(machine, candidate_email, transport, on_status)
            finally:
                record_latency(
                    _COMPONENT,
                    "verify",
                    (time.perf_counter() - started) * 1000,
                )
                logger.info(
                    "verification_finished",
                    extra={
                        "component": _COMPONENT,
                        "final_state": machine.current_state.name,
                        "transitions": machine.get_history_summary(),
                    },
                )

    async def _run(
        self,
        machine: VerificationStateMachine,
        candidate_email: str,
        transport: MailTransportProtocol,
        on_status: StatusCallback | None,
    ) -> VerificationResult:
        machine.advance(VerificationState.FOLDER_SYNC, "start")
        _notify(on_status, VerificationStage.VERIFYING_ACCOUNT)

        try:
            hierarchy = await transport.folder_sync()
        except TransportError as exc:
            machine.advance(VerificationState.ERROR, "folder_sync_failed")
            logger.warning(
                "verification_folder_sync_failed",
                extra={"component": _COMPONENT, "error": str(exc)},
            )
            record_verification_outcome("error", "folder_sync")
            return VerificationError(message=str(exc))

        sent = hierarchy.find_by_type(FolderType.SENT_ITEMS)
        inbox = hierarchy.find_by_type(FolderType.INBOX)
        machine.advance(
            VerificationState.CHECK_SENT,
            "folder_sync_ok",
            {
                "folder_count": len(hierarchy.folders),
                "has_sent": sent is not None,
                "has_inbox": inbox is not None,
            },
        )

        if sent is not None:
            _notify(on_status, VerificationStage.VERIFYING_EMAIL)
            evidence = await check_folder(transport, sent, AddressField.FROM)
            if evidence is not None:
                return self._conclude(machine, candidate_email, evidence, EvidenceSource.SENT)

        machine.advance(
            VerificationState.CHECK_INBOX,
            "sent_no_evidence" if sent is not None else "sent_absent",
        )

        if inbox is not None:
            _notify(on_status, VerificationStage.VERIFYING_EMAIL)
            evidence = await check_folder(transport, inbox, AddressField.TO)
            if evidence is not None:
                return self._conclude(machine, candidate_email, evidence, EvidenceSource.INBOX)

        machine.advance(
            VerificationState.ROUND_TRIP,
            "inbox_no_evidence" if inbox is not None else "inbox_absent",
        )
        _notify(on_status, VerificationStage.SENDING_TEST_EMAIL)

        report = await self._round_trip_probe.run(
            transport,
            candidate_email.strip(),
            sent,
            inbox,
        )
        if report.evidence is not None:
            return self._conclude(
                machine, candidate_email, report.evidence, EvidenceSource.ROUND_TRIP
            )

        reason = "send_failed" if report.send_failed else "no_evidence"
        log_fallback(logger, _COMPONENT, reason=reason)
        machine.advance(
            VerificationState.SUCCESS,
            "round_trip_inconclusive",
            {FALLBACK_KEY: True, "reason": reason},
        )
        record_verification_outcome("success", "fallback")
        return Success()

    def _conclude(
        self,
        machine: VerificationStateMachine,
        candidate_email: str,
        evidence: str,
        source: EvidenceSource,
    ) -> VerificationResult:
        metadata = {EVIDENCE_SOURCE_KEY: source.value}

        if addresses_match(candidate_email, evidence):
            machine.advance(VerificationState.SUCCESS, f"{source.value}_match", metadata)
            record_verification_outcome("success", source.value)
            return Success()

        machine.advance(VerificationState.MISMATCH, f"{source.value}_mismatch", metadata)
        record_verification_outcome("mismatch", source.value)
        return EmailMismatch(
            entered_email=extract_address(candidate_email),
            actual_email=evidence,
        )


def _notify(on_status: StatusCallback | None, stage: VerificationStage) -> None:
    if on_status is not None:
        on_status(stage)
