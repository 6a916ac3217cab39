"""Use case de checagem de acesso a caixa delegada.

Acionado quando o usuário, diante de um EmailMismatch, afirma que as
credenciais também dão acesso ao endereço digitado. Usa o mesmo
contrato de transporte da verificação de identidade.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from app.domain.mailbox import FolderType
from app.domain.verification import (
    AccessCheckError,
    AccessVerificationResult,
    HasAccess,
    NoAccess,
)
from app.observability import (
    correlation_scope,
    record_latency,
    record_verification_outcome,
)
from app.use_cases.verification.transport_lifecycle import close_transport
from utils.errors import TransportError

if TYPE_CHECKING:
    from app.domain.mailbox import ConnectionSettings
    from app.protocols.mail_transport import (
        MailTransportFactoryProtocol,
        MailTransportProtocol,
    )
    from app.services.identity import MailboxAccessChecker

logger = logging.getLogger(__name__)

_COMPONENT = "access_check"


class CheckMailboxAccessUseCase:
    """Confirma se a caixa acessível recebe mensagens do endereço digitado."""

    def __init__(
        self,
        transport_factory: MailTransportFactoryProtocol,
        access_checker: MailboxAccessChecker,
    ) -> None:
        self._transport_factory = transport_factory
        self._access_checker = access_checker

    async def check(
        self,
        entered_email: str,
        connection: ConnectionSettings,
    ) -> AccessVerificationResult:
        try:
            transport = self._transport_factory.create(connection)
        except (TransportError, ValueError) as exc:
            logger.warning(
                "access_check_transport_setup_failed",
                extra={"component": _COMPONENT, "error": str(exc)},
            )
            record_verification_outcome("error", "transport_setup")
            return AccessCheckError(message=str(exc))

        try:
            return await self.check_with_transport(entered_email, transport)
        finally:
            await close_transport(transport, _COMPONENT)

    async def check_with_transport(
        self,
        entered_email: str,
        transport: MailTransportProtocol,
    ) -> AccessVerificationResult:
        with correlation_scope():
            started = time.perf_counter()
            try:
                result = await self._run(entered_email, transport)
            finally:
                record_latency(
                    _COMPONENT,
                    "check",
                    (time.perf_counter() - started) * 1000,
                )
            record_verification_outcome(_outcome(result), _COMPONENT)
            return result

    async def _run(
        self,
        entered_email: str,
        transport: MailTransportProtocol,
    ) -> AccessVerificationResult:
        try:
            hierarchy = await transport.folder_sync()
        except TransportError as exc:
            logger.warning(
                "access_check_folder_sync_failed",
                extra={"component": _COMPONENT, "error": str(exc)},
            )
            return AccessCheckError(message=str(exc))

        return await self._access_checker.run(
            transport,
            entered_email,
            hierarchy.find_by_type(FolderType.INBOX),
            hierarchy.find_by_type(FolderType.SENT_ITEMS),
        )


def _outcome(result: AccessVerificationResult) -> str:
    if isinstance(result, HasAccess):
        return "has_access"
    if isinstance(result, NoAccess):
        return "no_access"
    return "error"
