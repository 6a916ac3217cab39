"""Checagem de acesso a uma caixa delegada ou adicional.

Depois de um EmailMismatch o usuário pode afirmar que também tem
acesso ao endereço digitado (caixa compartilhada, delegada). A prova
é empírica: envia uma mensagem de teste para o endereço digitado e
procura a entrega no Inbox acessível com estas credenciais. Se ela
chega, há acesso; se não chega, a mensagem foi para outra caixa.

As cópias de teste são apagadas em qualquer desfecho (Inbox quando
encontrada, Enviados com uma segunda tentativa após espera).
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.domain.verification import (
    AccessCheckError,
    AccessVerificationResult,
    HasAccess,
    NoAccess,
)
from app.services.identity.address_normalizer import extract_address
from app.services.identity.mailbox_scan import (
    FoundMessage,
    delete_message,
    find_and_delete,
    find_message,
    subject_matches,
)
from utils.errors import TransportError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from app.domain.mailbox import Folder, MailMessage
    from app.protocols.mail_transport import MailTransportProtocol
    from config.settings import VerificationSettings

logger = logging.getLogger(__name__)

_COMPONENT = "access_checker"


class MailboxAccessChecker:
    """Envia ao endereço digitado e procura a entrega no próprio Inbox."""

    __slots__ = ("_settings", "_sleep")

    def __init__(
        self,
        settings: VerificationSettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._sleep = sleep

    async def run(
        self,
        transport: MailTransportProtocol,
        entered_email: str,
        inbox_folder: Folder | None,
        sent_folder: Folder | None,
    ) -> AccessVerificationResult:
        """Executa a checagem de acesso.

        Args:
            transport: Transporte da tentativa atual
            entered_email: Endereço digitado que não bateu com a evidência
            inbox_folder: Caixa de Entrada listada no FolderSync
            sent_folder: Itens Enviados listado no FolderSync, se houver

        Returns:
            HasAccess, NoAccess ou AccessCheckError.
        """
        if inbox_folder is None:
            return AccessCheckError(message="Inbox folder not found")

        target = extract_address(entered_email)

        try:
            await transport.send_mail(
                to=entered_email.strip(),
                subject=self._settings.probe_subject,
                body=self._settings.access_check_body,
            )
        except TransportError as exc:
            # Sem permissão Send-As, por exemplo
            logger.info(
                "access_check_send_failed",
                extra={"component": _COMPONENT, "error": str(exc)},
            )
            return NoAccess()
        except Exception as exc:
            logger.warning(
                "access_check_send_unexpected_error",
                extra={"component": _COMPONENT},
                exc_info=True,
            )
            await self._delete_sent_copy(transport, sent_folder)
            return AccessCheckError(message=str(exc))

        await self._sleep(self._settings.propagation_delay_seconds)

        delivered = await self._find_delivery(transport, inbox_folder, target)
        if delivered is None:
            await self._sleep(self._settings.access_retry_delay_seconds)
            delivered = await self._find_delivery(transport, inbox_folder, target)

        if delivered is not None:
            await delete_message(transport, inbox_folder, delivered)
            await self._delete_sent_copy(transport, sent_folder)
            logger.info("access_check_delivered", extra={"component": _COMPONENT})
            return HasAccess()

        await self._delete_sent_copy(transport, sent_folder)
        logger.info("access_check_not_delivered", extra={"component": _COMPONENT})
        return NoAccess()

    async def _find_delivery(
        self,
        transport: MailTransportProtocol,
        inbox: Folder,
        target: str,
    ) -> FoundMessage | None:
        def is_delivery(message: MailMessage) -> bool:
            return (
                subject_matches(message, self._settings.probe_subject)
                and target in message.to_address.lower()
            )

        return await find_message(
            transport,
            inbox,
            is_delivery,
            batch_size=self._settings.sync_batch_size,
            max_batches=self._settings.max_sync_batches,
        )

    async def _delete_sent_copy(
        self,
        transport: MailTransportProtocol,
        sent: Folder | None,
    ) -> bool:
        """Exclui a cópia de Enviados, com uma segunda tentativa após espera."""
        if sent is None:
            return False

        def is_copy(message: MailMessage) -> bool:
            return subject_matches(message, self._settings.probe_subject)

        for attempt in range(2):
            if attempt:
                await self._sleep(self._settings.sent_retry_delay_seconds)
            if await find_and_delete(
                transport,
                sent,
                is_copy,
                batch_size=self._settings.sync_batch_size,
                max_batches=self._settings.max_sync_batches,
            ):
                return True
        return False
