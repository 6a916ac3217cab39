"""Round trip ativo: fabrica evidência quando a caixa não tem nenhuma.

Envia uma mensagem de teste para o próprio endereço digitado, espera
a propagação no servidor, localiza a cópia em Itens Enviados pelo
assunto (o From dela é a evidência) e apaga as duas cópias: a de
Enviados e a auto-entregue na Caixa de Entrada.

Se a cópia ainda não aparece em Enviados, há uma segunda busca após
outra espera curta. A cópia de Enviados é apagada sempre que
encontrada, independentemente do desfecho da comparação.

Nada aqui levanta exceção para o chamador, com exceção de
`asyncio.CancelledError`: se a tentativa for cancelada, nenhuma
limpeza adicional é tentada e a mensagem de teste fica órfã.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.mailbox import Folder, FolderType, ProbeMessage
from app.services.identity.address_normalizer import extract_address, is_usable_address
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

    from app.domain.mailbox import MailMessage
    from app.protocols.mail_transport import MailTransportProtocol
    from config.settings import VerificationSettings

logger = logging.getLogger(__name__)

_COMPONENT = "round_trip_probe"


@dataclass(frozen=True, slots=True)
class RoundTripReport:
    """O que o round trip conseguiu observar e limpar.

    Attributes:
        evidence: From normalizado da cópia em Enviados, ou None
        send_failed: SendMail falhou; nada mais foi tentado
        probe: Cópia encontrada em Enviados
        sent_copy_deleted: Cópia de Enviados excluída
        inbox_copy_deleted: Cópia auto-entregue excluída do Inbox
    """

    evidence: str | None = None
    send_failed: bool = False
    probe: ProbeMessage | None = None
    sent_copy_deleted: bool = False
    inbox_copy_deleted: bool = False

    @property
    def is_conclusive(self) -> bool:
        return self.evidence is not None


class RoundTripProbe:
    """Estratégia de último recurso da verificação."""

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
        candidate_email: str,
        sent_folder: Folder | None,
        inbox_folder: Folder | None,
    ) -> RoundTripReport:
        """Executa envio, espera, leitura e limpeza.

        Args:
            transport: Transporte da tentativa atual
            candidate_email: Endereço digitado (destinatário do teste)
            sent_folder: Itens Enviados, se listado no FolderSync
            inbox_folder: Caixa de Entrada, se listada no FolderSync

        Returns:
            RoundTripReport; `evidence=None` significa inconclusivo.
        """
        if not await self._send_probe(transport, candidate_email):
            return RoundTripReport(send_failed=True)

        # Sem push para "mensagem entregue": espera fixa antes de ler
        await self._sleep(self._settings.propagation_delay_seconds)

        evidence: str | None = None
        probe: ProbeMessage | None = None
        sent_deleted = False

        sent = sent_folder or await self._discover_sent_folder(transport)
        if sent is not None:
            found = await self._find_sent_copy(transport, sent)
            if found is None:
                logger.info("round_trip_sent_copy_missing", extra={"component": _COMPONENT})
                await self._sleep(self._settings.sent_retry_delay_seconds)
                found = await self._find_sent_copy(transport, sent)

            if found is not None:
                probe = _to_probe_message(found)
                address = extract_address(probe.from_address)
                if is_usable_address(address):
                    evidence = address
                sent_deleted = await delete_message(transport, sent, found)

        inbox_deleted = False
        if inbox_folder is not None:
            inbox_deleted = await find_and_delete(
                transport,
                inbox_folder,
                self._is_test_copy,
                batch_size=self._settings.sync_batch_size,
                max_batches=self._settings.max_sync_batches,
            )

        return RoundTripReport(
            evidence=evidence,
            probe=probe,
            sent_copy_deleted=sent_deleted,
            inbox_copy_deleted=inbox_deleted,
        )

    def _is_test_copy(self, message: MailMessage) -> bool:
        return subject_matches(message, self._settings.probe_subject)

    async def _send_probe(
        self,
        transport: MailTransportProtocol,
        candidate_email: str,
    ) -> bool:
        try:
            await transport.send_mail(
                to=candidate_email,
                subject=self._settings.probe_subject,
                body=self._settings.probe_body,
            )
        except TransportError as exc:
            logger.info(
                "round_trip_send_failed",
                extra={"component": _COMPONENT, "error": str(exc)},
            )
            return False
        except Exception:
            logger.warning(
                "round_trip_send_unexpected_error",
                extra={"component": _COMPONENT},
                exc_info=True,
            )
            return False

        logger.info(
            "round_trip_probe_sent",
            extra={
                "component": _COMPONENT,
                "delay_seconds": self._settings.propagation_delay_seconds,
            },
        )
        return True

    async def _discover_sent_folder(
        self,
        transport: MailTransportProtocol,
    ) -> Folder | None:
        """Relista as pastas: o servidor pode criar Enviados no primeiro envio."""
        try:
            response = await transport.folder_sync()
        except Exception as exc:
            logger.info(
                "round_trip_sent_discovery_failed",
                extra={"component": _COMPONENT, "error": str(exc)},
            )
            return None
        return response.find_by_type(FolderType.SENT_ITEMS)

    async def _find_sent_copy(
        self,
        transport: MailTransportProtocol,
        sent: Folder,
    ) -> FoundMessage | None:
        return await find_message(
            transport,
            sent,
            self._is_test_copy,
            batch_size=self._settings.sync_batch_size,
            max_batches=self._settings.max_sync_batches,
        )


def _to_probe_message(found: FoundMessage) -> ProbeMessage:
    message = found.message
    return ProbeMessage(
        server_id=message.server_id,
        sync_key=found.sync_key,
        from_address=message.from_address,
        to_address=message.to_address,
        subject=message.subject,
    )
