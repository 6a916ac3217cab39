"""Busca e exclusão da mensagem de teste dentro de uma pasta.

O Sync do EAS pagina: o primeiro pedido com syncKey "0" só devolve o
cursor, e cada pedido seguinte devolve um lote e indica se há mais
itens. A mensagem recém-enviada pode estar em qualquer lote, então a
busca percorre lotes até achar, esgotar a pasta ou atingir o limite.

Nenhuma função aqui levanta exceção para o chamador (exceto
`asyncio.CancelledError`); falhas são registradas e tratadas como
"não encontrado" ou "não excluído".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.domain.mailbox import FolderType
from app.observability import record_probe_cleanup

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.domain.mailbox import Folder, MailMessage
    from app.protocols.mail_transport import MailTransportProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "mailbox_scan"
_INITIAL_SYNC_KEY = "0"


@dataclass(frozen=True, slots=True)
class FoundMessage:
    """Mensagem localizada e o syncKey do lote em que apareceu."""

    message: MailMessage
    sync_key: str


def subject_matches(message: MailMessage, subject: str) -> bool:
    """Assunto igual ao da mensagem de teste, sem diferenciar caixa.

    Igualdade (e não "contém") para nunca apagar uma resposta ou
    encaminhamento do usuário.
    """
    return message.subject.strip().casefold() == subject.strip().casefold()


async def find_message(
    transport: MailTransportProtocol,
    folder: Folder,
    predicate: Callable[[MailMessage], bool],
    *,
    batch_size: int,
    max_batches: int,
) -> FoundMessage | None:
    """Percorre os lotes da pasta até achar uma mensagem que satisfaça `predicate`."""
    try:
        primed = await transport.sync(folder.server_id, _INITIAL_SYNC_KEY, 1)
        sync_key = primed.sync_key

        for _ in range(max_batches):
            response = await transport.sync(folder.server_id, sync_key, batch_size)
            sync_key = response.sync_key

            match = next((m for m in response.messages if predicate(m)), None)
            if match is not None:
                return FoundMessage(message=match, sync_key=sync_key)

            if not response.more_available or not response.messages:
                break
    except Exception as exc:
        logger.info(
            "mailbox_scan_sync_failed",
            extra={
                "component": _COMPONENT,
                "folder_type": folder.type,
                "error": str(exc),
            },
        )
    return None


async def delete_message(
    transport: MailTransportProtocol,
    folder: Folder,
    found: FoundMessage,
) -> bool:
    """Exclui permanentemente a mensagem; falha vira False e métrica."""
    location = "sent" if folder.type == FolderType.SENT_ITEMS else "inbox"
    try:
        await transport.delete_email_permanently(
            folder.server_id,
            found.message.server_id,
            found.sync_key,
        )
    except Exception as exc:
        # Mensagem de teste fica órfã; não afeta o resultado
        logger.warning(
            "mailbox_scan_delete_failed",
            extra={"component": _COMPONENT, "location": location, "error": str(exc)},
        )
        record_probe_cleanup(location, deleted=False)
        return False

    record_probe_cleanup(location, deleted=True)
    return True


async def find_and_delete(
    transport: MailTransportProtocol,
    folder: Folder,
    predicate: Callable[[MailMessage], bool],
    *,
    batch_size: int,
    max_batches: int,
) -> bool:
    """Localiza e exclui a primeira mensagem que satisfaça `predicate`."""
    found = await find_message(
        transport,
        folder,
        predicate,
        batch_size=batch_size,
        max_batches=max_batches,
    )
    if found is None:
        logger.info(
            "mailbox_scan_message_missing",
            extra={"component": _COMPONENT, "folder_type": folder.type},
        )
        return False
    return await delete_message(transport, folder, found)
