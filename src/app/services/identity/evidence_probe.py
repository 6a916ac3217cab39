"""Leitura passiva de evidência em pastas que a caixa já possui.

Antes de qualquer ação invasiva, a verificação lê uma mensagem de
Itens Enviados (campo From) ou da Caixa de Entrada (campo To). Falha
de rede ou pasta vazia não é erro: apenas não há evidência ali.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from app.services.identity.address_normalizer import (
    address_domain,
    extract_address,
    is_usable_address,
)
from utils.errors import TransportError

if TYPE_CHECKING:
    from app.domain.mailbox import Folder, MailMessage
    from app.protocols.mail_transport import MailTransportProtocol

logger = logging.getLogger(__name__)

_COMPONENT = "evidence_probe"


class AddressField(StrEnum):
    """Campo do cabeçalho lido como evidência."""

    FROM = "from"
    TO = "to"


def _read_field(message: MailMessage, field: AddressField) -> str:
    if field is AddressField.FROM:
        return message.from_address
    return message.to_address


async def check_folder(
    transport: MailTransportProtocol,
    folder: Folder,
    field: AddressField,
) -> str | None:
    """Extrai o endereço normalizado de uma mensagem da pasta.

    Args:
        transport: Transporte EAS da tentativa atual
        folder: Pasta a consultar (Sent ou Inbox)
        field: FROM para Sent, TO para Inbox

    Returns:
        Endereço normalizado com `@`, ou None se não houver evidência.
    """
    try:
        message = await transport.fetch_one_message(folder.server_id)
    except TransportError as exc:
        logger.info(
            "evidence_fetch_failed",
            extra={
                "component": _COMPONENT,
                "folder_type": folder.type,
                "field": field.value,
                "error": str(exc),
            },
        )
        return None
    except Exception:
        logger.warning(
            "evidence_fetch_unexpected_error",
            extra={"component": _COMPONENT, "folder_type": folder.type},
            exc_info=True,
        )
        return None

    if message is None:
        logger.debug(
            "evidence_folder_empty",
            extra={"component": _COMPONENT, "folder_type": folder.type},
        )
        return None

    address = extract_address(_read_field(message, field))
    if not is_usable_address(address):
        # DN sem SMTP resolvível ou cabeçalho vazio
        logger.info(
            "evidence_address_unusable",
            extra={
                "component": _COMPONENT,
                "folder_type": folder.type,
                "field": field.value,
            },
        )
        return None

    logger.debug(
        "evidence_address_found",
        extra={
            "component": _COMPONENT,
            "folder_type": folder.type,
            "field": field.value,
            "domain": address_domain(address),
        },
    )
    return address
