"""Fechamento do transporte criado por tentativa."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.mail_transport import MailTransportProtocol

logger = logging.getLogger(__name__)


async def close_transport(transport: MailTransportProtocol, component: str) -> None:
    """Fecha o transporte; falha no fechamento não altera o resultado."""
    try:
        await transport.aclose()
    except Exception:
        logger.warning(
            "transport_close_failed",
            extra={"component": component},
            exc_info=True,
        )
