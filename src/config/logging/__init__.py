"""Logging estruturado da verificação de identidade.

Uso:
    from config.logging import configure_logging, get_logger

    # No bootstrap
    configure_logging(level="INFO", service_name="eas_mailbox_verifier")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("folder_sync_completed", extra={"folder_count": 12})

Todo log traz correlation_id (uma tentativa de verificação), service,
level, logger, message e asctime. Eventos usam nomes snake_case e
contexto em `extra`: tipo de pasta, estratégia, domínio. A parte local
de endereços e os campos de credencial são mascarados na saída.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import (
    LOCAL_PART_MASK,
    AddressRedactionFilter,
    CorrelationIdFilter,
    redact_addresses,
)
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    SECRET_MASK,
    SENSITIVE_FIELDS,
    VerificationJsonFormatter,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "LOCAL_PART_MASK",
    "REQUIRED_LOG_FIELDS",
    "SECRET_MASK",
    "SENSITIVE_FIELDS",
    "AddressRedactionFilter",
    "CorrelationIdFilter",
    "VerificationJsonFormatter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
    "redact_addresses",
]
