"""Filters de logging da verificação.

- CorrelationIdFilter: injeta correlation_id (uma tentativa de
  verificação) e service em cada record
- AddressRedactionFilter: mascara a parte local de endereços de email
  que escapem para a mensagem ou para campos `extra`

O domínio do endereço é mantido; os eventos da verificação usam o
domínio para diagnóstico de federação e caixas compartilhadas.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

# Parte local seguida de "@domínio"; \w cobre endereços internacionalizados
_LOCAL_PART_RE: Final = re.compile(r"[\w.%+-]+@(?=[\w-]+(?:\.[\w-]+)*)")

LOCAL_PART_MASK: Final = "[EMAIL]@"

# Atributos que todo LogRecord já traz; o resto veio de `extra`
_STANDARD_RECORD_ATTRS: Final = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def redact_addresses(text: str) -> str:
    """Mascara a parte local de cada endereço encontrado no texto.

    Exemplo:
        >>> redact_addresses("mismatch for jane.doe@corp.com")
        'mismatch for [EMAIL]@corp.com'
    """
    if "@" not in text:
        return text
    return _LOCAL_PART_RE.sub(LOCAL_PART_MASK, text)


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca descarta.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name
        return True


class AddressRedactionFilter(logging.Filter):
    """Remove endereços de email completos de mensagem, args e `extra`.

    Mensagens de erro do servidor EAS às vezes repetem o endereço da
    conta (ex: "Mailbox jane@corp.com not found"); elas entram nos logs
    via `extra={"error": str(exc)}`.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact_addresses(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_addresses(arg) if isinstance(arg, str) else arg for arg in record.args
            )

        for key, value in list(vars(record).items()):
            if key in _STANDARD_RECORD_ATTRS or not isinstance(value, str):
                continue
            setattr(record, key, redact_addresses(value))
        return True
