"""Settings da verificação de identidade da caixa postal.

O assunto e o corpo da mensagem de teste são constantes de
configuração, nunca conteúdo digitado pelo usuário: a limpeza em
Enviados e no Inbox localiza as cópias comparando o assunto.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_PROBE_SUBJECT = "Account verification"
DEFAULT_PROBE_BODY = (
    "This message was sent automatically while adding this account "
    "to your mail client. It will be deleted shortly."
)
DEFAULT_ACCESS_CHECK_BODY = "Verification: checking access to mailbox"


@dataclass(frozen=True)
class VerificationSettings:
    """Configurações da verificação de identidade.

    Attributes:
        probe_subject: Assunto fixo da mensagem de teste
        probe_body: Corpo da mensagem do round trip
        access_check_body: Corpo da mensagem da checagem de acesso
        propagation_delay_seconds: Espera entre SendMail e a primeira leitura
        sent_retry_delay_seconds: Espera antes da segunda busca em Enviados
        access_retry_delay_seconds: Espera antes da segunda busca no Inbox
            durante a checagem de acesso
        sync_batch_size: Itens pedidos por lote ao paginar uma pasta
        max_sync_batches: Limite de lotes por busca
    """

    probe_subject: str = DEFAULT_PROBE_SUBJECT
    probe_body: str = DEFAULT_PROBE_BODY
    access_check_body: str = DEFAULT_ACCESS_CHECK_BODY
    propagation_delay_seconds: float = 3.0
    sent_retry_delay_seconds: float = 3.0
    access_retry_delay_seconds: float = 4.0
    sync_batch_size: int = 50
    max_sync_batches: int = 30

    def validate(self) -> list[str]:
        """Valida configurações mínimas.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if not self.probe_subject.strip():
            errors.append("VERIFICATION_PROBE_SUBJECT não pode ser vazio")
        for name, value in (
            ("VERIFICATION_PROPAGATION_DELAY_SECONDS", self.propagation_delay_seconds),
            ("VERIFICATION_SENT_RETRY_DELAY_SECONDS", self.sent_retry_delay_seconds),
            ("VERIFICATION_ACCESS_RETRY_DELAY_SECONDS", self.access_retry_delay_seconds),
        ):
            if value < 0:
                errors.append(f"{name} deve ser >= 0")
        if self.sync_batch_size < 1:
            errors.append("VERIFICATION_SYNC_BATCH_SIZE deve ser >= 1")
        if self.max_sync_batches < 1:
            errors.append("VERIFICATION_MAX_SYNC_BATCHES deve ser >= 1")
        return errors


def _load_from_env() -> VerificationSettings:
    """Carrega VerificationSettings de variáveis de ambiente."""
    return VerificationSettings(
        probe_subject=os.getenv("VERIFICATION_PROBE_SUBJECT", DEFAULT_PROBE_SUBJECT),
        probe_body=os.getenv("VERIFICATION_PROBE_BODY", DEFAULT_PROBE_BODY),
        access_check_body=os.getenv(
            "VERIFICATION_ACCESS_CHECK_BODY", DEFAULT_ACCESS_CHECK_BODY
        ),
        propagation_delay_seconds=float(
            os.getenv("VERIFICATION_PROPAGATION_DELAY_SECONDS", "3.0")
        ),
        sent_retry_delay_seconds=float(
            os.getenv("VERIFICATION_SENT_RETRY_DELAY_SECONDS", "3.0")
        ),
        access_retry_delay_seconds=float(
            os.getenv("VERIFICATION_ACCESS_RETRY_DELAY_SECONDS", "4.0")
        ),
        sync_batch_size=int(os.getenv("VERIFICATION_SYNC_BATCH_SIZE", "50")),
        max_sync_batches=int(os.getenv("VERIFICATION_MAX_SYNC_BATCHES", "30")),
    )


@lru_cache(maxsize=1)
def get_verification_settings() -> VerificationSettings:
    """Retorna instância cacheada de VerificationSettings."""
    return _load_from_env()
