"""Formatter JSON dos logs da verificação.

Todo log sai como JSON com os campos obrigatórios abaixo. Os nomes
`levelname`/`name` do stdlib são renomeados para `level`/`logger`.
Campos de credencial passados por engano em `extra` saem mascarados.
"""

from __future__ import annotations

from typing import Any, Final

from pythonjsonlogger.json import JsonFormatter

# Campos obrigatórios em todo log estruturado
REQUIRED_LOG_FIELDS = frozenset(
    {
        "asctime",
        "levelname",
        "name",
        "message",
        "correlation_id",
        "service",
    }
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

# Credenciais de ConnectionSettings/TlsOptions
SENSITIVE_FIELDS: Final = frozenset(
    {
        "password",
        "client_certificate_password",
        "authorization",
    }
)

SECRET_MASK: Final = "***"


class VerificationJsonFormatter(JsonFormatter):
    """JsonFormatter que nunca serializa valores de credencial."""

    def process_log_record(self, log_data: dict[str, Any]) -> dict[str, Any]:
        for field in log_data.keys() & SENSITIVE_FIELDS:
            log_data[field] = SECRET_MASK
        return super().process_log_record(log_data)


def create_json_formatter() -> VerificationJsonFormatter:
    """Cria o formatter JSON dos eventos da verificação.

    Exemplo de output:
        {
            "asctime": "2026-10-18T10:30:00",
            "level": "INFO",
            "logger": "app.services.identity.round_trip_probe",
            "message": "round_trip_probe_sent",
            "correlation_id": "abc-123",
            "service": "eas_mailbox_verifier",
            "delay_seconds": 3.0
        }
    """
    format_string = " ".join(f"%({field})s" for field in sorted(REQUIRED_LOG_FIELDS))

    return VerificationJsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
