"""Testes para config.logging.

Cobre: configure_logging, log_fallback, CorrelationIdFilter, a máscara
de endereços e o formato JSON dos eventos da verificação.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    AddressRedactionFilter,
    CorrelationIdFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
    redact_addresses,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def _record(msg: str = "round_trip_probe_sent", name: str = "verifier") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestConfigureLogging:
    """Testes para configure_logging."""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("INFO", logging.INFO),
            ("DEBUG", logging.DEBUG),
            ("warning", logging.WARNING),
            ("ERROR", logging.ERROR),
        ],
    )
    def test_sets_root_level(self, level: str, expected: int) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == expected

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_existing_handlers_and_installs_filter(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]

        configure_logging(correlation_id_getter=lambda: "attempt-1")

        assert len(root.handlers) == 1
        assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)
        assert any(isinstance(f, AddressRedactionFilter) for f in root.handlers[0].filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "eas_mailbox_verifier"

    def test_get_logger_returns_same_instance(self) -> None:
        assert get_logger("app.services.identity") is get_logger("app.services.identity")


class TestLogFallback:
    """Evento de fallback da verificação."""

    def test_lazy_message_and_extra(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "verification", reason="send_failed", elapsed_ms=12.5)

        args, kwargs = logger.info.call_args
        assert args == ("Fallback applied for %s", "verification")
        assert kwargs["extra"] == {
            "fallback_used": True,
            "component": "verification",
            "reason": "send_failed",
            "elapsed_ms": 12.5,
        }

    def test_optional_fields_are_omitted(self) -> None:
        logger = MagicMock(spec=logging.Logger)

        log_fallback(logger, "verification")

        extra = logger.info.call_args[1]["extra"]
        assert "reason" not in extra
        assert "elapsed_ms" not in extra


class TestCorrelationIdFilter:
    """Injeção de correlation_id e service."""

    def test_adds_correlation_id_from_getter(self) -> None:
        record = _record()

        assert CorrelationIdFilter("verifier", lambda: "attempt-7").filter(record) is True
        assert record.correlation_id == "attempt-7"
        assert record.service == "verifier"

    def test_preserves_explicit_correlation_id(self) -> None:
        record = _record()
        record.correlation_id = "explicit"

        CorrelationIdFilter("verifier", lambda: "from-getter").filter(record)

        assert record.correlation_id == "explicit"

    def test_empty_string_without_getter(self) -> None:
        record = _record()

        CorrelationIdFilter("verifier").filter(record)

        assert record.correlation_id == ""


class TestJsonFormatter:
    """Formato JSON dos logs."""

    def test_required_fields_and_renames(self) -> None:
        assert {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        } == REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_formats_record_with_renamed_fields_and_extra(self) -> None:
        record = _record(name="app.services.identity.round_trip_probe")
        record.correlation_id = "attempt-9"
        record.service = "eas_mailbox_verifier"
        record.delay_seconds = 3.0

        payload = json.loads(create_json_formatter().format(record))

        assert payload["message"] == "round_trip_probe_sent"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.services.identity.round_trip_probe"
        assert payload["correlation_id"] == "attempt-9"
        assert payload["delay_seconds"] == 3.0

    def test_masks_credential_fields(self) -> None:
        record = _record()
        record.correlation_id = "attempt-9"
        record.service = "eas_mailbox_verifier"
        record.password = "s3cret"
        record.client_certificate_password = "p12-secret"

        output = create_json_formatter().format(record)

        assert "s3cret" not in output
        assert "p12-secret" not in output
        assert json.loads(output)["password"] == "***"


class TestAddressRedaction:
    """Parte local de endereços nunca chega à saída."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Mailbox jane.doe@corp.com not found", "Mailbox [EMAIL]@corp.com not found"),
            ("<иван@почта.рф>", "<[EMAIL]@почта.рф>"),
            ("a@b.com, c+tag@d.org", "[EMAIL]@b.com, [EMAIL]@d.org"),
            ("/O=CORP/CN=RECIPIENTS/CN=JANE", "/O=CORP/CN=RECIPIENTS/CN=JANE"),
            ("round_trip_probe_sent", "round_trip_probe_sent"),
        ],
    )
    def test_redact_addresses(self, text: str, expected: str) -> None:
        assert redact_addresses(text) == expected

    def test_redaction_is_stable(self) -> None:
        once = redact_addresses("jane@corp.com")

        assert redact_addresses(once) == once

    def test_filter_redacts_message_args_and_extra(self) -> None:
        record = logging.LogRecord(
            name="verifier",
            level=logging.WARNING,
            pathname="",
            lineno=0,
            msg="Send failed for %s",
            args=("jane@corp.com",),
            exc_info=None,
        )
        record.error = "SendMail status 130 for jane@corp.com"
        record.folder_count = 3

        assert AddressRedactionFilter().filter(record) is True
        assert record.getMessage() == "Send failed for [EMAIL]@corp.com"
        assert record.error == "SendMail status 130 for [EMAIL]@corp.com"
        assert record.folder_count == 3

    def test_configured_output_has_no_full_address(self, capsys) -> None:
        configure_logging(level="INFO", correlation_id_getter=lambda: "attempt-1")

        logging.getLogger("verifier").warning(
            "verification_folder_sync_failed",
            extra={"error": "Mailbox jane@corp.com not found"},
        )

        err = capsys.readouterr().err
        payload = json.loads(err.strip().splitlines()[-1])
        assert "jane@corp.com" not in err
        assert payload["error"] == "Mailbox [EMAIL]@corp.com not found"
        assert payload["correlation_id"] == "attempt-1"
