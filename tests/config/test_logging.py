"""Testes de config.logging.

Cobre: configure_logging, get_logger, log_fallback, CorrelationIdFilter,
create_json_formatter e a saída JSON completa.
"""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from config.logging import (
    CONTENT_FIELDS,
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    CorrelationIdFilter,
    RecordContentFilter,
    build_handler,
    configure_logging,
    create_json_formatter,
    get_logger,
    log_fallback,
)
from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "msg", name: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name=name,
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_default_level(self) -> None:
        """Nível padrão INFO."""
        configure_logging()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize("level", ["debug", "WARNING", "Error", "CRITICAL"])
    def test_level_is_case_insensitive(self, level: str) -> None:
        configure_logging(level=level)
        assert logging.getLogger().level == logging.getLevelName(level.upper())

    def test_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="VERBOSE")

    def test_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_installs_correlation_filter(self) -> None:
        configure_logging(correlation_id_getter=lambda: "corr-1")
        handler = logging.getLogger().handlers[0]
        assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)

    def test_constants(self) -> None:
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "agenda_gateway"


class TestGetLogger:
    def test_same_name_returns_same_instance(self) -> None:
        logger = get_logger("gateway.test")
        assert isinstance(logger, logging.Logger)
        assert logger is get_logger("gateway.test")


class TestLogFallback:
    """Testes para log_fallback."""

    def test_basic(self) -> None:
        """Formato lazy com componente no extra."""
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "search_reminders")
        args, kwargs = logger.info.call_args
        assert args == ("Fallback applied for %s", "search_reminders")
        assert kwargs["extra"] == {"fallback_used": True, "component": "search_reminders"}

    def test_with_reason_and_elapsed(self) -> None:
        logger = MagicMock(spec=logging.Logger)
        log_fallback(logger, "search_reminders", reason="store_returned_none", elapsed_ms=3.5)
        extra = logger.info.call_args[1]["extra"]
        assert extra["reason"] == "store_returned_none"
        assert extra["elapsed_ms"] == 3.5


class TestCorrelationIdFilter:
    """Testes para CorrelationIdFilter."""

    def test_adds_correlation_id_and_service(self) -> None:
        filter_ = CorrelationIdFilter("agenda", lambda: "corr-123")
        record = _record()
        assert filter_.filter(record) is True
        assert record.correlation_id == "corr-123"
        assert record.service == "agenda"

    def test_preserves_explicit_correlation_id(self) -> None:
        filter_ = CorrelationIdFilter("svc", lambda: "from-getter")
        record = _record()
        record.correlation_id = "explicit-id"
        filter_.filter(record)
        assert record.correlation_id == "explicit-id"

    def test_empty_without_getter(self) -> None:
        filter_ = CorrelationIdFilter("svc")
        record = _record()
        filter_.filter(record)
        assert record.correlation_id == ""


class TestRecordContentFilter:
    """Máscara de conteúdo de eventos e lembretes."""

    def test_masks_content_fields(self) -> None:
        record = _record()
        record.title = "Consulta médica"
        record.notes = "levar exames"
        record.entity_kind = "event"

        assert RecordContentFilter().filter(record) is True
        assert record.title == "[REDACTED]"
        assert record.notes == "[REDACTED]"
        assert record.entity_kind == "event"

    def test_custom_fields(self) -> None:
        record = _record()
        record.title = "x"
        record.calendar_id = "cal-1"

        RecordContentFilter(fields={"calendar_id"}).filter(record)

        assert record.calendar_id == "[REDACTED]"
        assert record.title == "x"

    def test_default_fields(self) -> None:
        assert {"title", "notes", "due"} <= CONTENT_FIELDS

    def test_handler_carries_both_filters(self) -> None:
        handler = build_handler("info", "svc")
        kinds = {type(f) for f in handler.filters}
        assert kinds == {CorrelationIdFilter, RecordContentFilter}
        assert handler.level == logging.INFO


class TestCreateJsonFormatter:
    def test_constants(self) -> None:
        assert {
            "asctime",
            "levelname",
            "name",
            "message",
            "correlation_id",
            "service",
        } == REQUIRED_LOG_FIELDS
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_formats_record_with_renamed_fields(self) -> None:
        formatter = create_json_formatter()
        record = _record("gateway_dispatch", name="gateway.services")
        record.correlation_id = "abc-123"
        record.service = "agenda_gateway"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "gateway_dispatch"
        assert payload["logger"] == "gateway.services"
        assert payload["level"] == "INFO"
        assert payload["correlation_id"] == "abc-123"


class TestLoggingIntegration:
    """Fluxo completo: configure, get_logger, log."""

    def test_extra_fields_reach_json_output(self) -> None:
        stream = io.StringIO()
        configure_logging(
            level="DEBUG",
            service_name="integration_test",
            correlation_id_getter=lambda: "int-test-001",
            stream=stream,
        )

        get_logger("integration.test").warning(
            "gateway_store_error",
            extra={"entity_kind": "event", "result": "unhandled", "title": "Dentista"},
        )

        payload = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert payload["service"] == "integration_test"
        assert payload["correlation_id"] == "int-test-001"
        assert payload["entity_kind"] == "event"
        assert payload["result"] == "unhandled"
        assert payload["level"] == "WARNING"
        assert payload["title"] == "[REDACTED]"
