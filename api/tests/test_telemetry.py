from __future__ import annotations

import logging

import pytest

import jobly.core.telemetry as telemetry


def _make_record() -> logging.LogRecord:
    return logging.getLogRecordFactory()("jobly.test", logging.INFO, __file__, 1, "hello", (), None)


def test_configure_api_logging_leaves_record_factory_when_correlation_disabled(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(telemetry, "_LOG_CORRELATION_INSTALLED", False)
    original = logging.getLogRecordFactory()
    try:
        telemetry.configure_api_logging("INFO", log_correlation=False)

        assert logging.getLogRecordFactory() is original
        assert telemetry._LOG_CORRELATION_INSTALLED is False
    finally:
        logging.setLogRecordFactory(original)


def test_configure_api_logging_adds_trace_fields_when_correlation_enabled(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(telemetry, "_LOG_CORRELATION_INSTALLED", False)
    original = logging.getLogRecordFactory()
    try:
        telemetry.configure_api_logging("INFO", log_correlation=True)

        record = _make_record()
        assert record.trace_id == "0" * 32
        assert record.span_id == "0" * 16
    finally:
        logging.setLogRecordFactory(original)


def test_parse_headers_skips_malformed_items() -> None:
    assert telemetry._parse_headers("authorization=Bearer x, broken, =empty,team = core") == {
        "authorization": "Bearer x",
        "team": "core",
    }
