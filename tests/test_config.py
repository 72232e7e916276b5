"""Configuration and logging tests."""

from __future__ import annotations

import json
import logging
import sys

import pytest
from pydantic import ValidationError

from app.config import Settings
from app.lib.logger import JsonFormatter


def test_settings_default_address(monkeypatch) -> None:
    monkeypatch.delenv("ADDRESS", raising=False)

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.address == "localhost:8080"
    assert settings.host == "localhost"
    assert settings.port == 8080


def test_settings_read_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ADDRESS", ":9090")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.host == "0.0.0.0"
    assert settings.port == 9090
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "address",
    ["localhost", "localhost:http", "localhost:70000", "::1:8080", "[::1:8080", "[]:8080"],
)
def test_settings_reject_malformed_address(monkeypatch, address: str) -> None:
    monkeypatch.setenv("ADDRESS", address)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)  # type: ignore[call-arg]


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        name="app.metrics.service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="metric_rejected",
        args=(),
        exc_info=None,
    )
    record.error = "invalid_value"
    record.metric_kind = "counter"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "metric_rejected"
    assert payload["level"] == "INFO"
    assert payload["error"] == "invalid_value"
    assert payload["metric_kind"] == "counter"


def test_settings_strip_brackets_from_ipv6_host(monkeypatch) -> None:
    monkeypatch.setenv("ADDRESS", "[::1]:8080")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.address == "[::1]:8080"
    assert settings.host == "::1"
    assert settings.port == 8080


def test_json_formatter_uses_record_time_and_reprs_unserializable_extras() -> None:
    record = logging.LogRecord(
        name="app.main",
        level=logging.ERROR,
        pathname=__file__,
        lineno=1,
        msg="metric_storage_failed",
        args=(),
        exc_info=None,
    )
    record.created = 0.0
    record.metric_name = "Alloc"
    record.backend = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["timestamp"] == "1970-01-01T00:00:00+00:00"
    assert payload["metric_name"] == "Alloc"
    assert payload["backend"].startswith("<object object")
    assert "lineno" not in payload
    assert "exception" not in payload


def test_json_formatter_renders_exception() -> None:
    try:
        raise RuntimeError("backend offline")
    except RuntimeError:
        record = logging.getLogger("app.metrics.service").makeRecord(
            "app.metrics.service",
            logging.ERROR,
            __file__,
            1,
            "metric_storage_failed",
            (),
            sys.exc_info(),
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "RuntimeError: backend offline" in payload["exception"]
