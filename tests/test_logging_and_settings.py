import json
import logging
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from posdevices.core.logging import JsonLogFormatter
from posdevices.middlewares import request_id_ctx_var
from posdevices.settings import AppSettings


def _record(message: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("posdevices.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_request_id_and_extra():
    token = request_id_ctx_var.set("req-42")
    try:
        line = JsonLogFormatter().format(_record("device.invalid", extra_data={"device_id": "P1"}))
    finally:
        request_id_ctx_var.reset(token)
    payload = json.loads(line)
    assert payload["message"] == "device.invalid"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-42"
    assert payload["device_id"] == "P1"
    assert payload["timestamp"].endswith("Z")


def test_json_formatter_without_request_context():
    payload = json.loads(JsonLogFormatter().format(_record("plain")))
    assert "request_id" not in payload


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("HARDWARE_API_BASE_URL", "https://backoffice.test/api/v1/")
    monkeypatch.setenv("API_TOKEN", "tok")
    settings = AppSettings(_env_file=None)
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.HARDWARE_API_BASE_URL == "https://backoffice.test/api/v1"
    assert settings.HARDWARE_API_TOKEN == "tok"


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)
