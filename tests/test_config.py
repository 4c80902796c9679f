import json
import logging
import sys

import pytest

from cms_file_client import config as config_module
from cms_file_client.logging import JsonFormatter


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    monkeypatch.setattr(config_module, "_cached_settings", None)


def test_settings_read_nested_env(monkeypatch):
    monkeypatch.setenv("API__BASE_URL", "https://cms.example/v2/")
    monkeypatch.setenv("API__PUBLIC_KEY", "pub")
    monkeypatch.setenv("API__PRIVATE_KEY", "priv")
    monkeypatch.setenv("MEDIA__CDN_URL", "https://cdn.example")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = config_module.get_settings()

    assert settings.api.base_url == "https://cms.example/v2/"
    assert settings.api.get_auth() == ("pub", "priv")
    assert settings.media.cdn_url == "https://cdn.example"
    assert settings.log_level == "DEBUG"
    assert config_module.get_settings() is settings


def test_auth_requires_both_keys():
    assert config_module.ApiConfig(public_key="pub").get_auth() is None


def test_json_formatter():
    record = logging.LogRecord("cms_file_client.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "cms_file_client.test"
    assert payload["message"] == "hello world"
    assert "time" in payload
    assert "traceback" not in payload


def test_json_formatter_reports_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("cms_file_client.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))

    assert payload["error"] == "ValueError"
    assert "boom" in payload["traceback"]
