"""Settings and logging configuration tests."""

import io
import json
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from src.config import Settings, get_settings
from src.logging_config import setup_logging


def test_defaults(settings):
    assert settings.fetch_timeout_seconds == 5.0
    assert settings.max_html_bytes == 500_000
    assert settings.max_redirects == 3
    assert settings.max_images == 30
    assert settings.harvest_target_colors == 16
    assert settings.palette_target_colors == 20
    assert settings.palette_min_css_colors == 3
    assert settings.accept_language == "ja,en;q=0.9"
    assert "Mozilla/5.0" in settings.user_agent


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("MAX_IMAGES", "10")
    monkeypatch.setenv("UNRELATED_VARIABLE", "ignored")

    settings = Settings(_env_file=None)

    assert settings.fetch_timeout_seconds == 2.5
    assert settings.max_images == 10


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()


# --- logging ---


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    noisy = {name: logging.getLogger(name).level for name in ("httpx", "httpcore")}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy.items():
        logging.getLogger(name).setLevel(noisy_level)


def test_setup_logging_installs_json_handler(restore_logging):
    setup_logging("debug")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_setup_logging_never_lowers_http_loggers_below_root(restore_logging):
    setup_logging("ERROR")
    assert logging.getLogger("httpx").level == logging.ERROR


def test_log_records_are_json(restore_logging, capsys):
    setup_logging("INFO")

    logging.getLogger("src.extraction.engine").info("extraction started", extra={"url": "https://example.com/"})

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "extraction started"
    assert record["level"] == "INFO"
    assert record["logger"] == "src.extraction.engine"
    assert record["url"] == "https://example.com/"
    assert "timestamp" in record


def test_setup_logging_writes_to_given_stream(restore_logging, capsys):
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)

    logging.getLogger("src.cli").warning("extraction failed")

    assert capsys.readouterr().out == ""
    record = json.loads(stream.getvalue().strip())
    assert record["message"] == "extraction failed"
    assert record["level"] == "WARNING"


def test_unknown_level_falls_back_to_info(restore_logging):
    setup_logging("chatty")
    assert logging.getLogger().level == logging.INFO
