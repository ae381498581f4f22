import logging

import structlog

from constants.messages import Messages
from core.config import Settings
from core.logger import setup_logging


def test_settings_defaults():
    config = Settings(_env_file=None)
    assert config.OPENTDB_BASE_URL == "https://opentdb.com"
    assert config.MIN_QUESTIONS == 1
    assert config.MAX_QUESTIONS == 50
    assert config.DEFAULT_TIMER_SECONDS == 120
    assert config.TIMER_TICK_SECONDS == 1.0


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("OPENTDB_BASE_URL", "http://localhost:9000")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")
    config = Settings(_env_file=None)
    assert config.OPENTDB_BASE_URL == "http://localhost:9000"
    assert config.HTTP_TIMEOUT_SECONDS == 2.5


def test_setup_logging_emits_json(caplog):
    setup_logging(level="DEBUG", json_logs=True)
    try:
        with caplog.at_level(logging.DEBUG):
            structlog.get_logger("trivia.test").info("Questions fetched", count=3)
        messages = [record.getMessage() for record in caplog.records]
        assert any('"event": "Questions fetched"' in m and '"count": 3' in m for m in messages)
    finally:
        structlog.reset_defaults()


def test_messages_fall_back_to_english():
    assert Messages.get("API_ERROR", "UZ") == "API Error: Response code {code}"
    assert Messages.get("NO_SUCH_KEY") == "NO_SUCH_KEY"
    assert Messages.describe_api_code(1).startswith("No Results")
    assert Messages.describe_api_code(99) == "Unknown response code"
