"""Tests for configuration and logging setup."""

import logging

import pytest

from src import config as config_module
from src.config import AppConfig
from src.logging_config import (
    PACKAGE_LOGGER,
    get_logging_config,
    temporary_log_level,
)
from src.music_interpreter.expressions import MAX_REPEAT_COUNT


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove interpreter settings from the environment."""
    for name in [
        "MUSIC_MAX_REPEAT_COUNT",
        "MUSIC_RULE_WIDTH",
        "MUSIC_PRELOAD_EXAMPLES",
        "LOG_LEVEL",
        "LOG_FILE",
        "INTERPRETER_LOG_LEVEL",
        "CLI_LOG_LEVEL",
        "DEBUG",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "load_dotenv", lambda: None)


def test_defaults():
    """Test default configuration values."""
    config = AppConfig()

    assert config.interpreter.max_repeat_count == 100
    assert config.interpreter.rule_width == 50
    assert config.interpreter.preload_examples is False
    assert config.logging.level == "INFO"
    assert config.debug is False


def test_repeat_cap_shared_with_expressions():
    """Test the configured repeat cap defaults to the expression limit."""
    assert config_module.MAX_REPEAT_COUNT is MAX_REPEAT_COUNT
    assert AppConfig().interpreter.max_repeat_count == MAX_REPEAT_COUNT


def test_environment_overrides(monkeypatch):
    """Test values are read from the environment."""
    monkeypatch.setenv("MUSIC_MAX_REPEAT_COUNT", "12")
    monkeypatch.setenv("MUSIC_RULE_WIDTH", "30")
    monkeypatch.setenv("MUSIC_PRELOAD_EXAMPLES", "yes")
    monkeypatch.setenv("INTERPRETER_LOG_LEVEL", "debug")
    monkeypatch.setenv("DEBUG", "1")

    config = AppConfig()

    assert config.interpreter.max_repeat_count == 12
    assert config.interpreter.rule_width == 30
    assert config.interpreter.preload_examples is True
    assert config.logging.interpreter_log_level == "DEBUG"
    assert config.debug is True


@pytest.mark.parametrize(
    "name,value",
    [
        ("MUSIC_MAX_REPEAT_COUNT", "0"),
        ("MUSIC_MAX_REPEAT_COUNT", "101"),
        ("MUSIC_RULE_WIDTH", "5"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values_rejected(monkeypatch, name, value):
    """Test invalid settings fail at load time."""
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        AppConfig()


def test_reload_config(monkeypatch):
    """Test reloading picks up new environment values."""
    original = config_module.get_config()
    try:
        monkeypatch.setenv("MUSIC_MAX_REPEAT_COUNT", "7")
        reloaded = config_module.reload_config()

        assert config_module.get_config() is reloaded
        assert config_module.get_max_repeat_count() == 7
    finally:
        config_module.config = original


def test_logging_config_loggers():
    """Test the logging dictionary covers the package loggers."""
    log_config = get_logging_config()

    assert f"{PACKAGE_LOGGER}.music_interpreter" in log_config["loggers"]
    assert f"{PACKAGE_LOGGER}.interpreter_cli" in log_config["loggers"]
    assert log_config["handlers"]["file"]["delay"] is True
    assert log_config["handlers"]["console"]["level"] == "WARNING"


def test_temporary_log_level():
    """Test the log level is restored after the block."""
    logger = logging.getLogger("src.music_interpreter.test")
    logger.setLevel(logging.INFO)

    with temporary_log_level("src.music_interpreter.test", "DEBUG") as temp_logger:
        assert temp_logger.level == logging.DEBUG

    assert logger.level == logging.INFO
