"""Centralized configuration for the Music Interpreter.

This module provides a single source of truth for all configuration values
and environment variables used throughout the application.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .music_interpreter.expressions import MAX_REPEAT_COUNT

TRUE_VALUES = ("true", "1", "yes", "on")


@dataclass
class InterpreterConfig:
    """Interactive session configuration."""

    max_repeat_count: int = MAX_REPEAT_COUNT
    rule_width: int = 50  # Width of the "=" rules around the menu
    preload_examples: bool = False


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str = "music_interpreter.log"

    # Module-specific log levels
    interpreter_log_level: str = "INFO"
    cli_log_level: str = "INFO"


@dataclass
class AppConfig:
    """Main application configuration."""

    # Component configurations
    interpreter: InterpreterConfig = field(default_factory=InterpreterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Application metadata
    app_name: str = "Music Interpreter"
    version: str = "0.1.0"
    debug: bool = False

    def __post_init__(self):
        """Load environment variables and validate configuration."""
        self._load_from_environment()
        self._validate_config()

    def _load_from_environment(self):
        """Load configuration from environment variables."""
        # Load .env file if it exists
        load_dotenv()

        # Interpreter configuration
        self.interpreter.max_repeat_count = int(
            os.getenv("MUSIC_MAX_REPEAT_COUNT", str(self.interpreter.max_repeat_count))
        )
        self.interpreter.rule_width = int(
            os.getenv("MUSIC_RULE_WIDTH", str(self.interpreter.rule_width))
        )
        self.interpreter.preload_examples = (
            os.getenv(
                "MUSIC_PRELOAD_EXAMPLES", str(self.interpreter.preload_examples)
            ).lower()
            in TRUE_VALUES
        )

        # Logging configuration
        self.logging.level = os.getenv("LOG_LEVEL", self.logging.level).upper()
        self.logging.file = os.getenv("LOG_FILE", self.logging.file)
        self.logging.interpreter_log_level = os.getenv(
            "INTERPRETER_LOG_LEVEL", self.logging.interpreter_log_level
        ).upper()
        self.logging.cli_log_level = os.getenv(
            "CLI_LOG_LEVEL", self.logging.cli_log_level
        ).upper()

        # Application settings
        self.debug = os.getenv("DEBUG", "false").lower() in TRUE_VALUES

    def _validate_config(self):
        """Validate configuration values."""
        if not (1 <= self.interpreter.max_repeat_count <= MAX_REPEAT_COUNT):
            raise ValueError(
                f"Invalid max repeat count: {self.interpreter.max_repeat_count}. "
                f"Must be between 1-{MAX_REPEAT_COUNT}."
            )

        if not (10 <= self.interpreter.rule_width <= 200):
            raise ValueError(
                f"Invalid rule width: {self.interpreter.rule_width}. "
                "Must be between 10-200."
            )

        # Validate logging levels
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        for level_name, level_value in [
            ("LOG_LEVEL", self.logging.level),
            ("INTERPRETER_LOG_LEVEL", self.logging.interpreter_log_level),
            ("CLI_LOG_LEVEL", self.logging.cli_log_level),
        ]:
            if level_value not in valid_log_levels:
                raise ValueError(
                    f"Invalid {level_name}: {level_value}. Must be one of {valid_log_levels}."
                )


# Global configuration instance
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config


def reload_config():
    """Reload configuration from environment variables."""
    global config
    config = AppConfig()
    return config


# Convenience functions for common configuration access
def get_max_repeat_count() -> int:
    """Get the largest repeat count accepted from the console."""
    return config.interpreter.max_repeat_count
