"""Logging configuration for panel-ai-action.

@public

Integrates with Prefect's logging system so that agent runs dispatched as
Prefect background tasks log through the same handlers as inline runs.
Prefect's get_logger() places every package logger under "prefect.", so
the package tree is rooted at "prefect.panel_ai_action".

Usage:
    >>> from panel_ai_action.logging import get_pipeline_logger
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Agent started")

The config file and level come from Settings (PANEL_AI_ACTION_LOGGING_CONFIG
or PREFECT_LOGGING_SETTINGS_PATH, and PANEL_AI_ACTION_LOG_LEVEL).
"""

import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

from panel_ai_action.settings import settings

PACKAGE_LOGGER = "panel_ai_action"


class LoggingConfig:
    """Builds and applies the package logging configuration.

    @public

    Configuration precedence:
        1. Explicit config_path parameter
        2. settings.logging_config
        3. Default configuration at settings.log_level (or level)

    Note:
        Configuration is lazy-loaded and cached after first access.
    """

    def __init__(self, config_path: Optional[Path] = None, level: Optional[str] = None):
        self.config_path = config_path or settings.logging_config
        self.level = level or settings.log_level
        self._config: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        """Load logging configuration from file or defaults.

        Returns:
            Dictionary in logging.config.dictConfig format. Cached after
            the first call; create a new LoggingConfig to reload from disk.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        return self._config

    def _get_default_config(self) -> Dict[str, Any]:
        """Default format: "HH:MM:SS.mmm | LEVEL | logger.name - message"."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                get_logger(PACKAGE_LOGGER).name: {
                    "level": self.level.upper(),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }

    def apply(self):
        """Apply the configuration with logging.config.dictConfig."""
        logging.config.dictConfig(self.load_config())


_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Setup logging for panel-ai-action.

    @public

    Args:
        config_path: YAML logging configuration; defaults to settings.logging_config.
        level: Level for the package logger tree; defaults to settings.log_level.
               An explicit level also overrides what a config file sets.

    Example:
        >>> setup_logging(level="DEBUG")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path, level)
    _logging_config.apply()

    if level:
        get_logger(PACKAGE_LOGGER).setLevel(level.upper())


def get_pipeline_logger(name: str):
    """Get a Prefect-integrated logger, initializing logging on first use.

    @public

    Args:
        name: Logger name, typically __name__.
    """
    if _logging_config is None:
        setup_logging()

    return get_logger(name)
