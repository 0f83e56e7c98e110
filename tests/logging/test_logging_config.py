"""Tests for logging configuration."""

import logging
import os
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from panel_ai_action.logging import get_pipeline_logger, setup_logging
from panel_ai_action.logging.logging_config import LoggingConfig
from panel_ai_action.settings import Settings


def settings_from_env(**env: str) -> Settings:
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


@pytest.fixture
def restore_package_logger():
    """Put the package logger back the way the test found it."""
    logger = logging.getLogger("prefect.panel_ai_action")
    level, handlers, propagate = logger.level, list(logger.handlers), logger.propagate
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers
    logger.propagate = propagate


class TestLoggingConfig:
    """Test LoggingConfig class."""

    def test_config_path_from_settings(self):
        """Test the config path read from PANEL_AI_ACTION_LOGGING_CONFIG."""
        configured = settings_from_env(PANEL_AI_ACTION_LOGGING_CONFIG="/path/to/config.yml")

        with patch("panel_ai_action.logging.logging_config.settings", configured):
            assert LoggingConfig().config_path == Path("/path/to/config.yml")

    def test_package_path_wins_over_prefect_path(self):
        configured = settings_from_env(
            PANEL_AI_ACTION_LOGGING_CONFIG="/ours.yml",
            PREFECT_LOGGING_SETTINGS_PATH="/prefect.yml",
        )
        assert configured.logging_config == Path("/ours.yml")

    def test_prefect_path_is_the_fallback(self):
        configured = settings_from_env(PREFECT_LOGGING_SETTINGS_PATH="/prefect/config.yml")
        assert configured.logging_config == Path("/prefect/config.yml")

    def test_explicit_path_wins_over_settings(self):
        configured = settings_from_env(PANEL_AI_ACTION_LOGGING_CONFIG="/ours.yml")

        with patch("panel_ai_action.logging.logging_config.settings", configured):
            assert LoggingConfig(Path("/explicit.yml")).config_path == Path("/explicit.yml")

    def test_no_config_path_by_default(self):
        with patch("panel_ai_action.logging.logging_config.settings", settings_from_env()):
            assert LoggingConfig().config_path is None

    def test_load_config_from_file(self, tmp_path: Path) -> None:
        """Test loading config from YAML file."""
        config_file = tmp_path / "logging.yml"
        config_file.write_text("""
version: 1
disable_existing_loggers: false
loggers:
  prefect.panel_ai_action:
    level: DEBUG
""")

        loaded = LoggingConfig(config_path=config_file).load_config()

        assert loaded["version"] == 1
        assert loaded["loggers"]["prefect.panel_ai_action"]["level"] == "DEBUG"

    def test_missing_file_falls_back_to_default(self, tmp_path: Path) -> None:
        loaded = LoggingConfig(config_path=tmp_path / "absent.yml").load_config()
        assert "prefect.panel_ai_action" in loaded["loggers"]

    def test_default_config_targets_prefect_logger_tree(self):
        """The default config must configure the loggers get_pipeline_logger() hands out."""
        loaded = LoggingConfig().load_config()
        assert list(loaded["loggers"]) == [get_pipeline_logger("panel_ai_action").name]

    def test_default_level_from_settings(self):
        """Test the package logger level read from PANEL_AI_ACTION_LOG_LEVEL."""
        configured = settings_from_env(PANEL_AI_ACTION_LOG_LEVEL="debug")

        with patch("panel_ai_action.logging.logging_config.settings", configured):
            loaded = LoggingConfig().load_config()

        assert loaded["loggers"]["prefect.panel_ai_action"]["level"] == "DEBUG"

    def test_explicit_level_wins_over_settings(self):
        configured = settings_from_env(PANEL_AI_ACTION_LOG_LEVEL="DEBUG")

        with patch("panel_ai_action.logging.logging_config.settings", configured):
            loaded = LoggingConfig(level="ERROR").load_config()

        assert loaded["loggers"]["prefect.panel_ai_action"]["level"] == "ERROR"

    def test_config_is_cached(self):
        config = LoggingConfig()
        assert config.load_config() is config.load_config()

    @patch("logging.config.dictConfig")
    def test_apply_config(self, mock_dict_config: Mock) -> None:
        LoggingConfig().apply()

        mock_dict_config.assert_called_once()
        assert mock_dict_config.call_args[0][0]["version"] == 1


class TestSetupLogging:
    """Test setup_logging function."""

    @patch("panel_ai_action.logging.logging_config.LoggingConfig.apply")
    def test_setup_logging_basic(self, mock_apply: Mock) -> None:
        setup_logging()
        mock_apply.assert_called_once()

    def test_setup_logging_with_level(self, restore_package_logger: logging.Logger) -> None:
        """Test setup_logging with custom level reaches module loggers."""
        setup_logging(level="debug")

        assert restore_package_logger.level == logging.DEBUG
        assert get_pipeline_logger("panel_ai_action.rendering").isEnabledFor(logging.DEBUG)

    @patch("panel_ai_action.logging.logging_config.LoggingConfig")
    def test_setup_logging_with_config_path(self, mock_config_class: Mock, tmp_path: Path) -> None:
        config_file = tmp_path / "custom.yml"
        mock_instance = MagicMock()
        mock_config_class.return_value = mock_instance

        setup_logging(config_path=config_file)

        mock_config_class.assert_called_once_with(config_file, None)
        mock_instance.apply.assert_called_once()


class TestGetPipelineLogger:
    """Test get_pipeline_logger function."""

    def test_returns_logger_under_prefect(self) -> None:
        assert get_pipeline_logger("panel_ai_action.widgets").name == "prefect.panel_ai_action.widgets"

    @patch("panel_ai_action.logging.logging_config.setup_logging")
    @patch("panel_ai_action.logging.logging_config._logging_config", None)
    def test_initializes_logging_on_first_use(self, mock_setup: Mock) -> None:
        get_pipeline_logger("panel_ai_action.test")
        mock_setup.assert_called_once()
