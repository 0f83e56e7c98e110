"""Configuration settings for panel-ai-action.

@public

Settings are loaded from environment variables with .env file support via
pydantic-settings. Every variable carries the PANEL_AI_ACTION_ prefix.

Environment variables:
    PANEL_AI_ACTION_DEFAULT_LABEL: Label of the AI action buttons
    PANEL_AI_ACTION_SHOW_USAGE: Show the token usage footer under results
    PANEL_AI_ACTION_MODAL_SIZE: Width of the response modal
    PANEL_AI_ACTION_ALLOW_COPY: Show the copy-to-clipboard button
    PANEL_AI_ACTION_STREAM_CHUNK_SIZE: Characters per streamed chunk
    PANEL_AI_ACTION_DEFAULT_QUEUE: Queue name used by queued() without arguments
    PANEL_AI_ACTION_DEFAULT_PROVIDER: Provider used by agents that declare none
    PANEL_AI_ACTION_DEFAULT_MODEL: Model used by agents that declare none
    PANEL_AI_ACTION_LOG_LEVEL: Level of the panel_ai_action loggers
    PANEL_AI_ACTION_LOGGING_CONFIG: Path to a YAML logging configuration
    PREFECT_LOGGING_SETTINGS_PATH: Fallback path to a logging configuration

Example:
    >>> from panel_ai_action.settings import settings
    >>> settings.default_label
    'Ask AI'

Note:
    Settings are loaded once at module import and frozen. Restart the
    process to pick up changes to the environment or .env file.
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Display and execution defaults for AI actions.

    @public

    Attributes:
        default_label: Label applied by AiAction.make() and AiBulkAction.make().
        show_usage: Render the "Input: N tokens · Output: M tokens" footer
                    once a result is complete.
        modal_size: Modal width passed to the action (sm, md, lg, xl, ...).
        allow_copy: Render a copy-to-clipboard button for complete results.
        stream_chunk_size: Number of characters pushed per streamed chunk.
        default_queue: Queue name used when queued() is called without one.
        default_provider: Fallback provider for agents that do not set one.
        default_model: Fallback model for agents that do not set one.
        log_level: Level of the panel_ai_action logger tree.
        logging_config: YAML dictConfig file replacing the default logging
                        setup. PANEL_AI_ACTION_LOGGING_CONFIG wins over
                        PREFECT_LOGGING_SETTINGS_PATH.
    """

    model_config = SettingsConfigDict(
        env_prefix="PANEL_AI_ACTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    default_label: str = "Ask AI"
    show_usage: bool = False
    modal_size: str = "xl"
    allow_copy: bool = True

    stream_chunk_size: int = Field(default=20, gt=0)
    default_queue: str = "default"

    default_provider: str = ""
    default_model: str = ""

    log_level: str = "INFO"
    logging_config: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("PANEL_AI_ACTION_LOGGING_CONFIG", "PREFECT_LOGGING_SETTINGS_PATH"),
    )


settings = Settings()
"""Global settings instance shared by every component.

@public
"""
