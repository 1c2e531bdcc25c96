"""Application settings for Couchtube.

Settings are read once at process start from init arguments, environment
variables, an optional ``.env`` file and CLI flags, and then passed by
reference to every component that needs them.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings.

    Attributes:
        log_format: Format for application logs (human or json).
        log_level: Logging level for the application.
        log_include_stacktrace: Include full stack traces in error logs.
        server_host: Host address for the HTTP server to bind to.
        port: Port number for the HTTP server to listen on.
        database_file_path: Path to the SQLite database file.
        json_file_path: Path to the JSON catalog of channels and videos.
        full_scan: Wipe the database and rebuild it from the catalog.
        readonly_mode: Never write the catalog into the database.
        populate_only: Initialize the database and exit without serving.
        youtube_api_key: API key for the YouTube Data API.
        youtube_api_timeout: Timeout in seconds for YouTube Data API calls.
    """

    log_format: Literal["human", "json"] = Field(
        default="human",
        validation_alias="LOG_FORMAT",
        description="Format for application logs ('human' or 'json').",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level for the application (e.g., DEBUG, INFO, WARNING, ERROR). Case-insensitive.",
    )
    log_include_stacktrace: bool = Field(
        default=False,
        validation_alias="LOG_INCLUDE_STACKTRACE",
        description="Include full stack traces in error logs (true/false).",
    )

    # Server configuration
    server_host: str = Field(
        default="0.0.0.0",
        validation_alias="SERVER_HOST",
        description="Host address for the HTTP server to bind to.",
    )
    port: int = Field(
        default=8363,
        ge=1,
        le=65535,
        validation_alias="PORT",
        description="Port number for the HTTP server to listen on.",
    )

    # Storage and catalog
    database_file_path: Path = Field(
        default=Path("couchtube.db"),
        validation_alias="DATABASE_FILE_PATH",
        description="Path to the SQLite database file.",
    )
    json_file_path: Path = Field(
        default=Path("/videos.json"),
        validation_alias="JSON_FILE_PATH",
        description="Path to the JSON catalog of channels and their videos.",
    )
    full_scan: bool = Field(
        default=False,
        validation_alias="FULL_SCAN",
        description="Delete all stored channels and videos and rebuild them from the catalog.",
    )
    readonly_mode: bool = Field(
        default=False,
        validation_alias="READONLY_MODE",
        description="Skip writing the catalog into the database.",
    )
    populate_only: bool = Field(
        default=False,
        validation_alias="POPULATE_ONLY",
        description="Initialize the database and exit without starting the HTTP server.",
    )

    # YouTube Data API
    youtube_api_key: str = Field(
        default="",
        validation_alias="YOUTUBE_API_KEY",
        description="API key used to look up durations of videos without explicit bounds.",
    )
    youtube_api_timeout: float = Field(
        default=10.0,
        gt=0,
        validation_alias="YOUTUBE_API_TIMEOUT",
        description="Timeout in seconds for each YouTube Data API request.",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        cli_parse_args=True,
        cli_ignore_unknown_args=True,
        cli_kebab_case=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("database_file_path", "json_file_path", mode="after")
    @classmethod
    def expand_user_path(cls, v: Path) -> Path:
        """Expand ``~`` in configured paths."""
        return v.expanduser()
