"""
Configuration management using pydantic-settings.
Loads from config.yaml, .env, and environment variables.
"""

from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich import box as rich_box
from rich.box import Box

# Load .env file at module import
load_dotenv()

TABLE_BOXES: dict[str, Box] = {
    "ascii": rich_box.ASCII,
    "rounded": rich_box.ROUNDED,
    "simple": rich_box.SIMPLE,
    "markdown": rich_box.MARKDOWN,
    "heavy": rich_box.HEAVY,
    "double": rich_box.DOUBLE,
}


class WriterSettings(BaseSettings):
    """Output writer settings."""

    model_config = SettingsConfigDict(
        env_prefix="MULTIWRITER_",
        extra="ignore",
    )

    format: str = Field(default="table", description="Output format (csv, table, text)")
    buffer_size: int = Field(default=10000, description="Text output buffer size in characters")
    csv_buffer_size: int = Field(default=4096, description="CSV output buffer size in characters")
    delimiter: str = Field(default=",", description="CSV field delimiter")
    table_box: str = Field(default="ascii", description=f"Table border style ({', '.join(TABLE_BOXES)})")
    table_width: int = Field(default=200, description="Minimum console width for table rendering")

    @field_validator("buffer_size", "csv_buffer_size", "table_width")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("delimiter")
    @classmethod
    def _single_char(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("delimiter must be a single character")
        return value

    @field_validator("table_box")
    @classmethod
    def _known_box(cls, value: str) -> str:
        value = value.lower()
        if value not in TABLE_BOXES:
            raise ValueError(f"unknown table box {value!r}, expected one of: {', '.join(TABLE_BOXES)}")
        return value

    @property
    def box(self) -> Box:
        """Rich box style for the configured table border."""
        return TABLE_BOXES[self.table_box]


class LoggingSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(
        env_prefix="MULTIWRITER_LOG_",
        extra="ignore",
    )

    level: str = Field(default="info", description="Console log level")
    use_rich: bool = Field(default=True, description="Use Rich handler for console logs")
    file_path: Path | None = Field(default=None, description="Optional log file")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    writer: WriterSettings = Field(default_factory=WriterSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    debug: bool = Field(default=False)

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Load settings from config.yaml and environment."""
        config_data: dict[str, Any] = {}

        if config_path is None:
            config_path = Path("config.yaml")

        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                yaml_content: Any = yaml.safe_load(f)
                yaml_config: dict[str, Any] = yaml_content or {}

            if "writer" in yaml_config:
                config_data["writer"] = WriterSettings(**yaml_config["writer"])  # type: ignore
            if "logging" in yaml_config:
                config_data["logging"] = LoggingSettings(**yaml_config["logging"])  # type: ignore
            if "debug" in yaml_config:
                config_data["debug"] = yaml_config["debug"]

        return cls(**config_data)  # type: ignore


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Path | None = None) -> Settings:
    """Reload settings from config."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
