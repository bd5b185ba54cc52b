"""Configuration management for cmdkit."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cmdkit.types import RunOptions


class Settings(BaseSettings):
    """Process-wide defaults, read from CMDKIT_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CMDKIT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Log level")
    show_command: bool = Field(default=True, description="Log each command before it runs")
    show_environment_variables: bool = Field(
        default=False, description="Log the environment variables passed to each command"
    )
    capture_prefix: str | None = Field(default=None, description="Prefix for lines sent to capture callbacks")
    execution_folder_path: Path | None = Field(default=None, description="Default working directory")

    def to_run_options(self, **overrides: Any) -> RunOptions:
        """Build the base RunOptions scope; overrides set to None keep the setting."""

        base = RunOptions(
            execution_folder_path=self.execution_folder_path,
            show_command=self.show_command,
            show_environment_variables=self.show_environment_variables,
            capture_prefix=self.capture_prefix,
        )
        return base.scope(**overrides)


def get_settings() -> Settings:
    return Settings()
