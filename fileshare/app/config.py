"""Process-wide settings, built once at startup and injected into handlers."""

from __future__ import annotations

import os
from typing import Any, Literal

from fastapi import Request
from pydantic import BaseModel, ConfigDict, field_validator

from .adapters.io.environment import read_environment

LogLevel = Literal["critical", "error", "warning", "info", "debug", "trace"]


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    base_path: str
    disable_directory_listing: bool = False
    keep_partial_uploads_on_error: bool = False

    host: str = "0.0.0.0"
    port: int = 8123
    log_level: LogLevel = "info"

    @field_validator("base_path")
    @classmethod
    def _absolute_directory(cls, v: str) -> str:
        p = os.path.abspath(os.path.expanduser(v))
        if not os.path.isdir(p):
            raise ValueError(f"base path is not a directory: {v}")
        return p

    @field_validator("log_level", mode="before")
    @classmethod
    def _lower_log_level(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


def load_settings(**overrides: Any) -> Settings:
    """Build Settings from ``FILESHARE_*`` variables, then apply overrides.

    Overrides set to ``None`` are ignored so argparse defaults do not mask the
    environment.
    """
    values = read_environment()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)


def get_settings(request: Request) -> Settings:
    """FastAPI dependency returning the Settings bound to the running app."""
    return request.app.state.settings
