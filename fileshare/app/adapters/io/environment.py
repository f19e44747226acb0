"""Environment variables read at startup for the file server."""

from __future__ import annotations

import os
from typing import Dict, Any

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def get_base_path() -> str:
    """Served root directory (defaults to the current working directory)."""
    return os.path.abspath(os.getenv("FILESHARE_BASE_PATH", os.getcwd()))


def read_environment() -> Dict[str, Any]:
    """Collect the ``FILESHARE_*`` variables as Settings keyword arguments.

    Only variables that are actually set are returned (apart from the base
    path, which always has a value), so Settings defaults still apply.
    """
    values: Dict[str, Any] = {
        "base_path": get_base_path(),
        "disable_directory_listing": _env_flag("FILESHARE_DISABLE_LISTING"),
        "keep_partial_uploads_on_error": _env_flag("FILESHARE_KEEP_PARTIAL"),
    }

    host = os.getenv("FILESHARE_HOST")
    if host:
        values["host"] = host.strip()

    port = os.getenv("FILESHARE_PORT")
    if port:
        values["port"] = port.strip()

    log_level = os.getenv("FILESHARE_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level.strip()

    return values
