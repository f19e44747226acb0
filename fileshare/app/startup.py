"""FastAPI startup registration.

Keep import-time side effects out of routers/modules. Any filesystem checks
or other initialization should run in the lifespan defined here.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Check the served directory once, before the first request."""
    settings = app.state.settings
    if not os.path.isdir(settings.base_path):
        raise RuntimeError(f"base path is not a directory: {settings.base_path}")
    logger.info(
        "Server ready: serving %s (listing %s, partial uploads %s)",
        settings.base_path,
        "disabled" if settings.disable_directory_listing else "enabled",
        "kept" if settings.keep_partial_uploads_on_error else "removed",
    )
    yield
    logger.info("Server stopped")
