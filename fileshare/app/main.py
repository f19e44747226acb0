from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
import time

# selective access-log filter for uvicorn
import logging

from .config import Settings, load_settings
from .exceptions import FileShareError
from .startup import lifespan

logger = logging.getLogger(__name__)


class _SkipHealthzAccessLogs(logging.Filter):
    """Hide uvicorn access logs for /healthz to keep probes out of the console."""
    def filter(self, record: logging.LogRecord) -> bool:
        try:
            msg = record.getMessage()
        except Exception:
            return True
        return "/healthz" not in msg


# Attach the filter once
_access_logger = logging.getLogger("uvicorn.access")
# Avoid duplicate filters on reload
if not any(isinstance(f, _SkipHealthzAccessLogs) for f in getattr(_access_logger, "filters", [])):
    _access_logger.addFilter(_SkipHealthzAccessLogs())

# Routers
from .routers.files import router as files_router
from .routers.health import router as health_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one immutable Settings object.

    Without explicit settings they are read from the ``FILESHARE_*``
    environment.
    """
    if settings is None:
        settings = load_settings()

    app = FastAPI(
        title="fileshare",
        version="1.0.0",
        description="Serve, list and upload files below a single base directory",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Every boundary failure becomes a plain-text 400
    @app.exception_handler(FileShareError)
    async def _file_share_error(request: Request, exc: FileShareError):
        logger.debug("%s %s -> 400: %s", request.method, request.url.path, exc)
        return PlainTextResponse(str(exc), status_code=400)

    # Robust request logging (won't crash on exceptions)
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        t0 = time.time()
        try:
            return await call_next(request)
        except Exception as e:
            dt = (time.time() - t0) * 1000
            logger.error(
                "%s %s -> ERR in %.1fms: %s: %s",
                request.method, request.url.path, dt, type(e).__name__, e,
            )
            raise

    app.include_router(health_router, tags=["health"])
    app.include_router(files_router,  tags=["files"])

    # Web UI, shipped as package data; mounted last so it doesn't shadow the API
    app.mount("/", StaticFiles(packages=[("fileshare", "web")], html=True), name="static")

    return app
