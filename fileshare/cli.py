"""Command line entry point: ``fileshare [BASE_PATH] [--port 8123] ...``."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from . import __version__
from .app.config import Settings, load_settings


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fileshare",
        description="Serve, list and upload files below a single directory.",
    )
    p.add_argument(
        "base_path",
        nargs="?",
        default=None,
        help="directory to serve (default: $FILESHARE_BASE_PATH or the current directory)",
    )
    p.add_argument("--host", default=None, help="bind address (default 0.0.0.0)")
    p.add_argument("--port", type=int, default=None, help="listen port (default 8123)")
    p.add_argument(
        "--disable-listing",
        dest="disable_directory_listing",
        action="store_true",
        default=None,
        help="answer every /list request with []",
    )
    p.add_argument(
        "--keep-partial",
        dest="keep_partial_uploads_on_error",
        action="store_true",
        default=None,
        help="keep partially written files when an upload fails",
    )
    p.add_argument("--log-level", default=None, help="uvicorn log level (default info)")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def settings_from_args(argv: Optional[List[str]] = None) -> Settings:
    args = build_parser().parse_args(argv)
    return load_settings(**vars(args))


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = settings_from_args(argv)
    except ValidationError as e:
        print(f"fileshare: invalid configuration\n{e}", file=sys.stderr)
        return 2

    from .app.main import create_app

    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
