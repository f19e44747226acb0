from __future__ import annotations

import logging
import ntpath
import os
from dataclasses import dataclass
from typing import BinaryIO, Optional

from ..adapters.io.path_validator import ValidatedPath
from ..config import Settings
from ..exceptions import InvalidFileNameError, NotADirectoryPathError, UploadFailedError
from ...utils.upload_naming import copy_stream, create_exclusive, safe_unlink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadResult:
    path: str
    file_name: str
    bytes_written: int


def clean_file_name(raw: Optional[str]) -> str:
    """Keep only the last path component of a client-supplied file name.

    Both separators are honoured since browsers on Windows may send
    ``C:\\Users\\me\\report.pdf``.
    """
    name = ntpath.basename((raw or "").strip())
    if name in ("", ".", "..") or "\x00" in name:
        raise InvalidFileNameError(raw or "")
    return name


def save_upload(
    target: ValidatedPath,
    file_name: Optional[str],
    content: BinaryIO,
    settings: Settings,
) -> UploadResult:
    """
    Write ``content`` into ``target`` under a name that does not collide with
    an existing entry: ``report.pdf``, then ``report (1).pdf``,
    ``report (2).pdf``, ...

    If the copy fails the partial file is removed, unless
    ``keep_partial_uploads_on_error`` is set. The copy error is raised either
    way.
    """
    if not target.is_dir:
        raise NotADirectoryPathError()

    name = clean_file_name(file_name)

    try:
        path, fh = create_exclusive(target.path, name)
    except OSError as e:
        raise UploadFailedError(e.strerror or str(e)) from e

    written = 0
    error: Optional[BaseException] = None
    try:
        with fh:
            try:
                written = copy_stream(content, fh)
            except (OSError, ValueError):
                written = fh.tell()
                raise
    except (OSError, ValueError) as e:
        error = e
        if not settings.keep_partial_uploads_on_error:
            safe_unlink(path)

    logger.info("%s %d %s", path, written, error)

    if error is not None:
        reason = getattr(error, "strerror", None) or str(error) or type(error).__name__
        raise UploadFailedError(reason) from error

    return UploadResult(path=path, file_name=os.path.basename(path), bytes_written=written)
