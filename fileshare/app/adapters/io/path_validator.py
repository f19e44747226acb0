"""Path validation for user-provided ``path`` query parameters."""

from __future__ import annotations

import enum
import errno as errno_codes
import os
import posixpath
import stat
from dataclasses import dataclass
from typing import Optional

from ...exceptions import InvalidPathError, PathNotFoundError, PathStatError


class PathKind(str, enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class ValidatedPath:
    """An absolute filesystem path known to be inside the base path.

    Only :func:`validate_path` should build these.
    """

    path: str
    kind: PathKind

    @property
    def is_dir(self) -> bool:
        return self.kind is PathKind.DIRECTORY

    @property
    def name(self) -> str:
        return os.path.basename(self.path.rstrip(os.sep))

    def __str__(self) -> str:
        if self.is_dir:
            return self.path.rstrip(os.sep) + os.sep
        return self.path


def clean_relative(raw_path: Optional[str]) -> str:
    """Lexically normalize ``raw_path`` (no filesystem access).

    Returns ``"."`` for the base itself. Leading separators are dropped so the
    result is always relative to the base.
    """
    if not raw_path:
        return "."
    cleaned = posixpath.normpath(raw_path).lstrip("/")
    return cleaned or "."


def validate_path(base: str, raw_path: Optional[str]) -> ValidatedPath:
    """Resolve ``raw_path`` against ``base``, refusing anything that could escape it.

    Every segment starting with ``.`` is rejected, which covers ``..`` as well
    as hidden entries. Remaining segments are joined onto ``base`` and the
    result is stat'ed.

    Raises:
        InvalidPathError: a segment starts with ``.``.
        PathNotFoundError: the joined path does not exist.
        PathStatError: any other stat failure (e.g. permission denied).
    """
    rel = clean_relative(raw_path)

    segments = []
    if rel not in (".", ""):
        segments = rel.split("/")
        for segment in segments:
            if segment.startswith("."):  # this includes ..
                raise InvalidPathError(segment)

    full = os.path.join(base, *segments) if segments else base

    try:
        st = os.stat(full)
    except FileNotFoundError as e:
        raise PathNotFoundError(e.strerror or "not found", errno=e.errno) from e
    except OSError as e:
        # Only the OS reason is surfaced; the resolved path stays server-side.
        message = e.strerror or os.strerror(e.errno or errno_codes.EIO)
        raise PathStatError(message, errno=e.errno) from e
    except ValueError as e:
        # embedded NUL byte
        raise InvalidPathError(raw_path or "") from e

    kind = PathKind.DIRECTORY if stat.S_ISDIR(st.st_mode) else PathKind.FILE
    return ValidatedPath(path=full, kind=kind)
