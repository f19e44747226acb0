"""Backend-only exception types.

These are used to keep service code HTTP-agnostic while still allowing routers
or the global exception handler in ``fileshare/app/main.py`` to map errors to
a plain-text 400 response. The message of each exception is the response
body, so keep them short and free of absolute server paths.
"""

from __future__ import annotations


class FileShareError(Exception):
    """Base class for every client-visible failure."""


class InvalidPathError(FileShareError):
    """Raised when a path segment attempts traversal or hidden-file access."""

    def __init__(self, segment: str) -> None:
        super().__init__(f"invalid path: {segment}")
        self.segment = segment


class PathStatError(FileShareError):
    """Raised when the joined path cannot be stat'ed.

    Carries the bare OS error text (``strerror``), never the resolved path.
    """

    def __init__(self, message: str, errno: int | None = None) -> None:
        super().__init__(message)
        self.errno = errno


class PathNotFoundError(PathStatError):
    """Raised when the requested entry does not exist."""


class NotADirectoryPathError(FileShareError):
    """Raised when an upload targets a file instead of a directory."""

    def __init__(self) -> None:
        super().__init__("not a directory")


class MalformedMultipartError(FileShareError):
    """Raised when the request body is not valid multipart form data."""


class UnknownPayloadError(FileShareError):
    """Raised when no ``myFile`` part is present in the upload body."""

    def __init__(self) -> None:
        super().__init__("unknown payload")


class InvalidFileNameError(FileShareError):
    def __init__(self, name: str) -> None:
        super().__init__(f"invalid file name: {name!r}")
        self.name = name


class ListingError(FileShareError):
    """Raised when a validated directory cannot be read."""


class UploadFailedError(FileShareError):
    """Raised when creating or writing the destination file fails."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"upload failed: {reason}")
        self.reason = reason
