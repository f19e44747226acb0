"""Helpers for collision-free uploads.

Uploaded files keep their client-side name. When that name is taken, the new
upload is renamed ``"<stem> (N)<ext>"`` with the smallest free ``N``; an
existing file is never overwritten. Each candidate is created with exclusive
creation (``"xb"``), so two concurrent uploads of the same name cannot end up
writing to the same file.
"""

from __future__ import annotations

import os
from typing import BinaryIO, Iterator, Tuple


DEFAULT_CHUNK_SIZE = 1_048_576  # 1 MiB


def split_extension(file_name: str) -> Tuple[str, str]:
    """Split ``file_name`` at its last dot.

    Unlike ``os.path.splitext`` a leading dot counts, so ``".bashrc"`` has the
    extension ``".bashrc"`` and an empty stem.
    """
    idx = file_name.rfind(".")
    if idx == -1:
        return file_name, ""
    return file_name[:idx], file_name[idx:]


def candidate_names(file_name: str) -> Iterator[str]:
    """Yield ``file_name``, then ``"<stem> (1)<ext>"``, ``"<stem> (2)<ext>"``, ...

    Every candidate is derived from the original name, only the index grows.
    """
    yield file_name
    stem, ext = split_extension(file_name)
    i = 1
    while True:
        yield f"{stem} ({i}){ext}"
        i += 1


def create_exclusive(directory: str, file_name: str) -> Tuple[str, BinaryIO]:
    """Create the first free candidate for ``file_name`` inside ``directory``.

    Returns:
        (path, open binary file handle). The caller owns the handle.

    Raises:
        OSError: any creation failure other than the name being taken.
    """
    for name in candidate_names(file_name):
        path = os.path.join(directory, name)
        try:
            fh = open(path, "xb")
        except FileExistsError:
            continue
        return path, fh
    raise AssertionError("unreachable")


def copy_stream(
    src: BinaryIO,
    dst: BinaryIO,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Copy ``src`` into ``dst`` until EOF and return the number of bytes written.

    Bytes already written stay in ``dst`` when ``src.read`` raises.
    """
    written = 0
    while True:
        chunk = src.read(chunk_size)
        if not chunk:
            break
        dst.write(chunk)
        written += len(chunk)
    return written


def safe_unlink(path: str) -> None:
    """Best-effort file removal (no exception if it fails)."""
    try:
        os.remove(path)
    except OSError:
        pass
