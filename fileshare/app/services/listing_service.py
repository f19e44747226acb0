from __future__ import annotations

import logging
import os
from typing import List

from ..adapters.io.path_validator import ValidatedPath
from ..config import Settings
from ..exceptions import ListingError

logger = logging.getLogger(__name__)


def list_directory(target: ValidatedPath, settings: Settings) -> List[str]:
    """
    Return the visible entries of a validated directory.

    Names starting with "." are skipped, directories get a trailing "/".
    The OS enumeration order is kept as-is (not sorted). When directory
    listing is disabled the filesystem is not touched at all.
    """
    if settings.disable_directory_listing:
        return []

    names: List[str] = []
    try:
        with os.scandir(target.path) as it:
            for entry in it:
                if entry.name.startswith("."):
                    continue
                name = entry.name
                try:
                    if entry.is_dir():
                        name += "/"
                except OSError:
                    # dangling symlink or vanished entry: list it as a file
                    pass
                names.append(name)
    except OSError as e:
        # e.g. permission denied, or the directory was replaced since validation
        raise ListingError(e.strerror or str(e)) from e

    logger.debug("Listed %s (%d entries)", target, len(names))
    return names
