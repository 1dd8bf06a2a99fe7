"""Media file discovery and ordering."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List

from .models import FileEntry

logger = logging.getLogger(__name__)


def creation_time(stat: os.stat_result) -> datetime:
    """Return the file creation time as an aware UTC datetime.

    Platforms without ``st_birthtime`` fall back to ``st_ctime``.
    """
    timestamp = getattr(stat, "st_birthtime", None)
    if timestamp is None:
        timestamp = stat.st_ctime
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def collect_files(directory: str, extension_filter: str = "") -> List[FileEntry]:
    """List regular files directly inside directory matching the extension."""
    if not directory or not Path(directory).is_dir():
        logger.warning("Directory %r does not exist; no files collected", directory)
        return []

    root = Path(directory)
    wanted = extension_filter.lower()
    entries: List[FileEntry] = []

    for path in root.iterdir():
        if not path.is_file():
            continue
        if wanted and path.suffix.lower() != wanted:
            logger.debug("Skipping %s (extension does not match %s)", path, wanted)
            continue

        stat = path.stat()
        entries.append(
            FileEntry(
                path=path,
                name=path.name,
                created=creation_time(stat),
                length=stat.st_size,
            )
        )

    logger.info("Collected %d files from %s", len(entries), root)
    return entries


def sort_newest_first(entries: Iterable[FileEntry]) -> List[FileEntry]:
    """Order entries by creation time, newest first.

    Equal timestamps keep their enumeration order.
    """
    return sorted(entries, key=lambda entry: entry.created, reverse=True)
