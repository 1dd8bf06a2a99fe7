"""Output file handling: optional backup, then write."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


@dataclass
class WriteResult:
    """Where the feed ended up and where the previous one was moved to."""

    output_path: Path
    backup_path: Optional[Path] = None


def backup_path_for(output_path: Path, now: datetime) -> Path:
    """Return ``<output>.backup<yyyyMMddHHmmss>`` for the given moment."""
    return output_path.with_name(
        f"{output_path.name}.backup{now.strftime(BACKUP_TIMESTAMP_FORMAT)}"
    )


def backup_existing(output_path: Path, now: Optional[datetime] = None) -> Optional[Path]:
    """Rename an existing output file out of the way.

    Returns the backup location, or None when there was nothing to back up.
    """
    if not output_path.exists():
        logger.debug("No existing feed at %s; nothing to back up", output_path)
        return None

    target = backup_path_for(output_path, now or datetime.now())
    if target.exists():
        raise FileExistsError(f"Backup target already exists: {target}")

    output_path.rename(target)
    logger.info("Backed up existing feed to %s", target)
    return target


def write_feed(
    document: str,
    directory: str,
    filename: str,
    backup_first: bool = False,
    now: Optional[datetime] = None,
) -> WriteResult:
    """Write the document to ``directory/filename``, overwriting any file there."""
    output_path = Path(directory) / filename
    output_path.parent.mkdir(parents=True, exist_ok=True)

    backup = None
    if backup_first:
        backup = backup_existing(output_path, now)

    output_path.write_text(document, encoding="utf-8")
    logger.info("Wrote %d characters to %s", len(document), output_path)
    return WriteResult(output_path=output_path, backup_path=backup)
