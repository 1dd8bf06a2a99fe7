"""High-level orchestration for the podcast_rssgen application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .config import FeedSettings
from .feed import build_document, extract_items
from .files import collect_files, sort_newest_first
from .minify import minify
from .models import FileEntry
from .tags import MutagenTitleReader, TitleReader
from .writer import write_feed

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Returned data after executing the app."""

    output_path: Path
    item_count: int
    backup_path: Optional[Path] = None
    skipped: List[FileEntry] = field(default_factory=list)


def execute(
    settings: FeedSettings,
    title_reader: Optional[TitleReader] = None,
    now: Optional[datetime] = None,
) -> RunResult:
    """Run the application logic and return the result payload.

    Every tag is read and the document fully rendered before the output
    directory is touched, so a failure leaves any existing feed in place.
    """
    reader = title_reader or MutagenTitleReader()

    entries = collect_files(settings.directory_path, settings.file_extension_filter)
    entries = sort_newest_first(entries)

    extraction = extract_items(
        entries, reader, skip_unreadable=settings.skip_unreadable_files
    )

    document = build_document(settings, extraction.items)
    if settings.minify:
        original_length = len(document)
        document = minify(document)
        logger.info("Minified feed from %d to %d characters", original_length, len(document))

    written = write_feed(
        document,
        settings.directory_path,
        settings.output_filename,
        backup_first=settings.backup_existing_feed_first,
        now=now,
    )

    logger.info(
        "Completed processing. Wrote %d items to %s",
        len(extraction.items),
        written.output_path,
    )
    return RunResult(
        output_path=written.output_path,
        item_count=len(extraction.items),
        backup_path=written.backup_path,
        skipped=extraction.skipped,
    )
