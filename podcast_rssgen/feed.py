"""Feed item extraction and XML rendering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Sequence

from markupsafe import Markup

from .config import FeedSettings
from .models import FeedItem, FileEntry
from .tags import TagParseError, TitleReader
from .templating import get_environment

logger = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    """Items ready for rendering and the files left out of the feed."""

    items: List[FeedItem]
    skipped: List[FileEntry]


@dataclass(frozen=True)
class _RenderedItem:
    title: str
    published: datetime
    url: Markup
    length: int


def extract_items(
    entries: Iterable[FileEntry],
    reader: TitleReader,
    skip_unreadable: bool = False,
) -> ExtractionResult:
    """Read the title of every entry, preserving order.

    A ``TagParseError`` aborts extraction unless ``skip_unreadable`` is set,
    in which case the file is logged and left out.
    """
    items: List[FeedItem] = []
    skipped: List[FileEntry] = []

    for entry in entries:
        try:
            title = reader.read_title(entry.path)
        except TagParseError as exc:
            if not skip_unreadable:
                raise
            logger.warning("Skipping %s: %s", entry.path, exc)
            skipped.append(entry)
            continue
        items.append(FeedItem(entry=entry, title=title or ""))

    logger.info(
        "Extracted titles for %d files (%d skipped)", len(items), len(skipped)
    )
    return ExtractionResult(items=items, skipped=skipped)


def item_url(url_prefix: str, file_name: str) -> Markup:
    """Return the enclosure URL; the file name is inserted without encoding."""
    return Markup(f"{url_prefix}{file_name}")


def build_header(settings: FeedSettings) -> str:
    """Render the XML declaration and channel metadata."""
    template = get_environment().get_template("feed_header.xml.j2")
    return template.render(settings=settings)


def build_items(items: Sequence[FeedItem], url_prefix: str) -> str:
    """Render one ``<item>`` block per feed item."""
    rendered = [
        _RenderedItem(
            title=item.title,
            published=item.entry.created,
            url=item_url(url_prefix, item.entry.name),
            length=item.entry.length,
        )
        for item in items
    ]
    template = get_environment().get_template("feed_items.xml.j2")
    return template.render(items=rendered)


def build_footer() -> str:
    """Render the closing channel and rss elements."""
    return get_environment().get_template("feed_footer.xml.j2").render()


def build_document(settings: FeedSettings, items: Sequence[FeedItem]) -> str:
    """Concatenate header, items and footer into the full feed."""
    return (
        build_header(settings)
        + build_items(items, settings.url_prefix)
        + build_footer()
    )
