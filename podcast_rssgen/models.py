"""Shared data models for podcast_rssgen."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class FileEntry:
    """A candidate media file found in the source directory."""

    path: Path
    name: str
    created: datetime
    length: int


@dataclass(frozen=True)
class FeedItem:
    """A file paired with the title read from its tags."""

    entry: FileEntry
    title: str
