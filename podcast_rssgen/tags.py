"""Title extraction from embedded audio tags."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import mutagen
from mutagen.id3 import ID3

logger = logging.getLogger(__name__)


def _title_values(tags) -> list:
    """Return the title values, whichever key style the format uses."""
    values = tags.get("title") or tags.get("Title")
    if not values and isinstance(tags, ID3):
        # WAVE, AIFF and DSF keep raw frames even with easy=True
        frames = tags.getall("TIT2")
        values = frames[0].text if frames else []
    return list(values or [])


class TagParseError(RuntimeError):
    """Raised when a file cannot be parsed as tagged audio."""


class TitleReader(Protocol):
    """Minimal protocol for title providers."""

    def read_title(self, path: Path) -> str:
        """Return the title tag of the file, or '' when it has none."""


class MutagenTitleReader:
    """Reads titles with mutagen's format-agnostic "easy" interface."""

    def read_title(self, path: Path) -> str:
        logger.debug("Reading tags from %s", path)
        try:
            audio = mutagen.File(path, easy=True)
        except mutagen.MutagenError as exc:
            raise TagParseError(f"Could not parse audio file {path}: {exc}") from exc

        if audio is None:
            raise TagParseError(f"Unsupported or unrecognised audio file: {path}")

        if not audio.tags:
            logger.debug("No tags found in %s", path)
            return ""

        values = _title_values(audio.tags)
        return str(values[0]) if values else ""
