from pathlib import Path
from typing import Dict

import pytest
from mutagen.id3 import ID3, TIT2

from podcast_rssgen.config import MappingSettingsSource, load_settings
from podcast_rssgen.tags import TagParseError

# MPEG-1 Layer III, 128 kbit/s, 44.1 kHz, joint stereo: 417 bytes per frame.
_MPEG_FRAME = b"\xff\xfb\x90\x64" + b"\x00" * 413


def write_mp3(path: Path, title=None) -> Path:
    """Write a small but valid MP3 stream, optionally tagged with a title."""
    path.write_bytes(_MPEG_FRAME * 40)
    if title is not None:
        tags = ID3()
        tags.add(TIT2(encoding=3, text=title))
        tags.save(path)
    return path


class FakeTitleReader:
    """Title reader returning canned titles keyed by file name."""

    def __init__(self, titles=None, broken=()):
        self.titles = dict(titles or {})
        self.broken = set(broken)
        self.calls = []

    def read_title(self, path):
        self.calls.append(Path(path).name)
        if Path(path).name in self.broken:
            raise TagParseError(f"Could not parse audio file {path}")
        return self.titles.get(Path(path).name, Path(path).stem)


def base_settings(directory: str = "/tmp/podcast", **overrides) -> Dict[str, str]:
    values = {
        "DirectoryPath": directory,
        "UrlPrefix": "http://x/",
        "Minify": "false",
        "PodcastTitle": "My Show",
        "PodcastHomepage": "https://example.com/",
        "Language": "en-us",
        "Copyright": "2024 Me",
        "Subtitle": "Sub",
        "Author": "Me",
        "DescriptionSummary": "About the show",
        "Explicit": "false",
        "Email": "me@example.com",
        "ArtworkUrl": "https://example.com/art.jpg",
        "Category": "Technology",
        "SubCategory": "Tech News",
        "PodcastRssUrl": "https://example.com/feed.xml",
        "FileExtensionFilter": ".mp3",
        "OutputFilename": "feed.xml",
        "BackupExistingFeedFirst": "false",
    }
    values.update(overrides)
    return values


@pytest.fixture
def make_settings():
    def factory(directory="/tmp/podcast", **overrides):
        return load_settings(MappingSettingsSource(base_settings(str(directory), **overrides)))

    return factory


@pytest.fixture
def fake_reader():
    return FakeTitleReader()
