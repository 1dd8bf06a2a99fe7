"""Settings loading for the feed generator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol
from xml.etree import ElementTree as ET

from markupsafe import Markup, escape

logger = logging.getLogger(__name__)

_TRUE = "true"
_FALSE = "false"


class ConfigurationError(ValueError):
    """Raised when a setting is missing or malformed."""


class SettingsSource(Protocol):
    """Minimal protocol for key/value settings providers."""

    def get(self, key: str) -> Optional[str]:
        """Return the raw value for key, or None when it is not set."""


class MappingSettingsSource:
    """Settings backed by an in-memory mapping."""

    def __init__(self, values: Mapping[str, str]):
        self._values = dict(values)

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)


class XmlSettingsSource:
    """Settings read from an ``appSettings`` XML file.

    The expected layout is::

        <configuration>
          <appSettings>
            <add key="DirectoryPath" value="/srv/podcast/" />
          </appSettings>
        </configuration>

    A document whose root element is ``appSettings`` is accepted as well.
    """

    def __init__(self, path: str):
        self.path = Path(path).resolve()
        self._values = self._parse()

    def _parse(self) -> Dict[str, str]:
        if not self.path.exists():
            raise ConfigurationError(f"Settings file not found: {self.path}")

        logger.info("Loading settings from %s", self.path)
        try:
            root = ET.parse(self.path).getroot()
        except ET.ParseError as exc:
            raise ConfigurationError(
                f"Settings file is not valid XML: {self.path} ({exc})"
            ) from exc

        section = root if root.tag == "appSettings" else root.find("appSettings")
        if section is None:
            raise ConfigurationError(
                f"Settings file is missing the <appSettings> section: {self.path}"
            )

        values: Dict[str, str] = {}
        for node in section.findall("add"):
            key = node.attrib.get("key")
            if not key:
                logger.debug("Ignoring <add> element without a key")
                continue
            values[key] = node.attrib.get("value", "")

        logger.debug("Read %d settings from %s", len(values), self.path)
        return values

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)


def read_text(source: SettingsSource, key: str) -> Markup:
    """Return the HTML-encoded value for key; unset keys encode as ''."""
    return escape(source.get(key) or "")


def read_bool(
    source: SettingsSource, key: str, default: Optional[bool] = None
) -> bool:
    """Parse a true/false setting, case-insensitively."""
    raw = source.get(key)
    if raw is None:
        if default is None:
            raise ConfigurationError(f"Missing required boolean setting '{key}'")
        return default

    value = raw.strip().lower()
    if value == _TRUE:
        return True
    if value == _FALSE:
        return False
    raise ConfigurationError(
        f"Setting '{key}' must be 'true' or 'false', got {raw!r}"
    )


@dataclass(frozen=True)
class FeedSettings:
    """Immutable settings for a single run.

    Text fields that end up in the feed are HTML-encoded ``Markup`` values.
    The directory, extension filter and output filename are plain decoded
    strings because they are only used to touch the filesystem.
    """

    directory_path: str
    url_prefix: Markup
    minify: bool
    podcast_title: Markup
    podcast_homepage: Markup
    language: Markup
    copyright: Markup
    subtitle: Markup
    author: Markup
    description_summary: Markup
    explicit: bool
    email: Markup
    artwork_url: Markup
    category: Markup
    sub_category: Markup
    podcast_rss_url: Markup
    file_extension_filter: str
    output_filename: str
    backup_existing_feed_first: bool
    auto_close: bool = False
    skip_unreadable_files: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None


def _resolve_log_file(source: SettingsSource, value: str) -> str:
    target = Path(value)
    base = getattr(source, "path", None)
    if target.is_absolute() or base is None:
        return str(target)
    return str((Path(base).parent / target).resolve())


def load_settings(source: SettingsSource) -> FeedSettings:
    """Read every recognised setting from source."""
    log_file = source.get("LogFile")

    settings = FeedSettings(
        directory_path=read_text(source, "DirectoryPath").unescape(),
        url_prefix=read_text(source, "UrlPrefix"),
        minify=read_bool(source, "Minify"),
        podcast_title=read_text(source, "PodcastTitle"),
        podcast_homepage=read_text(source, "PodcastHomepage"),
        language=read_text(source, "Language"),
        copyright=read_text(source, "Copyright"),
        subtitle=read_text(source, "Subtitle"),
        author=read_text(source, "Author"),
        description_summary=read_text(source, "DescriptionSummary"),
        explicit=read_bool(source, "Explicit"),
        email=read_text(source, "Email"),
        artwork_url=read_text(source, "ArtworkUrl"),
        category=read_text(source, "Category"),
        sub_category=read_text(source, "SubCategory"),
        podcast_rss_url=read_text(source, "PodcastRssUrl"),
        file_extension_filter=read_text(source, "FileExtensionFilter").unescape(),
        output_filename=read_text(source, "OutputFilename").unescape(),
        backup_existing_feed_first=read_bool(source, "BackupExistingFeedFirst"),
        auto_close=read_bool(source, "AutoClose", default=False),
        skip_unreadable_files=read_bool(source, "SkipUnreadableFiles", default=False),
        log_level=(source.get("LogLevel") or "INFO").strip(),
        log_file=_resolve_log_file(source, log_file) if log_file else None,
    )

    if not settings.output_filename:
        raise ConfigurationError("Setting 'OutputFilename' must not be empty")

    return settings
