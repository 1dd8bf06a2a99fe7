"""Jinja2 environment for podcast_rssgen templates."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from importlib import resources

from jinja2 import Environment, FileSystemLoader, select_autoescape

_ENV: Environment | None = None


def _rfc1123(value: datetime) -> str:
    """Format a datetime as an RFC 1123 date in GMT."""
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def _yesno(value: bool) -> str:
    return "yes" if value else "no"


def get_environment() -> Environment:
    """Return a cached Jinja environment configured for package templates."""
    global _ENV
    if _ENV is None:
        template_dir = resources.files(__package__) / "templates"
        loader = FileSystemLoader(str(template_dir))
        _ENV = Environment(
            loader=loader,
            autoescape=select_autoescape(["xml.j2", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        _ENV.filters["rfc1123"] = _rfc1123
        _ENV.filters["yesno"] = _yesno
    return _ENV
