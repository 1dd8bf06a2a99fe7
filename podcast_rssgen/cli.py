"""Command-line interface for the podcast_rssgen application."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pprint
import sys
from pathlib import Path
from typing import List, Optional

from .config import ConfigurationError, XmlSettingsSource, load_settings
from .runner import execute
from .tags import TagParseError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_TAGS = 3
EXIT_IO = 4


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Generate a podcast RSS feed from a directory of audio files."
    )
    parser.add_argument(
        "--config",
        default="App.config",
        help="Path to the appSettings XML file.",
    )

    # Overrides for logging/debugging
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    parser.add_argument(
        "--auto-close",
        action="store_true",
        help="Exit without waiting for Enter. Overrides the AutoClose setting.",
    )

    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ConfigurationError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def wait_for_enter() -> None:
    """Pause until the user presses Enter, when attached to a terminal."""
    if not sys.stdin or not sys.stdin.isatty():
        return
    print("Process Complete. Press Enter to Close.")
    input()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(XmlSettingsSource(args.config))

        # CLI overrides config
        log_level = args.log_level or settings.log_level
        log_file = args.log_file or settings.log_file

        configure_logging(log_level, log_file)

        logger.info(
            "Active Configuration:\n%s",
            pprint.pformat({k: str(v) for k, v in dataclasses.asdict(settings).items()}),
        )

        result = execute(settings)
    except ConfigurationError as exc:
        parser.error(str(exc))  # exits with status 2
    except TagParseError as exc:
        logger.error("%s", exc)
        return EXIT_TAGS
    except OSError as exc:
        logger.error("%s", exc)
        return EXIT_IO
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return EXIT_UNEXPECTED

    if result.skipped:
        logger.warning(
            "%d unreadable files were left out of the feed", len(result.skipped)
        )
    print(f"Wrote {result.item_count} items to {result.output_path}")

    if not (args.auto_close or settings.auto_close):
        wait_for_enter()
    return EXIT_OK
