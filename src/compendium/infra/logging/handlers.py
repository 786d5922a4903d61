from __future__ import annotations

"""
Logging Handlers and Tagging Utilities.

Builds the handlers attached by 'configure_logging' and tags them, so that
a re-configuration only ever detaches handlers this package created and
leaves those installed by the host application (or pytest) alone.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from compendium.infra.fs import ensure_parent_dirs

_HANDLER_TAG_ATTR: str = "_compendium_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as managed by this package."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.StreamHandler:
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Initialize a RotatingFileHandler, creating its folder if needed.

    Args:
        log_file: Path of the log file.
        level_int: Numeric logging level.
        formatter: Record formatter.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of rotated segments to keep.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None if the file
        cannot be opened (a warning is written to stderr).
    """
    try:
        ensure_parent_dirs(log_file)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
