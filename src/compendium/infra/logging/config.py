from __future__ import annotations

"""
Logging Configuration Models.

Defines the settings the logging subsystem is initialized with, and the
mapping from textual severity names to native logging levels.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Textual severity names accepted in configuration
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings of the logging subsystem.

    Attributes:
        level: Minimum severity to capture.
        console: Emit records on stderr.
        log_file: Optional path of a persistent, rotated log file.
        max_bytes: Size of a log file segment before rotation.
        backup_count: Number of rotated segments to keep.
        console_fmt: Record format on the terminal.
        file_fmt: Record format in the log file.
        datefmt: Timestamp format in the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024  # 1MB
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> LoggingConfig:
        """Settings used by the command line interface."""
        return cls(level="DEBUG" if debug else "INFO", log_file=log_file)
