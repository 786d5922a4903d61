from __future__ import annotations

"""
Logging Core Orchestrator.

Owns the lifecycle of the logging subsystem. Records are pushed onto a queue
by a single QueueHandler on the root logger and written by a QueueListener
thread, so that console and file I/O stay off the compilation thread.
Configuration is idempotent unless explicitly forced.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from compendium.infra.logging.config import _LEVEL_MAP, LoggingConfig
from compendium.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_compendium_configured"
_QUEUE_LISTENER_ATTR: str = "_compendium_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once per process.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if logging was already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        level = _resolve_level(cfg.level)
        root.setLevel(level)
        _detach(root)

        sinks = _build_sinks(cfg, level)
        if sinks:
            _attach_queue(root, sinks)
        return root

    except (OSError, ValueError, RuntimeError) as e:
        return _emergency_console(root, e)


def get_logger(name: str) -> logging.Logger:
    """Return the named logger (usually __name__)."""
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """
    Flush pending records and detach every handler this package installed.

    Safe to call repeatedly; 'configure_logging' may be called again after.
    """
    root = logging.getLogger()
    _detach(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _resolve_level(level: str) -> int:
    """Map a textual severity to its numeric constant; unknown names mean INFO."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _build_sinks(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    """Create the handlers the queue listener writes to: stderr, then the log file."""
    sinks: List[logging.Handler] = []
    if cfg.console:
        sinks.append(_create_console_handler(level, logging.Formatter(cfg.console_fmt)))

    if cfg.log_file:
        file_sink = _create_rotating_file_handler(
            cfg.log_file,
            level,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if file_sink is not None:
            sinks.append(file_sink)

    return sinks


def _attach_queue(root: logging.Logger, sinks: List[logging.Handler]) -> None:
    """Route root records through a queue drained by a listener thread."""
    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    entry = QueueHandler(records)
    _tag_handler(entry)

    listener = QueueListener(records, *sinks, respect_handler_level=True)
    listener.start()
    root.addHandler(entry)

    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_safe_stop_listener, listener)


def _detach(root: logging.Logger) -> None:
    """Stop the active listener (flushing it) and drop our handlers."""
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if _is_our_handler(h)]:
        root.removeHandler(handler)
        handler.close()


def _emergency_console(root: logging.Logger, error: Exception) -> logging.Logger:
    """Fall back to a plain stderr handler when the queue infrastructure fails."""
    root.setLevel(logging.INFO)
    _detach(root)

    fallback = logging.StreamHandler(sys.stderr)
    fallback.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
    _tag_handler(fallback)
    root.addHandler(fallback)

    root.warning(f"Logging infrastructure failed ({error}). Switched to emergency console.")
    return root


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating listeners that were already stopped.

    The listener's thread is None once stopped; a second stop() would fail,
    which happens when atexit runs after an explicit shutdown.
    """
    if listener is None:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
    for handler in listener.handlers:
        handler.close()
