from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation and shutdown.
"""

import logging
import time
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

import pytest

from compendium.infra.logging import LoggingConfig, configure_logging, shutdown_logging
from compendium.infra.logging.core import _CONFIGURED_FLAG_ATTR, _QUEUE_LISTENER_ATTR
from compendium.infra.logging.handlers import _HANDLER_TAG_ATTR


@pytest.fixture(autouse=True)
def reset_logging() -> None:
    """Clean up root logger handlers before and after each test."""
    root = logging.getLogger()
    saved_level = root.level

    def _reset() -> None:
        listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
        if listener and isinstance(listener, QueueListener):
            if getattr(listener, "_thread", None) is not None:
                listener.stop()
            setattr(root, _QUEUE_LISTENER_ATTR, None)

        for h in list(root.handlers):
            if getattr(h, _HANDLER_TAG_ATTR, False):
                root.removeHandler(h)
                h.close()

        if hasattr(root, _CONFIGURED_FLAG_ATTR):
            delattr(root, _CONFIGURED_FLAG_ATTR)

    _reset()
    yield
    _reset()
    root.setLevel(saved_level)


def _our_handlers(root: logging.Logger):
    return [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_forced_reconfiguration_replaces_handlers() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    configure_logging(LoggingConfig(level="DEBUG"), force=True)

    root = logging.getLogger()
    assert len(_our_handlers(root)) == 1
    assert root.level == logging.DEBUG


def test_log_rotation(tmp_path: Path) -> None:
    """TC-02: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "logs" / "compendium.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Give time for the QueueListener to process
    time.sleep(0.5)

    assert log_file.exists()
    assert (tmp_path / "logs" / "compendium.log.1").exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """TC-03: Verify that the root logger uses a QueueHandler-based architecture."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    ours = _our_handlers(root)

    assert len(ours) == 1
    assert isinstance(ours[0], QueueHandler)
    assert isinstance(getattr(root, _QUEUE_LISTENER_ATTR), QueueListener)


def test_shutdown_detaches_handlers_and_allows_reconfiguration() -> None:
    configure_logging(LoggingConfig(level="INFO"))
    shutdown_logging()

    root = logging.getLogger()
    assert _our_handlers(root) == []
    assert getattr(root, _QUEUE_LISTENER_ATTR) is None

    configure_logging(LoggingConfig(level="INFO"))
    assert len(_our_handlers(root)) == 1


def test_unknown_level_defaults_to_info() -> None:
    configure_logging(LoggingConfig(level="chatty"))
    assert logging.getLogger().level == logging.INFO


def test_for_cli_settings() -> None:
    cfg = LoggingConfig.for_cli(debug=True, log_file="run.log")
    assert cfg.level == "DEBUG"
    assert cfg.log_file == "run.log"
    assert LoggingConfig.for_cli().level == "INFO"
