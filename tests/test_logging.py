"""Tests for logging configuration."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from codeanalysis.logging import configure_logging, get_logger


def _reset() -> None:
    logger = logging.getLogger("codeanalysis")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_get_logger_is_namespaced() -> None:
    assert get_logger().name == "codeanalysis"
    assert get_logger("service").name == "codeanalysis.service"


def test_configure_logging_replaces_handlers() -> None:
    try:
        configure_logging()
        logger = configure_logging(verbose=True)

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert "%(threadName)s" in logger.handlers[0].formatter._fmt
    finally:
        _reset()


def test_file_sink_records_worker_thread(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "codeanalysis.log"
    try:
        configure_logging(log_file=log_file)
        worker = threading.Thread(
            target=lambda: get_logger("action").info("dispatched"),
            name="codeanalysis_0",
        )
        worker.start()
        worker.join()
    finally:
        _reset()

    line = log_file.read_text(encoding="utf-8").strip()
    assert "[codeanalysis_0] codeanalysis.action: dispatched" in line
