from __future__ import annotations

import logging
from io import StringIO

from order_intake.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()

    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert logger.propagate is False

    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)


def test_setup_logging_is_idempotent():
    first = setup_logging()
    assert setup_logging() is first
    assert len(first.handlers) == 1


def test_reset_logging_does_not_duplicate_handlers():
    setup_logging()
    reset_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_logging_labeled_prefixes():
    captured_output = StringIO()
    logger = logging.getLogger("test_order_intake_labels")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "files=1")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY files=1",
    ]


def test_module_loggers_propagate_to_app_logger(capsys):
    setup_logging()
    logging.getLogger("order_intake.services.orchestrator").warning("child message")
    log_summary("files=0")
    out = capsys.readouterr().out
    assert "WARN child message" in out
    assert "SUMMARY files=0" in out


def test_set_debug_lets_debug_records_through(capsys):
    logger = setup_logging()
    logging.getLogger("order_intake.excel.reader").debug("hidden")
    set_debug(logger)
    logging.getLogger("order_intake.excel.reader").debug("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG shown" in out
    assert logger.level == logging.DEBUG
