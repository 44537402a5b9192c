from __future__ import annotations

import logging
import sys

"""Labeled stdout logging for the intake CLI.

Each printed line is `<LABEL> <message>` with LABEL one of
DEBUG|INFO|WARN|ERROR|SUMMARY, so wrappers can grep the per-file WARN
observations and parse the final SUMMARY line. Library modules only call
logging.getLogger(__name__); their records reach the handler installed here
on the `order_intake` logger.
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "set_debug",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "order_intake"
SUMMARY_LEVEL = 25  # between INFO and WARNING

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """`LABEL message`; WARNING is shortened to WARN."""

    LEVEL_LABELS = {
        logging.WARNING: "WARN",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Install the stdout handler on the `order_intake` logger (once).

    Later calls return the already configured logger unchanged; use
    set_debug() to raise verbosity after setup.
    """
    global _configured
    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    # Records stop here; the root logger never prints them a second time
    logger.propagate = False

    _configured = logger
    return logger


def set_debug(logger: logging.Logger) -> None:
    """Switch the app logger and its handlers to DEBUG (--debug)."""
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)


def log_summary(message: str) -> None:
    """Emit `message` at SUMMARY level (the label is added by the formatter)."""
    setup_logging().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup binds the current stdout."""
    global _configured
    _configured = None
