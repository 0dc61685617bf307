"""Logging initialization with labeled prefixes (INFO|WARN|ERROR).

Modules log through `logging.getLogger(__name__)`; this only wires the
package logger to stderr once per process (Streamlit re-executes the script
on every interaction).
"""

from __future__ import annotations

import logging
import sys

__all__ = ["setup_logging", "LabeledFormatter"]

LOGGER_NAME = "results_dashboard"


class LabeledFormatter(logging.Formatter):
    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    def format(self, record: logging.LogRecord) -> str:
        label = self.LEVEL_LABELS.get(record.levelno, record.levelname)
        message = f"{label} {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Idempotent across reruns
    if not any(getattr(h, "_results_dashboard", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(LabeledFormatter())
        handler._results_dashboard = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
        logger.propagate = False
    return logger
