"""Logging utilities for gitinfogen commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "gitinfogen"
# Set through ``extra=`` on records that carry a build diagnostic.
DIAGNOSTIC_ATTR = "diagnostic"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the gitinfogen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _not_a_diagnostic(record: logging.LogRecord) -> bool:
    return not hasattr(record, DIAGNOSTIC_ATTR)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route gitinfogen logs to the console and, optionally, a log file.

    Diagnostic records are kept off the console because the CLI prints them in
    the ``file(line,col): warning ID: message`` form build hosts parse. The log
    file receives every record.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[gitinfogen] %(levelname)s %(message)s"))
    stream_handler.addFilter(_not_a_diagnostic)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["DIAGNOSTIC_ATTR", "configure_logging", "get_logger"]
