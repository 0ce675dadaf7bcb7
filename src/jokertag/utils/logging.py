"""Logging utilities for JokerTag pipeline.

Console output goes through ``tqdm.write`` so log lines printed while a
scoring progress bar is active land above the bar instead of breaking it.
Progress bars themselves stay on stderr; log lines go to stdout.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class TqdmLoggingHandler(logging.StreamHandler):
    """Stream handler that writes through tqdm so active bars are redrawn."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
            self.flush()
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


def setup_logging(
    name: str = "jokertag",
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Configure the package logger for a CLI run.

    Library modules only call ``logging.getLogger(__name__)``; the pipeline
    entry points call this once after parsing ``--log-level``.

    Args:
        name: Logger name (children such as "jokertag.scorer" inherit it)
        level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives every record at DEBUG
        format_string: Optional custom format string

    Returns:
        Configured logger instance
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    console_level = getattr(logging, level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if log_file else console_level)
    logger.propagate = False

    # Repeated CLI calls in one process must not stack handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = TqdmLoggingHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
