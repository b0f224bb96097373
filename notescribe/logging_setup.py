"""Logging configuration for notescribe."""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str, log_file: Optional[Path] = None) -> None:
    """Configure the root logger with a console handler and an optional file.

    Args:
        level: Logging level name (DEBUG, INFO, ...).
        log_file: Optional file that receives the same records.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Replace handlers from a previous call
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            root.warning(f"Could not open log file {log_file}: {e}")
        else:
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
