"""
===========================================================
circle_check.logging_config — command line logging
===========================================================

Stage modules log through `logging.getLogger(__name__)` and add no handlers;
the CLI attaches them here. Records go to stderr (stdout carries the
verdict) and, with --log-file, to a file as well.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """Route records of the 'circle_check' namespace to stderr and `log_file`."""
    logger = logging.getLogger("circle_check")
    logger.setLevel(level)
    for old in logger.handlers[:]:
        logger.removeHandler(old)
        old.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
