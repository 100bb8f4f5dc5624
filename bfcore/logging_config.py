"""Logging setup for the bf-interp front end."""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> None:
    """Send 'bfinterp' log records to stderr, and to log_file when given.

    stderr keeps diagnostics apart from the program's own output on stdout.
    Calling it again replaces the previous handlers.
    """
    logger = logging.getLogger("bfinterp")
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging at level %s", logging.getLevelName(level))
