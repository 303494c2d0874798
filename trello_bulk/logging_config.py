"""Centralized logging configuration for trello_bulk."""

from __future__ import annotations

import logging
import sys

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for trello_bulk.

    Every progress line is prefixed with an ISO-8601 timestamp so a run can be
    followed card by card.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR). Default: INFO.
        log_file: Optional path to log file. If provided, logs will be written to both
                  console and file.

    Example:
        >>> setup_logging("DEBUG")  # Verbose output to console
        >>> setup_logging("INFO", "bulk-run.log")  # Standard output + file logging
    """
    logger = logging.getLogger("trello_bulk")
    logger.setLevel(LOG_LEVELS.get(level.upper(), logging.INFO))

    # Remove any existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S")
    )
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
        )
        logger.addHandler(file_handler)

    # Prevent propagation to root logger
    logger.propagate = False
