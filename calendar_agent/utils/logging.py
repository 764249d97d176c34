"""Logging setup with verbosity levels and optional file logging."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

# Third-party loggers that are chatty at INFO/DEBUG
NOISY_LOGGERS = ("caldav", "urllib3", "requests", "niquests")

VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_dir: Optional[str] = "logs",
) -> logging.Logger:
    """
    Set up logging with verbosity levels and file output.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG, 3=DEBUG including
            HTTP client libraries)
        log_file: Optional log file path. If None, a timestamped file in log_dir is used.
        log_dir: Directory for the default log file; None disables file logging
            unless log_file is given

    Returns:
        Configured logger instance
    """
    log_level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    log_path = None
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
    elif log_dir is not None:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = logs_dir / f"log_{timestamp}.log"

    if log_path is not None:
        # File handler always captures DEBUG
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    library_level = logging.DEBUG if verbosity >= 3 else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging initialized. Verbosity: {verbosity}, Log file: {log_path}")

    return logger
