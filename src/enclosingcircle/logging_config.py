"""
Logging Configuration
Sets up the global logger for the application.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def make_formatter() -> logging.Formatter:
    """Format: Time - Module - Level - Message"""
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the root logger for the 'enclosingcircle' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    # Get the logger for our package
    logger = logging.getLogger("enclosingcircle")
    logger.setLevel(level)

    # Check if handlers already exist to avoid duplicate logs during reload/restart
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = make_formatter()

    # 1. Console Handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 2. File Handler (Optional)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized.")


def attach_handler(handler: logging.Handler, level: int = logging.INFO) -> None:
    """Attach an extra handler (e.g. the GUI log panel) to the package logger."""
    handler.setLevel(level)
    handler.setFormatter(make_formatter())
    logging.getLogger("enclosingcircle").addHandler(handler)


def detach_handler(handler: logging.Handler) -> None:
    logging.getLogger("enclosingcircle").removeHandler(handler)
