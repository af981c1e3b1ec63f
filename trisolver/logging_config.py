"""
Logging Configuration
Sets up the ``trisolver`` logger for the GUI and the command line.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "trisolver"


def setup_logging(level: Union[int, str] = logging.INFO,
                  log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the logger for the 'trisolver' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG or "DEBUG")
        log_file: Optional path to save logs to a file.
    """
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
