"""
Logging configuration for GeoPackage FeatureInfo Template Generator.

Console displays INFO-level messages for user feedback, while the log file
captures DEBUG-level details for troubleshooting.

Functions:
    setup_logging: Initialize logging handlers and return log file path
    get_logger: Get a logger instance for a specific module

Example:
    >>> from utils.logger import setup_logging, get_logger
    >>> log_file = setup_logging()
    >>> logger = get_logger(__name__)
    >>> logger.info("Processing started")
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

from config.config_loader import LOG_DIR, LOGGER_NAME


def setup_logging(log_dir: Optional[Path] = None) -> Path:
    """
    Setup logging to console and file.

    Creates two handlers:
    - Console: INFO level with clean formatting
    - File: DEBUG level with timestamps and module names

    Parameters:
    -----------
    log_dir : Optional[Path]
        Directory for log files. Defaults to ./logs in the working directory

    Returns:
    --------
    Path
        Path to the created log file
    """
    if log_dir is None:
        log_dir = LOG_DIR
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f'{LOGGER_NAME}_{timestamp}.log'

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter('%(message)s'))

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    logger.addHandler(console)
    logger.addHandler(file_handler)

    logger.debug(f"Logging initialized: {log_file}")

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Parameters:
    -----------
    name : str
        Module name (typically __name__)

    Returns:
    --------
    logging.Logger
        Logger nested under the generator's root logger
    """
    return logging.getLogger(f'{LOGGER_NAME}.{name}')
