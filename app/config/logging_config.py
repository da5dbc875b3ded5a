import logging
import logging.handlers
import os
from datetime import datetime
from typing import Optional

from app.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_configured = False


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[str] = None,
    log_to_file: Optional[bool] = None,
) -> None:
    """
    Set up logging configuration to write logs to the console and, optionally,
    to a file named after the current date and time.

    Calling this more than once is a no-op so that reloads and tests do not
    stack duplicate handlers on the root logger.
    """
    global _configured
    if _configured:
        return

    level = (level or settings.log_level).upper()
    log_dir = log_dir or settings.log_dir
    if log_to_file is None:
        log_to_file = settings.log_to_file

    # Create formatter
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_to_file:
        # Create logs directory if it doesn't exist
        os.makedirs(log_dir, exist_ok=True)

        # Create log file name with current date and time
        current_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_filename = os.path.join(log_dir, f"app_{current_time}.log")

        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        # Also configure uvicorn access logs to use the same file
        access_logger = logging.getLogger("uvicorn.access")
        access_logger.addHandler(file_handler)
        access_logger.setLevel(level)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name
    """
    return logging.getLogger(name)
