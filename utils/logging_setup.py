"""Logging configuration for the hosted-login tools"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = "info",
    log_file: Optional[str] = None,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the root logger.

    Terminal output goes through a Rich handler; when a log file is given,
    records are also appended to it with the plain formatter.

    Args:
        level: Log level name (debug, info, warning, error)
        log_file: Optional path of a debug log file
        console: Rich console used by the terminal handler

    Returns:
        The configured root logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    rich_handler.setFormatter(logging.Formatter('%(name)s - %(message)s'))
    root_logger.addHandler(rich_handler)

    if log_file:
        log_path = os.path.abspath(log_file)
        file_handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(file_handler)
        root_logger.info(f"Debug logging enabled - appending to {log_path}")

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger
