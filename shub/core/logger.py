"""Logging configuration and utilities."""

import os
import sys
import logging
from datetime import datetime
from typing import Optional


def setup_logging(
    command: str = "dashboard",
    verbose: bool = False,
    logs_dir: Optional[str] = None
) -> logging.Logger:
    """Configure logging to both file and console.

    Command output goes to stdout, so the console handler writes to stderr
    and only shows warnings unless verbose is set. The log file always
    receives INFO and above.

    Args:
        command: Name of the command for log filename
        verbose: Show INFO (and DEBUG in the file) on the console
        logs_dir: Directory for log files (default: <config dir>/logs)

    Returns:
        Configured logger instance
    """
    if logs_dir is None:
        from ..config import get_config_dir
        logs_dir = str(get_config_dir() / 'logs')
    os.makedirs(logs_dir, exist_ok=True)

    # Create timestamp-based log filename
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_file = os.path.join(logs_dir, f'shub_{command}_{timestamp}.log')

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[file_handler, console_handler],
        force=True  # Reset any existing configuration
    )

    # Keep urllib3 connection chatter out of the log
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    logger = logging.getLogger('shub')
    logger.info(f"Starting shub {command}")
    logger.info(f"Log file: {log_file}")

    return logger

