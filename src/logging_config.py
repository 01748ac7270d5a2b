"""
Logging configuration for the word connect puzzle generator.
Console output for progress, plus a rotating DEBUG log file per run.
"""
#
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

import logging
import os
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional, Sequence

# Third-party loggers that flood the DEBUG file with connection details
NOISY_LOGGERS = ("urllib3", "requests")

FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)s:%(lineno)d - %(funcName)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)-8s - %(message)s"


def setup_logging(
    log_dir: str,
    log_level: str = "INFO",
    log_file_prefix: str = "word_connect",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
    quiet_loggers: Sequence[str] = NOISY_LOGGERS,
) -> Optional[str]:
    """
    Configure root logging for a generation run.

    Args:
        log_dir: Directory for the run's log file
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file_prefix: Prefix for log filename
        enable_console: Whether to log progress to stdout
        enable_file: Whether to write a rotating DEBUG log file
        max_bytes: Rotation size of the log file
        backup_count: Rotated files kept
        quiet_loggers: Logger names capped at WARNING

    Returns:
        Path to the log file, or None when file logging is disabled
    """
    console_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Capture everything, handlers will filter

    # Replace handlers from a previous run in the same process
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    log_path = None
    if enable_file:
        os.makedirs(log_dir, exist_ok=True)
        run_stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_path = os.path.join(log_dir, f"{log_file_prefix}_{run_stamp}.log")

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter(fmt=FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        )
        root_logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    if log_path:
        logger.info(f"Writing run log to {log_path}")
    logger.debug(
        f"Console level: {log_level}, console: {enable_console}, file: {enable_file}"
    )

    return log_path
