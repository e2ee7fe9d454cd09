"""
Logger setup shared by the monster catalog scripts.

Modules under monsters/ only call logging.getLogger(__name__). The script that
runs a load configures the "monsters" logger here, and every module logger
below it inherits those handlers. What each level carries:
    DEBUG: one line per file parsed, per ignored property, per skipped flag or skill
    INFO: directory scanned, catalog size once the load finishes
    WARNING: a monster file vanished between listing and reading
    ERROR: the load aborted (conversion, validation or duplicate race id)

Usage:
    from logging_config import parse_log_level, setup_logging

    logger = setup_logging("monsters", level=parse_log_level("debug"))
"""

import logging
import sys
from pathlib import Path
from typing import Optional


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Attach stdout and/or file handlers to the named logger.

    Calling it again for the same name replaces the handlers rather than
    stacking them, so a script may reconfigure after parsing its arguments.

    Args:
        name: Logger name; usually the package name, so module loggers below it inherit
        level: Threshold for the logger and every handler it gets
        log_file: Append log lines here as well (parent directories are created)
        console_output: Write to stdout

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def parse_log_level(value: Optional[str], default: int = logging.INFO) -> int:
    """
    Resolve a level name such as "debug" or "WARNING" to a logging level.

    Args:
        value: Level name (case-insensitive) or None
        default: Level returned when value is None or not a known level name

    Returns:
        Logging level integer
    """
    if not value:
        return default
    level = logging.getLevelName(value.strip().upper())
    return level if isinstance(level, int) else default
