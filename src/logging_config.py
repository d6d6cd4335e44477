"""
Logging setup for slide-gen scripts.

Library modules only call logging.getLogger(__name__). A script calls
setup_logging() once; the same handlers are attached to the script logger
and to the library package loggers ("icons", "caches"), so fetch and cache
messages reach the console next to the script's own.

Log levels:
    DEBUG: Cache hits and misses, URL construction, per-icon dispatch
    INFO: Registry loaded, icon fetched and saved
    WARNING: Accessor used before load, stale cache entries removed
    ERROR: Failures reported by scripts before exiting

Usage:
    from logging_config import setup_logging

    logger = setup_logging("warm_icon_cache", log_file=Path("warm.log"))
"""

import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LIBRARY_LOGGERS = ("icons", "caches")

# httpx logs every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _build_handlers(level: int, log_file: Optional[Path], console_output: bool) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if console_output:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
    console_output: bool = True,
    http_level: int = logging.WARNING,
    library_loggers: Iterable[str] = LIBRARY_LOGGERS
) -> logging.Logger:
    """
    Configure the script logger and the library loggers; return the former.

    Args:
        name: Script logger name
        level: Level for the script and library loggers (default: INFO)
        log_file: Optional file that receives the same records as the console
        console_output: Write to stderr (default: True)
        http_level: Level applied to the httpx/httpcore loggers (default: WARNING)
        library_loggers: Package loggers that share the script's handlers

    Returns:
        The script logger
    """
    handlers = _build_handlers(level, log_file, console_output)

    for logger_name in (name, *library_loggers):
        target = logging.getLogger(logger_name)
        target.setLevel(level)
        # Calling setup twice replaces handlers rather than duplicating them
        target.handlers.clear()
        for handler in handlers:
            target.addHandler(handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(http_level)

    return logging.getLogger(name)
