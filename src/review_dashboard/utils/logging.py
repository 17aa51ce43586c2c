"""Logging configuration."""

import logging
from typing import Optional
from rich.logging import RichHandler
from rich.console import Console

from review_dashboard.config import settings

LOGGER_NAME = "review_dashboard"

# Log to stderr so JSON printed on stdout stays parseable
console = Console(stderr=True)


def resolve_level(verbose: bool = False, level_name: Optional[str] = None) -> int:
    """Pick the log level for the package logger.

    Args:
        verbose: Force DEBUG, as the --verbose flag and REVIEWS_VERBOSE do
        level_name: Level name such as "WARNING"; settings.log_level when omitted

    Returns:
        Numeric logging level, INFO for unknown names
    """
    if verbose or settings.verbose:
        return logging.DEBUG

    level = logging.getLevelName((level_name or settings.log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(verbose: bool = False, level_name: Optional[str] = None) -> logging.Logger:
    """Attach a Rich handler to the package logger.

    Safe to call repeatedly: the handler is added once and later calls only
    change the level.

    Args:
        verbose: Enable verbose logging
        level_name: Level name overriding settings.log_level

    Returns:
        Configured package logger
    """
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.setLevel(resolve_level(verbose, level_name))

    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            log_time_format="[%X]",
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)

    for handler in package_logger.handlers:
        if isinstance(handler, RichHandler):
            handler.tracebacks_show_locals = package_logger.level == logging.DEBUG

    return package_logger


# Package-level logger
logger = setup_logging()
