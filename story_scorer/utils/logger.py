import sys
from loguru import logger
from pathlib import Path
from typing import Optional

_configured = False

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(log_level: str = "INFO", log_file: Optional[Path] = None):
    """Route story_scorer log records to stderr (and optionally a file).

    The package disables its own loguru records on import so that library
    callers stay quiet; calling this re-enables them.
    """
    global _configured

    logger.enable("story_scorer")

    if _configured and log_file is None:
        return logger

    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=log_level.upper(),
        colorize=True,
    )

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=FILE_FORMAT,
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
        )

    _configured = True
    return logger
