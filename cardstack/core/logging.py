"""
Loguru setup for hosts embedding the engine.

The library itself only emits through `loguru.logger`; it stays silent
until a host enables the `cardstack` namespace.
"""
import os
import sys
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(debug_mode: bool = True, log_dir: Optional[str] = None) -> None:
    """
    Configure console (and optional rotating file) sinks and enable
    cardstack diagnostics. Call `silence()` to mute the engine again
    without touching the host's own sinks.

    Args:
        debug_mode: DEBUG level on the console when True, INFO otherwise
        log_dir: Directory for rotating log files; no file sink if None
    """
    logger.remove()

    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logger.add(
            os.path.join(log_dir, "cardstack_{time}.log"),
            rotation="10 MB",
            retention="1 week",
            level="DEBUG",
        )

    logger.enable("cardstack")
    logger.info("Logging initialized.")


def silence() -> None:
    """Mute cardstack diagnostics again (library default)."""
    logger.disable("cardstack")
