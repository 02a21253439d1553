"""Console and file logging for the ``pyshearbox`` logger.

Library modules only create module-level loggers; handlers are installed
by :func:`setup_logging`, called from the host application or an example
script.
"""

from __future__ import annotations

import logging
import sys

#: Record layout: wall time, module, level and message.
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Install handlers on the package logger.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Logging level, e.g. ``logging.DEBUG`` to see every tick.
        log_file: Optional path of a log file, overwritten on each call.

    Returns:
        The ``pyshearbox`` logger.
    """
    logger = logging.getLogger("pyshearbox")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized at level {logging.getLevelName(level)}.")
    return logger
