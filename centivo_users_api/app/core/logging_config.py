"""
Logging configuration for the application.

Records from every module logger end up on the console, and in
``LOG_FILE`` when that variable is set.  PyMongo logs commands,
connection pool and server selection events under ``pymongo.*`` at
DEBUG level; those loggers are capped at WARNING unless the service
itself runs at DEBUG.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DRIVER_LOGGERS = ("pymongo",)


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    driver_loggers: Iterable[str] = DRIVER_LOGGERS,
) -> None:
    """Configure root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a file that receives the same records as the console.
    driver_loggers : Iterable[str]
        Logger names quieted to WARNING when ``level`` is above DEBUG.
    """
    root = logging.getLogger()
    if root.handlers:
        # uvicorn, pytest or an earlier create_app call got here first.
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    if numeric_level > logging.DEBUG:
        for name in driver_loggers:
            logging.getLogger(name).setLevel(logging.WARNING)
