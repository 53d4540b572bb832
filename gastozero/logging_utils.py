"""Mini README: Application-wide logging helpers for GastoZero.

Structure:
    * get_logger - factory returning module loggers with shared formatting.
    * configure_root_logger - installs the root handler once per process.

Usage:
    Modules declare ``LOGGER = get_logger(__name__)``. The CLI calls
    ``configure_root_logger`` with the configured level before serving so
    uvicorn reloads do not stack duplicate handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger once; later calls only adjust an explicit level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if level is not None:
        root_logger.setLevel(level.upper() if isinstance(level, str) else level)
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    if level is None:
        root_logger.setLevel(logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
