"""
Logging utilities for the niceevents library.

Library code only asks for a logger:
    ```python
    from niceevents.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("Interval appended")
    ```

The standalone classifier app (or any script that calls ui.run()) turns output on:
    ```python
    from niceevents.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

When niceevents is embedded in an application that has configured logging,
records propagate to that application's handlers. niceevents never writes log files.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "niceevents"
LOG_LEVEL_ENV = "NICEEVENTS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the niceevents logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the NICEEVENTS_LOG_LEVEL
        env var, or "INFO" if unset. Unknown names fall back to INFO.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        an existing stderr StreamHandler is kept and only the level is updated.
    """
    resolved = _resolve_level(level)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)

    formatter = logging.Formatter(
        fmt=fmt if fmt is not None else DEFAULT_FMT,
        datefmt=datefmt if datefmt is not None else DEFAULT_DATEFMT,
    )

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                h.setLevel(resolved)
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'niceevents' logger.
    Otherwise, returns logging.getLogger(name).
    """
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)
