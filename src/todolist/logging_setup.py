from __future__ import annotations

import logging
import sys
from typing import Union

PACKAGE_LOGGER = "todolist"


def setup_logging(level: Union[int, str] = logging.INFO) -> logging.Logger:
    """
    Configure the package logger with a single stderr handler.

    Safe to call more than once; existing handlers on the package logger are
    replaced. Records still propagate to the root logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    for h in list(logger.handlers):
        logger.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    return logger
