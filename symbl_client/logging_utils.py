from __future__ import annotations

import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PACKAGE_LOGGER = "symbl_client"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach one stream handler to the package logger.

    The level comes from ``SYMBL_LOG_LEVEL`` when not given. Calling this
    again only updates the level.
    """
    if level is None:
        level = os.getenv("SYMBL_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(getattr(handler, "_symbl_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._symbl_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
