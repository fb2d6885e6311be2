"""Process-wide logging setup (web app and CLI entry points share one format)."""

import logging
import sys
import time

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a single stdout handler.

    Clears existing handlers first so reloads do not duplicate output, and aligns
    uvicorn's loggers on the same handler.
    """
    lvl = level.upper()

    root = logging.getLogger()
    root.setLevel(lvl)
    if root.handlers:
        root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    # LOG_DATEFMT ends in Z, so timestamps must be UTC.
    formatter.converter = time.gmtime
    handler.setFormatter(formatter)
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(name)
        logger.handlers = root.handlers
        logger.setLevel(lvl)
