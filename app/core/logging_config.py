from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "multipart")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Calling it again only adjusts the level, so app factories and scripts can
    both call it safely.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_decor_ops", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._decor_ops = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    # Reduce verbosity of third-party libraries
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
