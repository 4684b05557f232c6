"""Process-wide logging setup."""

import logging

from core.config import LOG_LEVEL

_INITIALIZED = False


def configure_logging(level: str | None = None) -> None:
    """Configure console logging once per process."""
    global _INITIALIZED
    if _INITIALIZED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO))
    root.addHandler(handler)

    # httpx logs every request URL at INFO, including query strings
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _INITIALIZED = True
