"""Logging setup for the ROI engine service."""

import logging

from roi_engine.core.config import LOG_LEVEL


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    # Uvicorn installs its own handlers; keep engine loggers at the same level
    logging.getLogger("roi_engine").setLevel(level)
