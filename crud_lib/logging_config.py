from __future__ import annotations
import logging
from typing import Optional

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for the application.

    `level` is a standard level name (e.g. 'DEBUG'); unknown or missing
    names fall back to WARNING. Existing root handlers are replaced so the
    function can be called again after the configuration is reloaded.
    Returns a module logger for the caller.
    """
    DEFAULT_LOG_LEVEL = logging.WARNING
    numeric = getattr(logging, level.upper(), None) if isinstance(level, str) else None
    if isinstance(numeric, int):
        DEFAULT_LOG_LEVEL = numeric

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=DEFAULT_LOG_LEVEL, format=LOG_FORMAT)
    logging.log(100, f'[crud]: Log level set to: {logging.getLevelName(DEFAULT_LOG_LEVEL)}')

    # Keep known noisy libraries quiet by default
    logging.getLogger('uvicorn.access').setLevel(max(DEFAULT_LOG_LEVEL, logging.INFO))
    logging.getLogger('httpx').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("Starting CRUD Server")
    return logger
