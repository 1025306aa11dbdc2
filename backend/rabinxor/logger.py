import logging
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LOGGER_NAME = "rabinxor"

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a JSON stream handler to the package logger (once)."""
    global _handler
    logger = logging.getLogger(LOGGER_NAME)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(_handler)
    logger.setLevel(level.upper())
    return logger
