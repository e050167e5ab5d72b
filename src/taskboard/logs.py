"""
Logging setup for the taskboard package.

Modules log through ``logging.getLogger(__name__)``; this only attaches a
handler to the package logger so the messages go somewhere.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stream handler to the ``taskboard`` logger (once)."""
    global _handler
    logger = logging.getLogger("taskboard")
    logger.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    return logger
