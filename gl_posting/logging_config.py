"""
Logging setup for the posting engine.

Every module logs through ``logging.getLogger(__name__)``; this module
only decides where those records go and how they look.
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the ``gl_posting`` logger."""
    global _configured

    logger = logging.getLogger("gl_posting")
    logger.setLevel(level.upper())

    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _configured = True
