"""
Logging setup for command-line use.

Library modules only create module loggers; handlers are attached here
by the entry point.
"""
from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
HANDLER_NAME = "poll_toolkit.console"


def configure_logging(verbose: bool = False, logger_name: Optional[str] = "poll_toolkit") -> logging.Handler:
    """
    Attach a console handler to the toolkit logger.

    Calling it again reuses the existing handler and only updates the level.

    Args:
        verbose: Log DEBUG messages instead of INFO and above.
        logger_name: Logger to configure. None = root logger.

    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    for existing in logger.handlers:
        if existing.get_name() == HANDLER_NAME:
            return existing

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    return handler
