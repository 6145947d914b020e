"""Python logging setup for the logtally command line.

Diagnostics go to stderr through a single handler on the ``logtally``
logger so that stdout stays free for results.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "logtally"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level.

    Args:
        verbosity: 0 for WARNING, 1 for INFO, 2 or more for DEBUG.
    """
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def configure_logging(verbosity: int = 0, stream: TextIO | None = None) -> logging.Logger:
    """Install the stderr handler on the ``logtally`` logger.

    Calling this again replaces the previous handler, so the level can be
    changed once the final configuration is known.

    Args:
        verbosity: See level_for_verbosity().
        stream: Destination stream, defaults to ``sys.stderr``.

    Returns:
        The configured ``logtally`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level_for_verbosity(verbosity))
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
