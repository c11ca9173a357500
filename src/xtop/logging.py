"""Logging setup for the xtop command.

Library modules log through ``logging.getLogger(__name__)`` with dotted event
names (``session.started``). Only the CLI installs a handler, on stderr, so
the dashboard on stdout is left alone unless ``--verbose`` is asked for.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Logger:
    logger = logging.getLogger("xtop")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
