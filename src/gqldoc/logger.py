"""Diagnostics for the rendering pipeline.

Output goes to stderr so it never mixes with a document written to stdout.
Each pipeline stage logs through a child of the ``gqldoc`` logger
(``gqldoc.parser``, ``gqldoc.classifier``, ``gqldoc.anchors``,
``gqldoc.document``); the command line configures only the parent.

Verbosity:
    0  errors only
    1  decisions that change the output: suffixed anchors, rendered sections
    2  what was read and what was left out: parsed files, skipped names
    3  every anchor registration, prefixed with the stage that logged it
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

ROOT_LOGGER = "gqldoc"

CHANGES_LEVEL = 25
CHECKS_LEVEL = 15

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

_VERBOSITY_LEVELS = (logging.ERROR, CHANGES_LEVEL, CHECKS_LEVEL, logging.DEBUG)

_PLAIN_FORMAT = "%(message)s"
_DEBUG_FORMAT = "[%(name)s] %(message)s"


class GqldocLogger(logging.Logger):
    """Logger with one method per verbosity step above errors."""

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger(name: str = ROOT_LOGGER) -> GqldocLogger:
    """Get the logger for a pipeline stage; modules pass their ``__name__``."""
    logging.setLoggerClass(GqldocLogger)
    logger = logging.getLogger(name)
    assert isinstance(logger, GqldocLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the parent logger; safe to call again to reconfigure.

    Args:
        verbosity: 0-3, values above 3 are treated as 3
        stream: Output stream (defaults to sys.stderr)
    """
    verbosity = max(0, min(verbosity, len(_VERBOSITY_LEVELS) - 1))
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_VERBOSITY_LEVELS[verbosity])

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    fmt = _DEBUG_FORMAT if verbosity == len(_VERBOSITY_LEVELS) - 1 else _PLAIN_FORMAT
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Back to errors only with no handler (used between tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.ERROR)
