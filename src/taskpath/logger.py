"""Package logger for taskpath.

Output is chosen by the CLI ``-v`` count. Two extra levels sit between the
standard ones so the critical path summary and the per-task relation checks
can be switched on separately.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

CHANGES_LEVEL = 25  # -v: computed results
CHECKS_LEVEL = 15  # -vv: one line per relation check

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

_LEVEL_FOR_VERBOSITY = {
    VERBOSITY_SILENT: logging.WARNING,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class TaskpathLogger(logging.Logger):
    """Logger with one method per taskpath verbosity step.

    ``changes`` carries the critical path and cycle summaries, ``checks``
    carries validator findings, and ``debug`` carries pass-by-pass node
    timings.
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> TaskpathLogger:
    """Return the shared ``taskpath`` logger."""
    logging.setLoggerClass(TaskpathLogger)
    logger = logging.getLogger("taskpath")
    logging.setLoggerClass(logging.Logger)
    assert isinstance(logger, TaskpathLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Send taskpath log records at the given verbosity to ``stream``.

    Any handler from an earlier call is replaced. Unknown verbosity values
    fall back to warnings only.

    Args:
        verbosity: CLI ``-v`` value, 0 to 3
        stream: Destination, stderr when omitted
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVEL_FOR_VERBOSITY.get(verbosity, logging.WARNING))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and go back to warnings only, propagating to root."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True


def changes_enabled() -> bool:
    return get_logger().isEnabledFor(CHANGES_LEVEL)


def debug_enabled() -> bool:
    return get_logger().isEnabledFor(logging.DEBUG)
