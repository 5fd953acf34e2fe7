"""
Logging utilities for internal use.
Usage:
    from callspy.internal.logger import get_logger
    log = get_logger(__name__)

    log.debug("installed spy on %s.%s", holder, name)

Every logger handed out here carries a rate limiting filter: a given call site
(pathname and line number) logs at most once every ``CALLSPY_LOGGING_RATE``
seconds. Skipped records are counted and reported on the next record that gets
through, e.g.::

    WARNING [callspy.internal.patching] restoring Foo.bar out of order [3 skipped]

The limit does not apply while the logger is set to DEBUG, or when the rate is 0.
"""

import collections
import logging
import time
from typing import DefaultDict
from typing import Tuple

from callspy.settings import config


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve or create a ``Logger`` instance with consistent behavior for internal use.
    """
    logger = logging.getLogger(name)
    # addFilter will only add the filter if it is not already present
    logger.addFilter(log_filter)
    logger.propagate = True
    return logger


class LoggingBucket:
    """Time bucket of a single call site and the number of records it skipped."""

    def __init__(self, bucket: float, skipped: int):
        self.bucket = bucket
        self.skipped = skipped

    def __repr__(self):
        return f"LoggingBucket({self.bucket}, {self.skipped})"

    def is_sampled(self, record: logging.LogRecord, rate: float) -> bool:
        current = time.monotonic()
        if current - self.bucket >= rate:
            self.bucket = current
            record.skipped = self.skipped
            self.skipped = 0
            return True
        self.skipped += 1
        return False


_MINF = float("-inf")

_buckets: DefaultDict[Tuple[str, int], LoggingBucket] = collections.defaultdict(lambda: LoggingBucket(_MINF, 0))


def log_filter(record: logging.LogRecord) -> bool:
    """Return whether ``record`` should be emitted (True) or skipped (False)."""
    logger = logging.getLogger(record.name)
    rate = config.logging_rate
    if not rate or logger.getEffectiveLevel() == logging.DEBUG:
        return True
    return _buckets[(record.pathname, record.lineno)].is_sampled(record, rate)


def reset_buckets() -> None:
    _buckets.clear()
