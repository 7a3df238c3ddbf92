"""Jittered exponential backoff for requests GitHub is still processing."""

import logging
import math
import random
import time
from collections.abc import Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Initial request plus 4 retries
MAX_ATTEMPTS = 5


def retry_delay(attempt: int) -> int:
    """Backoff in milliseconds: 2**attempt seconds plus up to one second of jitter."""
    return math.floor((2**attempt + random.random()) * 1000)


def with_backoff(
    operation: Callable[[int], T],
    max_attempts: int = MAX_ATTEMPTS,
    backoff: Callable[[int], int] = retry_delay,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    start: int = 0,
) -> T:
    """Call ``operation(attempt)`` until it succeeds or attempts run out.

    Only exceptions in ``retry_on`` are retried; anything else propagates on
    the first occurrence. After ``max_attempts`` calls the last exception is
    re-raised unchanged.
    """
    attempt = start
    while True:
        try:
            return operation(attempt)
        except retry_on:
            if attempt + 1 >= max_attempts:
                raise
            delay = backoff(attempt)
            logger.debug("Attempt %d not ready, retrying in %dms", attempt + 1, delay)
            time.sleep(delay / 1000)
            attempt += 1
