"""Exponential-backoff retry for calls to the search and LLM services."""
from __future__ import annotations

import functools
import logging
import random
import time
from typing import Any, Callable, Iterator, Tuple, Type

logger = logging.getLogger(__name__)


def backoff_delays(
    max_attempts: int,
    base_delay: float,
    max_delay: float,
    backoff_factor: float,
    jitter: bool,
) -> Iterator[float]:
    """Seconds to wait before each retry; yields ``max_attempts - 1`` values."""
    for n in range(max_attempts - 1):
        delay = min(base_delay * backoff_factor ** n, max_delay)
        yield delay * (0.5 + random.random()) if jitter else delay


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 10.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
) -> Callable:
    """Decorator: re-invoke the wrapped call on *retryable* errors.

    The last exception is re-raised once the attempts run out, so callers
    at the service boundary decide how a final failure is reported.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            delays = backoff_delays(max_attempts, base_delay, max_delay, backoff_factor, jitter)
            attempt = 0
            while True:
                attempt += 1
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    delay = next(delays, None)
                    if delay is None:
                        logger.warning("%s gave up after %d attempt(s): %s", fn.__qualname__, attempt, exc)
                        raise
                    logger.info(
                        "%s failed (%s); attempt %d of %d in %.1fs",
                        fn.__qualname__, exc, attempt + 1, max_attempts, delay,
                    )
                    time.sleep(delay)

        return wrapper

    return decorator
