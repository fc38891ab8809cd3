"""Backoff retry decorator for flaky source requests."""

import functools
import time

from .log import get_logger


def with_retry(max_retries: int = 1, base_delay: float = 1.0, exceptions: tuple = (Exception,)):
    """Retry the wrapped call on any of `exceptions`, doubling the delay each time.

    Only used for idempotent reads; generation calls are never wrapped.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt >= max_retries:
                        logger.debug("%s gave up after %d attempts: %s", func.__name__, attempt + 1, e)
                        raise
                    delay = base_delay * (2 ** attempt)
                    logger.debug(
                        "%s failed (attempt %d/%d): %s, retrying in %.1fs",
                        func.__name__, attempt + 1, max_retries + 1, e, delay,
                    )
                    time.sleep(delay)
        return wrapper
    return decorator
