"""
Bounded retry with exponential backoff for idempotent external calls.
"""

import asyncio
from functools import wraps
from typing import Tuple, Type

from alumni.core.logging_config import logger


def retry_with_backoff(
    max_retries: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 8.0,
    retry_on: Tuple[Type[BaseException], ...] = (ConnectionError, TimeoutError),
    label: str = "retry",
):
    """
    Decorator for async functions: retry on `retry_on` exceptions.

    Args:
        max_retries: Maximum number of attempts (including the first)
        base_delay: Initial delay in seconds
        max_delay: Maximum delay cap in seconds
        retry_on: Exception types that trigger another attempt
        label: Prefix used in log lines
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            attempts = max(1, max_retries)
            for attempt in range(attempts):
                try:
                    return await func(*args, **kwargs)
                except retry_on as e:
                    if attempt == attempts - 1:
                        logger.error(f"[{label}] All {attempts} attempts failed: {e}")
                        raise
                    delay = min(base_delay * (2 ** attempt), max_delay)
                    logger.warning(
                        f"[{label}] Attempt {attempt + 1}/{attempts} failed: {e}. Retrying in {delay:.1f}s..."
                    )
                    await asyncio.sleep(delay)
        return wrapper
    return decorator
