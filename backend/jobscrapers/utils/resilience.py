"""
Resilience helpers shared by all scrapers.

retry_operation() re-raises once its attempts are exhausted. The probe
and click wrappers report failure as False, because a missing marker or
control is an expected outcome on these sites.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


async def retry_operation(
    operation: Callable[[], Awaitable[T]],
    retries: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    logger: Optional[logging.Logger] = None,
) -> T:
    """
    Await operation() until it succeeds or attempts run out.

    Args:
        operation: Zero-argument callable returning an awaitable
        retries: Total number of attempts (>= 1)
        delay: Wait before the second attempt, in seconds
        backoff: Multiplier applied to the wait after each failure
        logger: Logger for retry warnings (module logger by default)

    Returns:
        The operation's result

    Raises:
        The last exception raised by operation()
    """
    if retries < 1:
        raise ValueError(f"retries must be at least 1, got {retries}")

    log = logger or logging.getLogger(__name__)
    for attempt in range(retries):
        try:
            return await operation()
        except Exception as e:
            if attempt == retries - 1:
                raise
            wait_time = delay * (backoff ** attempt)
            log.warning(
                f"Attempt {attempt + 1}/{retries} failed: {e}; retrying in {wait_time:.1f}s"
            )
            await asyncio.sleep(wait_time)


async def wait_for_selector(session, selector: str, timeout_ms: int = 10000) -> bool:
    """Wait for a selector to appear. Returns False on timeout or error."""
    try:
        await session.wait_for_selector(selector, timeout_ms=timeout_ms)
        return True
    except Exception as e:
        logger.warning(f"Selector {selector} not found within {timeout_ms}ms")
        logger.debug(f"wait_for_selector error: {e}")
        return False


async def safe_click(session, selector: str, timeout_ms: int = 5000) -> bool:
    """Click the first element matching selector. Returns False if that fails."""
    try:
        await session.click(selector, timeout_ms=timeout_ms)
        return True
    except Exception as e:
        logger.warning(f"Failed to click selector {selector}: {e}")
        return False
