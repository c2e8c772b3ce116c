"""
Database wake-up and retry helpers

Managed Postgres offerings suspend idle databases; the first connection
after a pause can fail while the compute node starts. These helpers ping
the database and retry connection failures with exponential backoff.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from fittrack.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONNECTION_ERRORS = (OperationalError, InterfaceError, ConnectionError, OSError)


def _get_engine() -> AsyncEngine:
    from fittrack.database.session import engine
    return engine


async def check_connection(engine: Optional[AsyncEngine] = None) -> None:
    """Run ``SELECT 1``; connection errors propagate"""
    engine = engine or _get_engine()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def ping(engine: Optional[AsyncEngine] = None) -> bool:
    """
    Run ``SELECT 1`` against the database.

    Args:
        engine: engine to use, defaults to the application engine

    Returns:
        True when the database answered, False on a connection error
    """
    try:
        await check_connection(engine)
        return True
    except CONNECTION_ERRORS as e:
        logger.warning(f"Database ping failed: {e}")
        return False


async def retry_database_operation(
    operation: Callable[[], Awaitable[T]],
    max_retries: Optional[int] = None,
    initial_delay: Optional[float] = None,
    engine: Optional[AsyncEngine] = None,
) -> T:
    """
    Run ``operation`` and retry it while the database is waking up.

    The database is pinged once before the first attempt. Only connection
    errors are retried; the delay doubles after every failed attempt
    (initial_delay, 2 * initial_delay, 4 * initial_delay, ...).

    Args:
        operation: zero-argument coroutine function
        max_retries: attempts in total, defaults to DB_RETRY_ATTEMPTS
        initial_delay: first delay in seconds, defaults to DB_RETRY_INITIAL_DELAY
        engine: engine used for the wake-up ping

    Returns:
        whatever ``operation`` returns

    Raises:
        the last connection error once all attempts are exhausted, or any
        non-connection error immediately
    """
    max_retries = max(1, max_retries if max_retries is not None else settings.DB_RETRY_ATTEMPTS)
    initial_delay = initial_delay if initial_delay is not None else settings.DB_RETRY_INITIAL_DELAY

    if not await ping(engine):
        logger.info("Database did not answer the wake-up ping, retrying operation with backoff")

    last_error: Optional[BaseException] = None
    for attempt in range(max_retries):
        try:
            return await operation()
        except CONNECTION_ERRORS as e:
            last_error = e
            if attempt == max_retries - 1:
                break
            delay = initial_delay * (2 ** attempt)
            logger.warning(
                f"Database operation failed (attempt {attempt + 1}/{max_retries}): {e}; "
                f"retrying in {delay:.1f}s"
            )
            await asyncio.sleep(delay)

    logger.error(f"Database operation failed after {max_retries} attempts")
    raise last_error
