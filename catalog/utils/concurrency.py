"""
Two-branch concurrent read join.

Detail pages and the delete guard need an entity and its dependents. The
two reads share no data, so they are issued together and joined: the join
succeeds only if both succeed, and the first failure propagates. The other
branch is left to finish on its own and its result is discarded; reads have
no side effects, so nothing is cancelled.
"""

import asyncio
from typing import Awaitable, TypeVar

from catalog.logging import logger

A = TypeVar("A")
B = TypeVar("B")


async def fan_out(first: Awaitable[A], second: Awaitable[B]) -> tuple[A, B]:
    """
    Await two independent reads concurrently.

    Args:
        first: Awaitable producing the first result (usually the entity).
        second: Awaitable producing the second result (usually dependents).

    Returns:
        Tuple of both results, in argument order.

    Raises:
        Exception: Whatever the first failing branch raised.

    Example:
        ```python
        author, books = await fan_out(
            authors.get_by_id(author_id),
            books.get_by_author(author_id),
        )
        ```
    """
    try:
        first_result, second_result = await asyncio.gather(first, second)
    except Exception as ex:
        logger.debug(f"Fan-out read failed: {type(ex).__name__}: {ex}")
        raise
    return first_result, second_result
