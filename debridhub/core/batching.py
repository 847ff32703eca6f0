"""
Throttled Batching
Splits hash lists into provider-sized batches with a minimum spacing between them
"""
import asyncio
from typing import AsyncIterator, List, Sequence, TypeVar

from loguru import logger

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> List[List[T]]:
    """Split items into consecutive chunks of at most `size`"""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


async def throttled_batches(
    items: Sequence[T],
    size: int,
    delay: float,
) -> AsyncIterator[List[T]]:
    """
    Yield batches in input order, sleeping `delay` seconds before every batch
    but the first. The sleep happens after the consumer has finished with the
    previous batch, so the spacing is measured from the end of one request to
    the start of the next.
    """
    batches = chunked(items, size)
    for index, batch in enumerate(batches):
        if index > 0 and delay > 0:
            logger.debug(f"Throttling {delay:.2f}s before batch {index + 1}/{len(batches)}")
            await asyncio.sleep(delay)
        yield batch
