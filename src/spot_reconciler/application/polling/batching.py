"""Chunking of request ID lists into provider-sized batches."""
from typing import Iterator, List, Sequence, TypeVar

T = TypeVar("T")

# Upper bound on IDs per describe/cancel call
BATCH_SIZE = 100


def batched(items: Sequence[T], batch_size: int = BATCH_SIZE) -> Iterator[List[T]]:
    """
    Yield contiguous, order-preserving chunks of at most batch_size items.

    Args:
        items: Sequence to split
        batch_size: Maximum chunk length

    Raises:
        ValueError: If batch_size is less than 1
    """
    if batch_size < 1:
        raise ValueError("Batch size must be at least 1")
    for start in range(0, len(items), batch_size):
        yield list(items[start:start + batch_size])
