"""Bounded batch writer shared by seeding and clearing."""

from collections.abc import Callable, Iterator, Sequence
from typing import TypeVar

from loguru import logger

from settings import STORE_BATCH_LIMIT

T = TypeVar("T")


def chunked(records: Sequence[T], size: int) -> Iterator[list[T]]:
    """Consecutive slices of at most ``size`` records."""
    for i in range(0, len(records), size):
        yield list(records[i : i + size])


def write_in_chunks(
    records: Sequence[T],
    max_batch_size: int,
    write: Callable[[list[T]], object],
) -> int:
    """Hand records to ``write`` in batches; returns the number of records written.

    Each call to ``write`` is expected to be atomic. A failure propagates and
    leaves earlier batches committed.
    """
    if not 1 <= max_batch_size <= STORE_BATCH_LIMIT:
        raise ValueError(f"Batch size must be between 1 and {STORE_BATCH_LIMIT}, got {max_batch_size}")

    total_batches = (len(records) + max_batch_size - 1) // max_batch_size
    written = 0
    for num, batch in enumerate(chunked(records, max_batch_size), start=1):
        write(batch)
        written += len(batch)
        if total_batches > 1:
            logger.debug("Batch {}/{}: {} records", num, total_batches, len(batch))
    return written
