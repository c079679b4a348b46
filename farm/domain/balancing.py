# farm/domain/balancing.py
"""
Pure balancing logic for barn allocation.

Operates on plain lists only. The service layer decides which barns take part
and assigns the returned chunks to them, chunk i going to barn i.

Functions included:
- partition_into_chunks
- balance_chunks
"""
from typing import List, Sequence, TypeVar

from farm.domain.errors import CapacityInvariantViolation

T = TypeVar("T")


def partition_into_chunks(members: Sequence[T], chunk_size: int) -> List[List[T]]:
    """
    Split members into contiguous chunks of chunk_size.
    The last chunk is shorter when len(members) is not a multiple.

    Example:
    >>> partition_into_chunks([1, 2, 3, 4, 5], 2)
    [[1, 2], [3, 4], [5]]
    """
    if chunk_size <= 0:
        raise CapacityInvariantViolation(f"chunk size must be positive, got {chunk_size}")
    return [list(members[i:i + chunk_size]) for i in range(0, len(members), chunk_size)]


def balance_chunks(members: Sequence[T], group_count: int, chunk_size: int) -> List[List[T]]:
    """
    Partition members into exactly group_count chunks.

    Members are first cut into chunks of chunk_size. Any chunk past the
    group_count-th is a remainder: its members are drained one at a time into
    chunks 0, 1, 2, ... (wrapping) and the remainder is discarded.

    With chunk_size == len(members) // group_count the result differs in size
    by at most one between chunks.

    Example:
    >>> balance_chunks([1, 2, 3, 4, 5], 2, 2)
    [[1, 2, 5], [3, 4]]
    """
    if group_count <= 0:
        raise CapacityInvariantViolation(
            f"cannot balance {len(members)} members into {group_count} groups"
        )

    chunks = partition_into_chunks(members, chunk_size)
    if len(chunks) < group_count:
        raise CapacityInvariantViolation(
            f"{len(members)} members in chunks of {chunk_size} leave groups empty "
            f"({len(chunks)} chunks for {group_count} groups)"
        )

    balanced = chunks[:group_count]
    leftovers = [m for chunk in chunks[group_count:] for m in chunk]
    for i, member in enumerate(leftovers):
        balanced[i % group_count].append(member)

    return balanced
