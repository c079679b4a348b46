# tests/test_balancing.py
import pytest

from farm.domain.balancing import balance_chunks, partition_into_chunks
from farm.domain.errors import CapacityInvariantViolation

# -------------------------------
# Partition
# -------------------------------

def test_partition_exact_multiple():
    assert partition_into_chunks([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

def test_partition_short_last_chunk():
    assert partition_into_chunks([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]

def test_partition_empty():
    assert partition_into_chunks([], 3) == []

@pytest.mark.parametrize("chunk_size", [0, -1])
def test_partition_rejects_non_positive_chunk(chunk_size):
    with pytest.raises(CapacityInvariantViolation):
        partition_into_chunks([1, 2], chunk_size)

# -------------------------------
# Balance
# -------------------------------

def test_balance_no_remainder():
    assert balance_chunks([1, 2, 3, 4], 2, 2) == [[1, 2], [3, 4]]

def test_balance_drains_remainder_into_first_chunks():
    assert balance_chunks([1, 2, 3, 4, 5, 6, 7], 3, 2) == [[1, 2, 7], [3, 4], [5, 6]]

def test_balance_several_remainder_chunks_wrap():
    # 11 members over 6 groups in chunks of 1 leaves 5 remainder chunks
    groups = balance_chunks(list(range(1, 12)), 6, 1)
    assert groups == [[1, 7], [2, 8], [3, 9], [4, 10], [5, 11], [6]]

def test_balance_does_not_mutate_input():
    members = [1, 2, 3, 4, 5]
    balance_chunks(members, 2, 2)
    assert members == [1, 2, 3, 4, 5]

@pytest.mark.parametrize("size,groups", [(4, 2), (7, 3), (10, 4), (20, 6), (9, 9), (13, 1)])
def test_balance_sizes_within_one(size, groups):
    chunks = balance_chunks(list(range(size)), groups, size // groups)
    sizes = [len(c) for c in chunks]
    assert len(chunks) == groups
    assert sum(sizes) == size
    assert max(sizes) - min(sizes) <= 1

def test_balance_zero_groups_is_violation():
    with pytest.raises(CapacityInvariantViolation):
        balance_chunks([1, 2, 3], 0, 1)

def test_balance_too_few_members_is_violation():
    # 2 members cannot fill 3 groups
    with pytest.raises(CapacityInvariantViolation):
        balance_chunks([1, 2], 3, 1)
