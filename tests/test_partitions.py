"""Tests for integer partition enumeration."""

import numpy as np
import pytest
from partitions import (iter_partitions, reference_partitions, fast_partitions,
    partition_count, partition_sizes, partition_dtype)

# p(n) for n = 1, ..., 12
PARTITION_COUNTS = [1, 2, 3, 5, 7, 11, 15, 22, 30, 42, 56, 77]


def as_set(rows):
    return {tuple(int(x) for x in row) for row in rows}


class TestIterPartitions:
    """Tests for the recursive reference enumerator."""

    def test_small_order(self):
        """Partitions come out from all singletons to a single block."""
        assert list(iter_partitions(1)) == [(1,)]
        assert list(iter_partitions(3)) == [(3, 0, 0), (1, 1, 0), (0, 0, 1)]

    def test_four(self):
        assert set(iter_partitions(4)) == {
            (4, 0, 0, 0), (2, 1, 0, 0), (0, 2, 0, 0), (1, 0, 1, 0), (0, 0, 0, 1)
        }


@pytest.mark.parametrize("enumerate_rows", [reference_partitions, fast_partitions])
class TestEnumerators:
    """Properties every enumerator must have."""

    @pytest.mark.parametrize("n", range(1, 13))
    def test_invariant(self, enumerate_rows, n):
        """Every row t satisfies sum(i * t_i) == n."""
        rows = enumerate_rows(n)
        assert rows.shape[1] == n
        weights = np.arange(1, n + 1)
        assert np.all(rows.astype(np.int64) @ weights == n)

    @pytest.mark.parametrize("n", range(1, 13))
    def test_complete_without_duplicates(self, enumerate_rows, n):
        rows = enumerate_rows(n)
        assert len(rows) == PARTITION_COUNTS[n - 1]
        assert len(as_set(rows)) == len(rows)

    def test_non_negative(self, enumerate_rows):
        assert np.all(enumerate_rows(9).astype(np.int64) >= 0)

    def test_dtype(self, enumerate_rows):
        assert enumerate_rows(6).dtype == np.uint8


@pytest.mark.parametrize("n", range(1, 19))
def test_fast_matches_reference(n):
    """Both enumerators give the same set of rows."""
    assert as_set(fast_partitions(n)) == as_set(reference_partitions(n))


def test_fast_larger_n():
    rows = fast_partitions(40)
    assert len(rows) == partition_count(40) == 37338
    assert np.all(partition_sizes(rows) == 40)


class TestPartitionCount:
    """Tests for p(n)."""

    def test_small(self):
        assert [partition_count(n) for n in range(1, 13)] == PARTITION_COUNTS

    def test_known_values(self):
        assert partition_count(0) == 1
        assert partition_count(20) == 627
        assert partition_count(60) == 966467
        assert partition_count(100) == 190569292

    def test_negative(self):
        assert partition_count(-3) == 0


def test_partition_sizes():
    rows = np.array([[3, 0, 0], [1, 1, 0], [0, 0, 1], [1, 0, 1]], dtype=np.uint8)
    assert partition_sizes(rows).tolist() == [3, 3, 3, 4]


def test_partition_dtype():
    assert partition_dtype(60) == np.uint8
    assert partition_dtype(300) == np.uint16
