'''
Enumeration of integer partitions in multiplicity form.
A partition of n is stored as a row t of length n where t[i-1] is the number
of parts of size i, so that sum(i * t[i-1]) == n. For the birthday problem a
row describes how n draws split into t_1 singletons, t_2 pairs, t_3 triples
and so on.
'''
from functools import cache
from typing import Iterator
import numpy as np

def partition_dtype(n: int) -> np.dtype:
    '''Smallest unsigned integer dtype that holds every entry of a partition of n.'''
    return np.min_scalar_type(n)

def iter_partitions(n: int) -> Iterator[tuple[int, ...]]:
    '''
    Generates every partition of n as a tuple of multiplicities.
    Works down from part size n to part size 1, at each size trying every
    multiplicity that still fits into what is left of n. A branch is emitted
    once nothing is left and dropped if it runs out of sizes first.
    Ex: list(iter_partitions(3)) gives [(3, 0, 0), (1, 1, 0), (0, 0, 1)]
    '''
    t = [0] * n
    def descend(size, remaining):
        if remaining == 0:
            yield tuple(t)
            return
        if size == 0:
            return
        for count in range(remaining // size + 1):
            t[size-1] = count
            yield from descend(size - 1, remaining - size * count)
        t[size-1] = 0
    yield from descend(n, n)

def reference_partitions(n: int) -> np.ndarray:
    '''
    Returns the partitions of n from iter_partitions as a (p(n), n) matrix.
    Fine for n up to about 30, after which fast_partitions is much quicker.
    '''
    rows = np.array(list(iter_partitions(n)), dtype=partition_dtype(n))
    return rows.reshape(-1, n)

def fast_partitions(n: int) -> np.ndarray:
    '''
    Returns the partitions of n as a (p(n), n) matrix without recursion.
    Every partial assignment of the sizes n, n-1, ..., 2 is kept as a row
    together with how much of n it leaves over. Going to the next smaller
    size, each row is repeated once per multiplicity that still fits, using
    numpy.repeat. Whatever is left at the end is made of singletons, so the
    number of rows never exceeds p(n). Rows come out in a different order
    than reference_partitions.
    '''
    rows = np.zeros((1, n), dtype=partition_dtype(n))
    remaining = np.array([n], dtype=np.int64)
    for size in range(n, 1, -1):
        counts = remaining // size + 1
        rows = np.repeat(rows, counts, axis=0)
        # position of each new row within its block of repeats
        starts = np.cumsum(counts) - counts
        multiplicity = np.arange(len(rows)) - np.repeat(starts, counts)
        rows[:, size-1] = multiplicity
        remaining = np.repeat(remaining, counts) - size * multiplicity
    rows[:, 0] = remaining
    return rows

@cache
def partition_count(n: int) -> int:
    '''
    Returns p(n), the number of integer partitions of n, as an exact int.
    Ex: [partition_count(i) for i in range(1, 6)] gives [1, 2, 3, 5, 7]
    '''
    if n < 0:
        return 0
    # counts[s] is the number of partitions of s using the parts seen so far
    counts = [1] + [0] * n
    for part in range(1, n + 1):
        for s in range(part, n + 1):
            counts[s] += counts[s - part]
    return counts[n]

def partition_sizes(rows: np.ndarray) -> np.ndarray:
    '''
    Returns sum(i * t_i) for every row of a partition matrix, which should be n
    for every row. Accumulates one column at a time so a large matrix of small
    integers is never copied in full.
    '''
    total = np.zeros(len(rows), dtype=np.int64)
    for i in range(rows.shape[1]):
        total += (i + 1) * rows[:, i].astype(np.int64)
    return total
