'''
Pluggable partition enumeration.
A backend is any callable taking n and returning every partition of n as a
matrix with one row per partition and n columns (see partitions.py). Two are
registered here: "reference", the recursive enumerator, and "fast", the
vectorized one. Other implementations, for example a compiled library loaded
through ctypes, can be added with register_backend and chosen with
birthday_settings.configure(fast_backend=...).
'''
from typing import Callable
import numpy as np
from partitions import reference_partitions, fast_partitions, partition_sizes
from birthday_errors import InvalidArgumentError, BackendContractError
from birthday_logger import logger
import birthday_settings

Backend = Callable[[int], np.ndarray]

_backends: dict[str, Backend] = {}

def register_backend(name: str, func: Backend, replace: bool = False):
    '''
    Makes func available as a partition backend under name.
    name: A string, matched case-insensitively
    func: A callable, func(n) returns a (p(n), n) array-like of non-negative integers
    replace: If False, registering a name twice raises InvalidArgumentError
    '''
    if not callable(func):
        raise InvalidArgumentError(f'Backend {name!r} is not callable')
    key = name.lower()
    if key in _backends and not replace:
        raise InvalidArgumentError(f'Backend {name!r} is already registered')
    _backends[key] = func

def unregister_backend(name: str):
    '''Removes a backend. The built-in backends can't be removed.'''
    key = name.lower()
    if key in ('reference', 'fast'):
        raise InvalidArgumentError(f'Cannot remove built-in backend {name!r}')
    if _backends.pop(key, None) is None:
        raise InvalidArgumentError(f'Unknown partition backend {name!r}')

def available_backends() -> list[str]:
    return sorted(_backends)

def get_backend(name: str) -> Backend:
    try:
        return _backends[name.lower()]
    except (KeyError, AttributeError):
        raise InvalidArgumentError(
            f'Unknown partition backend {name!r}, expected one of {available_backends()}'
        ) from None

def check_partitions(rows, n: int, name: str = 'backend', verify: bool = True) -> np.ndarray:
    '''
    Checks that rows is a valid set of partitions of n and returns it as a
    numpy array. A wrong shape is always an error. With verify, each entry
    must also be a non-negative integer and each row t must have sum(i * t_i) == n.
    Raises BackendContractError otherwise.
    '''
    rows = np.asarray(rows)
    if rows.ndim != 2:
        raise BackendContractError(
            f'Partition backend {name!r} returned an array with {rows.ndim} dimensions, expected 2'
        )
    if rows.shape[1] != n:
        raise BackendContractError(
            f"Partition backend {name!r} returned {rows.shape[1]} columns but n={n}. "
            "Column numbers and n don't match."
        )
    if not verify:
        return rows
    if len(rows) == 0:
        raise BackendContractError(f'Partition backend {name!r} returned no partitions of {n}')
    if not np.issubdtype(rows.dtype, np.integer):
        if not np.all(np.isfinite(rows)) or np.any(rows != np.round(rows)):
            raise BackendContractError(f'Partition backend {name!r} returned non-integer entries')
        rows = rows.astype(np.int64)
    if np.any(rows < 0):
        raise BackendContractError(f'Partition backend {name!r} returned negative multiplicities')
    bad = np.flatnonzero(partition_sizes(rows) != n)
    if len(bad):
        raise BackendContractError(
            f'Partition backend {name!r} returned {len(bad)} row(s) with sum(i * t_i) != {n}, '
            f'first one is {rows[bad[0]].tolist()}'
        )
    return rows

def enumerate_partitions(n: int, backend: str = 'reference', verify: bool|None = None) -> np.ndarray:
    '''
    Returns every partition of n as a (p(n), n) matrix using the named backend.
    The backend runs to completion before its output is checked.
    verify: Check each row, defaults to birthday_settings.verify_partitions
    '''
    if verify is None:
        verify = birthday_settings.verify_partitions
    func = get_backend(backend)
    logger.debug('enumerating partitions of n=%d with the %r backend', n, backend)
    rows = check_partitions(func(n), n, backend, verify)
    rows.flags.writeable = False
    return rows

register_backend('reference', reference_partitions)
register_backend('fast', fast_partitions)
