"""Tests for the partition backend registry and its contract checks."""

import numpy as np
import pytest
import birthday_settings
from birthday_errors import BackendContractError, InvalidArgumentError
from partition_backends import (register_backend, unregister_backend, available_backends,
    get_backend, check_partitions, enumerate_partitions)
from partitions import reference_partitions
from pbirthday import pbirthday_up


@pytest.fixture
def backend():
    """Registers a backend for one test and removes it afterwards."""
    names = []

    def register(name, func):
        register_backend(name, func)
        names.append(name)

    yield register
    for name in names:
        unregister_backend(name)


class TestRegistry:
    """Tests for registering and looking up backends."""

    def test_builtins(self):
        assert {'reference', 'fast'} <= set(available_backends())

    def test_lookup_is_case_insensitive(self):
        assert get_backend('FAST') is get_backend('fast')

    def test_unknown(self):
        with pytest.raises(InvalidArgumentError, match='Unknown partition backend'):
            get_backend('quantum')

    def test_duplicate(self, backend):
        backend('mine', reference_partitions)
        with pytest.raises(InvalidArgumentError):
            register_backend('mine', reference_partitions)
        register_backend('mine', reference_partitions, replace=True)

    def test_not_callable(self):
        with pytest.raises(InvalidArgumentError):
            register_backend('broken', 42)

    def test_builtins_stay(self):
        with pytest.raises(InvalidArgumentError):
            unregister_backend('reference')

    def test_unregister_unknown(self):
        with pytest.raises(InvalidArgumentError):
            unregister_backend('never-registered')


class TestContract:
    """Tests for the checks applied to backend output."""

    def test_wrong_column_count(self, backend):
        backend('too-wide', lambda n: np.zeros((1, n + 1), dtype=int))
        with pytest.raises(BackendContractError, match="Column numbers and n don't match"):
            enumerate_partitions(4, 'too-wide')

    def test_wrong_column_count_without_verify(self, backend):
        """The shape is checked even when rows aren't."""
        backend('too-narrow', lambda n: np.zeros((1, n - 1), dtype=int))
        with pytest.raises(BackendContractError):
            enumerate_partitions(4, 'too-narrow', verify=False)

    def test_not_a_matrix(self):
        with pytest.raises(BackendContractError, match='dimensions'):
            check_partitions([1, 2, 3], 3)

    def test_bad_row(self, backend):
        backend('ones', lambda n: np.ones((2, n), dtype=int))
        with pytest.raises(BackendContractError, match='sum'):
            enumerate_partitions(3, 'ones')
        rows = enumerate_partitions(3, 'ones', verify=False)
        assert rows.shape == (2, 3)

    def test_verify_setting(self, backend):
        backend('ones', lambda n: np.ones((2, n), dtype=int))
        birthday_settings.configure(verify_partitions=False)
        assert enumerate_partitions(3, 'ones').shape == (2, 3)

    def test_negative_entries(self):
        # 4*1 + (-1)*2 == 2, but a multiplicity can't be negative
        with pytest.raises(BackendContractError, match='negative'):
            check_partitions(np.array([[4, -1], [0, 1]]), 2)

    def test_empty(self):
        with pytest.raises(BackendContractError):
            check_partitions(np.zeros((0, 3), dtype=int), 3)

    def test_integral_floats(self):
        rows = check_partitions([[2.0, 0.0], [0.0, 1.0]], 2)
        assert rows.dtype == np.int64

    def test_fractional_floats(self):
        with pytest.raises(BackendContractError, match='non-integer'):
            check_partitions([[2.0, 0.0], [0.0, 0.5]], 2)

    def test_lists(self, backend):
        """Backends can return any rectangular array-like."""
        backend('lists', lambda n: [list(row) for row in reference_partitions(n)])
        assert len(enumerate_partitions(5, 'lists')) == 7

    def test_read_only(self):
        rows = enumerate_partitions(4, 'fast')
        with pytest.raises(ValueError):
            rows[0, 0] = 9


class TestBackendChoice:
    """Tests for how pbirthday_up picks a backend."""

    def test_fast_method_uses_setting(self, backend):
        calls = []

        def counting(n):
            calls.append(n)
            return reference_partitions(n)

        backend('counting', counting)
        birthday_settings.configure(fast_backend='counting')
        result = pbirthday_up(4, [0.25] * 4, method='fast')
        assert calls == [4]
        assert result.probability == pytest.approx(1 - 24 / 256)

    def test_backend_argument(self, backend):
        backend('reversed', lambda n: reference_partitions(n)[::-1])
        prob = [0.4, 0.3, 0.2, 0.1]
        reversed_result = pbirthday_up(6, prob, backend='reversed')
        assert reversed_result.probability == pytest.approx(pbirthday_up(6, prob).probability)

    def test_bad_backend_fails_call(self, backend):
        backend('too-wide', lambda n: np.zeros((1, n + 1), dtype=int))
        with pytest.raises(BackendContractError):
            pbirthday_up(3, [0.5, 0.5], method='fast', backend='too-wide')

    def test_unknown_fast_backend(self):
        birthday_settings.configure(fast_backend='missing')
        with pytest.raises(InvalidArgumentError):
            pbirthday_up(3, [0.5, 0.5], method='fast')
