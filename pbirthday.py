'''
User-facing functions for the birthday problem with unequal occurrence
probabilities: the probability of at least one collision when n items are
drawn iid from N categories with probabilities prob.

    r = pbirthday_up(23, [1/365]*365)
    r.probability        # 0.507...
    pbirthday_up(100, prob, method='mase1992').probability
'''
from dataclasses import dataclass
from numbers import Integral
import warnings
import numpy as np
from collision_math import (power_sums, log_coefficients, coefficients, aggregate,
    mase1992)
from partition_backends import enumerate_partitions
from partitions import partition_count
from birthday_errors import (InvalidArgumentError, NumericInstabilityWarning,
    SlowComputationWarning)
from birthday_logger import logger
import birthday_settings

__all__ = ['pbirthday_up', 'collision_probability', 'CollisionResult',
           'EXACT_REFERENCE', 'EXACT_FAST', 'APPROX', 'METHODS', 'resolve_method']

EXACT_REFERENCE = 'exact'
EXACT_FAST = 'fast'
APPROX = 'mase1992'
METHODS = (EXACT_REFERENCE, EXACT_FAST, APPROX)

_method_aliases = {
    'exact': EXACT_REFERENCE,
    'exact_reference': EXACT_REFERENCE,
    'reference': EXACT_REFERENCE,
    'fast': EXACT_FAST,
    'exact_fast': EXACT_FAST,
    'mase1992': APPROX,
    'mase': APPROX,
    'approx': APPROX,
}

@dataclass(frozen=True, eq=False)
class CollisionResult:
    '''
    The outcome of pbirthday_up. Compared and hashed by identity.
    probability: The probability of at least one collision
    method: One of EXACT_REFERENCE, EXACT_FAST, APPROX
    n: The number of draws
    power_sums: power_sums[k-1] = sum(prob**k)
    partitions: Exact methods only. Every partition of n, one per row, with
                sum(row * (1, ..., n)) == n
    coefficients: Exact methods only. The inclusion-exclusion coefficient of
                  each row of partitions
    sigma: mase1992 only. The factors whose product is 1 - probability
    '''
    probability: float
    method: str
    n: int
    power_sums: np.ndarray
    partitions: np.ndarray|None = None
    coefficients: np.ndarray|None = None
    sigma: np.ndarray|None = None

    @property
    def is_exact(self) -> bool:
        return self.method != APPROX

    def __float__(self) -> float:
        return self.probability

def resolve_method(method: str) -> str:
    '''Maps a method name or alias (case-insensitive) to one of METHODS.'''
    if isinstance(method, str) and method.strip().lower() in _method_aliases:
        return _method_aliases[method.strip().lower()]
    raise InvalidArgumentError(f'method must be one of {METHODS}, not {method!r}')

def _check_n(n) -> int:
    if isinstance(n, bool) or not isinstance(n, Integral):
        raise InvalidArgumentError(f'n has to be an integer, not {type(n).__name__}.')
    if n < 1:
        raise InvalidArgumentError(f'n has to be a positive integer, not {n}.')
    return int(n)

def _check_prob(prob) -> np.ndarray:
    try:
        prob = np.array(prob, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f'prob must be a sequence of numbers: {e}') from None
    if prob.ndim != 1 or len(prob) == 0:
        raise InvalidArgumentError('prob must be a non-empty 1d sequence of probabilities')
    if not np.all(np.isfinite(prob)):
        raise InvalidArgumentError('prob must not contain inf or NaN')
    if np.any(prob < 0):
        raise InvalidArgumentError('prob must not contain negative probabilities')
    return prob

def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.flags.writeable = False
    return arr

def _check_stability(probability: float, values: np.ndarray, what: str):
    '''Warns if values aren't finite or probability is outside [0, 1].'''
    tolerance = birthday_settings.stability_tolerance
    problems = []
    if not np.all(np.isfinite(values)):
        problems.append(f'{np.count_nonzero(~np.isfinite(values))} non-finite {what}')
    if not -tolerance <= probability <= 1 + tolerance:
        problems.append(f'probability {probability!r} is outside [0, 1]')
    if problems:
        message = 'Numerically unstable result: ' + ', '.join(problems)
        logger.warning(message)
        warnings.warn(message, NumericInstabilityWarning, stacklevel=3)

def pbirthday_up(n: int, prob, method: str = EXACT_REFERENCE, *,
                 backend: str|None = None, verify: bool|None = None,
                 check: bool|None = None) -> CollisionResult:
    '''
    Calculates the probability of at least one collision among n items drawn
    iid from len(prob) categories, where category i occurs with probability
    prob[i]. This is the birthday problem with unequal occurrence probabilities.
    n: A positive integer, the number of draws
    prob: A sequence of non-negative numbers, the occurrence probabilities.
          Its length is the number of categories N.
    method: One of
        'exact': Exact inclusion-exclusion sum over all partitions of n,
                 enumerated recursively. Fine up to n of about 30.
        'fast': The same sum with the partitions enumerated by the backend
                named in birthday_settings.fast_backend. Usable up to n of
                about 60.
        'mase1992': The asymptotic approximation of Mase (1992). Fast for any
                    n and surprisingly accurate.
    backend (optional): Name of a partition backend to use for an exact method
    verify (optional): Check every partition, default birthday_settings.verify_partitions
    check (optional): Look for numerical instability, default
                      birthday_settings.check_stability. Issues a
                      NumericInstabilityWarning rather than raising.
                      Worth turning on when prob is far from uniform, since
                      the exact sum can then lose all accuracy at n of 20.
    Returns a CollisionResult.
    Ex:
    pbirthday_up(2, [0.5, 0.5]).probability gives 0.5
    pbirthday_up(26, [1/365]*365, method='fast').probability
    '''
    n = _check_n(n)
    prob = _check_prob(prob)
    method = resolve_method(method)
    if check is None:
        check = birthday_settings.check_stability
    if method != APPROX and n > birthday_settings.large_n_warning:
        warnings.warn(
            f'n={n} is pretty large. This might take a while. '
            f"Possibly consider using method='{APPROX}' to compute an approximate result.",
            SlowComputationWarning, stacklevel=2)

    if method == APPROX:
        P = power_sums(prob, min(n, 5))
        probability, sigma = mase1992(n, P)
        logger.debug('mase1992 n=%d N=%d sigma=%s', n, len(prob), sigma)
        if check:
            _check_stability(probability, sigma, 'sigma factors')
        return CollisionResult(probability, method, n, _frozen(P), sigma=_frozen(sigma))

    P = power_sums(prob, n)
    if backend is None:
        backend = 'reference' if method == EXACT_REFERENCE else birthday_settings.fast_backend
    logger.debug('exact n=%d N=%d: %d partitions from %r', n, len(prob),
                 partition_count(n), backend)
    partitions = enumerate_partitions(n, backend, verify)
    log_coef = log_coefficients(partitions, n)
    a = coefficients(partitions, n, log_coef)
    probability, terms = aggregate(partitions, P, n, log_coef)
    if check:
        _check_stability(probability, np.concatenate((a, terms)), 'coefficients or terms')
    return CollisionResult(probability, method, n, _frozen(P), partitions=partitions,
                           coefficients=_frozen(a))

collision_probability = pbirthday_up
