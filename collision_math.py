'''Internal math functions for the birthday problem with unequal probabilities'''
import math
import numpy as np
from scipy.special import gammaln

def falling_factorial(x, m):
    '''
    Returns the falling factorial (x)_m = x*(x-1)*...*(x-m+1) = x!/(x-m)!
    Computed as exp(log(x!) - log((x-m)!)) so that x in the hundreds doesn't
    overflow, then rounded to the nearest integer where x and m are whole
    numbers. Works elementwise on arrays. Gives NaN where x-m < 0.
    x: A non-negative integer or array of them
    m: A non-negative integer or array of them
    Ex: falling_factorial(5, 2) is 20.0
    '''
    x = np.asarray(x, dtype=float)
    m = np.asarray(m, dtype=float)
    with np.errstate(invalid='ignore', over='ignore'):
        out = np.exp(gammaln(x + 1) - gammaln(x - m + 1))
    # the exact value is an integer, so this only removes rounding error
    out = np.where((x == np.floor(x)) & (m == np.floor(m)), np.rint(out), out)
    out = np.where(x - m < 0, np.nan, out)
    if out.ndim == 0:
        return float(out)
    return out

def power_sums(prob, n: int) -> np.ndarray:
    '''
    Returns the power sums P_k = sum(prob**k) for k = 1, ..., n.
    Note that P_k is stored at index k-1.
    prob: A 1d array of probabilities
    n: A non-negative integer
    '''
    prob = np.asarray(prob, dtype=float)
    out = np.empty(n)
    powers = np.array(prob)
    for k in range(n):
        out[k] = np.sum(powers)
        powers *= prob
    return out

def _log_factorials(n: int) -> np.ndarray:
    '''log(k!) for k = 0, ..., n'''
    return gammaln(np.arange(n + 1) + 1.0)

def log_coefficients(partitions: np.ndarray, n: int) -> tuple[np.ndarray, np.ndarray]:
    '''
    Returns (sign, log_abs) such that the inclusion-exclusion coefficient of
    each partition t is
        a(t) = n! (-1)^(n + sum(t)) / prod(i^t_i * t_i!)
             = sign * exp(log_abs)
    partitions: A (rows, n) integer matrix of partitions of n
    '''
    log_fact = _log_factorials(n)
    log_abs = np.full(len(partitions), log_fact[n])
    parts = np.zeros(len(partitions), dtype=np.int64)
    for i in range(n):
        t = partitions[:, i].astype(np.int64)
        log_abs -= t * math.log(i + 1) + log_fact[t]
        parts += t
    sign = np.where((n + parts) % 2 == 0, 1.0, -1.0)
    return sign, log_abs

def coefficients(partitions: np.ndarray, n: int,
                 log_coef: tuple[np.ndarray, np.ndarray]|None = None) -> np.ndarray:
    '''
    Returns the coefficient a(t) of every partition, in the same order.
    Overflows to +-inf once n! does (n > 170); aggregate doesn't need these
    values and stays finite longer.
    '''
    if log_coef is None:
        log_coef = log_coefficients(partitions, n)
    sign, log_abs = log_coef
    with np.errstate(over='ignore'):
        return sign * np.exp(log_abs)

def log_power_products(partitions: np.ndarray, P: np.ndarray) -> np.ndarray:
    '''
    Returns log(prod(P_i^t_i)) for every partition. Any factor with t_i = 0 is
    1, even when P_i is 0.
    '''
    n = partitions.shape[1]
    with np.errstate(divide='ignore'):
        log_P = np.log(P[:n])
    out = np.zeros(len(partitions))
    for i in range(n):
        t = partitions[:, i].astype(np.int64)
        used = t > 0
        out[used] += t[used] * log_P[i]
    return out

def aggregate(partitions: np.ndarray, P: np.ndarray, n: int,
              log_coef: tuple[np.ndarray, np.ndarray]|None = None) -> tuple[float, np.ndarray]:
    '''
    Combines the coefficients and power sums into the collision probability
        1 - sum_t a(t) * prod_i P_i^t_i
    Each term is built as sign * exp(log|a(t)| + log(prod P_i^t_i)) and the
    terms are added with math.fsum since their signs alternate. The result is
    not clamped to [0, 1].
    log_coef: The output of log_coefficients, if already computed
    Returns (probability, terms).
    '''
    if log_coef is None:
        log_coef = log_coefficients(partitions, n)
    sign, log_abs = log_coef
    with np.errstate(over='ignore'):
        terms = sign * np.exp(log_abs + log_power_products(partitions, P))
    if np.all(np.isfinite(terms)):
        return 1.0 - math.fsum(terms), terms
    # fsum refuses inf - inf, this gives nan instead
    with np.errstate(invalid='ignore'):
        return 1.0 - float(np.sum(terms)), terms

def mase1992(n: int, P: np.ndarray) -> tuple[float, np.ndarray]:
    '''
    Asymptotic approximation of Mase (1992) to the probability of at least one
    collision, which needs no partitions.
    See Mase, S. 1992. "Approximations to the Birthday Problem with Unequal
    Occurrence Probabilities and Their Application to the Surname Problem in
    Japan." Ann. Inst. Stat. Math. 44 (3): 479-99.
    n: A positive integer
    P: Power sums, P[k-1] = sum(prob**k), for at least k = 1, ..., min(n, 5)
    Returns (probability, sigma) where sigma holds the min(n, 5) factors that
    were multiplied together.
    '''
    order = min(n, 5)
    # pad so unused power sums can be indexed; they are never evaluated
    P = np.concatenate(([np.nan], np.asarray(P[:order], dtype=float), [np.nan] * (5 - order)))
    factors = [
        lambda: 1.0,
        lambda: np.exp(-falling_factorial(n, 2) / 2 * P[2]),
        lambda: np.exp(falling_factorial(n, 3) * (-P[2]**2 / 2 + P[3] / 3)),
        lambda: np.exp(falling_factorial(n, 4) * (-5/6 * P[2]**3 * P[2] * P[3] - 1/4 * P[4])),
        lambda: np.exp(falling_factorial(n, 5) * (-7/4 * P[2]**4 + 3 * P[2]**2 * P[3]
                                                    - P[2] * P[4] + 1/5 * P[5] - 1/2 * P[3]**2)),
    ]
    with np.errstate(over='ignore'):
        sigma = np.array([factor() for factor in factors[:order]], dtype=float)
    return 1.0 - float(np.prod(sigma)), sigma
