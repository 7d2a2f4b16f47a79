'''Exceptions and warnings raised by the collision probability code'''

class BirthdayError(Exception):
    '''Base class for errors raised by this package.'''

class InvalidArgumentError(BirthdayError, ValueError):
    '''
    Raised for a bad n, probability vector, method, backend or setting.
    Subclasses ValueError so callers catching ValueError still work.
    '''

class BackendContractError(BirthdayError, RuntimeError):
    '''
    Raised when a partition backend returns something other than a matrix with
    exactly n columns whose rows t satisfy sum(i * t_i) == n.
    '''

class NumericInstabilityWarning(UserWarning):
    '''
    Issued when coefficients overflow or the probability leaves [0, 1] by more
    than the configured tolerance. Only issued when stability checks are on.
    '''

class SlowComputationWarning(UserWarning):
    '''Issued before an exact computation with a large n.'''
