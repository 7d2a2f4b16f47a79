'''
Tunables shared by the exact and approximate code paths.
Read them as module attributes (birthday_settings.large_n_warning) so that
changes made through configure() are seen everywhere.
'''
from birthday_errors import InvalidArgumentError

# Exact methods with n above this issue a SlowComputationWarning.
# p(60) is close to a million partitions.
# Accuracy is a separate matter, see check_stability.
large_n_warning = 60
# Backend used by the "fast" exact method.
fast_backend = 'fast'
# Check every partition row against sum(i * t_i) == n.
verify_partitions = True
# Look for overflow and probabilities outside [0, 1]. Skewed prob vectors
# lose all accuracy to cancellation well below large_n_warning.
check_stability = False
stability_tolerance = 1e-9

_DEFAULTS = {
    'large_n_warning': large_n_warning,
    'fast_backend': fast_backend,
    'verify_partitions': verify_partitions,
    'check_stability': check_stability,
    'stability_tolerance': stability_tolerance,
}

def configure(**options) -> dict:
    '''
    Changes one or more settings, eg configure(large_n_warning=80).
    Returns a dictionary of the previous values of the changed settings, so
    configure(**old) undoes the change.
    '''
    unknown = sorted(set(options) - set(_DEFAULTS))
    if unknown:
        raise InvalidArgumentError(f'Unknown setting(s): {", ".join(unknown)}')
    if 'large_n_warning' in options:
        value = options['large_n_warning']
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise InvalidArgumentError('large_n_warning must be a positive integer')
    if 'stability_tolerance' in options and not options['stability_tolerance'] >= 0:
        raise InvalidArgumentError('stability_tolerance must be >= 0')
    module = globals()
    previous = {key: module[key] for key in options}
    module.update(options)
    return previous

def current() -> dict:
    '''Returns the current settings as a dictionary.'''
    module = globals()
    return {key: module[key] for key in _DEFAULTS}

def reset():
    '''Restores every setting to its default.'''
    globals().update(_DEFAULTS)
