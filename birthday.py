#!/usr/bin/env python3
'''
Command line and interactive front end for pbirthday_up.
Running this file with arguments answers a single query, eg
    python birthday.py n=23 N=365 method=fast
and without arguments starts a prompt. It also provides the "handle"
function, which allows you to do things like
    r, f = handle('n=30 prob=[.4,.3,.2,.1]')
    f.savefig('curve.png')
'''
import ast
import re
import sys
import threading
import traceback
import warnings
import numpy as np
from pbirthday import (pbirthday_up, resolve_method, CollisionResult, EXACT_REFERENCE,
    EXACT_FAST, APPROX)
from birthday_errors import BirthdayError, InvalidArgumentError, SlowComputationWarning
import birthday_strings
# Importing matplotlib.pyplot takes a noticeable fraction of a second, and it
# isn't needed until the first query has been answered, so it's imported in
# the background while the user types.
plt = None

plt_initialized = False
def import_plt():
    global plt
    global plt_initialized
    import matplotlib.pyplot as plt
    plt_initialized = True
import_thread = threading.Thread(target=import_plt, name='import matplotlib')
import_thread.start()

__all__ = ['main', 'handle', 'plot', 'curve', 'parse_input', 'process_input', 'uniform']

_prob_regexp = r'prob\s*=\s*(\[[^\]]*\])'

def uniform(N: int) -> np.ndarray:
    '''The occurrence probabilities of N equally likely categories.'''
    if isinstance(N, bool) or not isinstance(N, int) or N < 1:
        raise InvalidArgumentError(f'N has to be a positive integer, not {N!r}')
    return np.full(N, 1.0 / N)

def _to_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidArgumentError(f'{key} has to be an integer, not {value!r}') from None

def parse_input(text: str) -> dict:
    '''
    Turns a query such as "n=23 N=365 method=fast" into a dictionary with the
    keys 'n', 'prob', 'method' and 'plot'. See birthday_strings.help_string.
    '''
    options = {'method': EXACT_REFERENCE, 'plot': True}
    match = re.search(_prob_regexp, text)
    if match:
        try:
            prob = ast.literal_eval(match[1])
        except (ValueError, SyntaxError):
            raise InvalidArgumentError(f'Could not read the probabilities {match[1]}') from None
        options['prob'] = prob
        text = text[:match.start()] + ' ' + text[match.end():]
    bare = []
    for token in text.split():
        if token.lower() == 'noplot':
            options['plot'] = False
        elif '=' in token:
            key, value = token.split('=', 1)
            if key == 'n':
                options['n'] = _to_int(key, value)
            elif key in ('N', 'classes'):
                options['prob'] = uniform(_to_int(key, value))
            elif key.lower() == 'method':
                options['method'] = resolve_method(value)
            else:
                raise InvalidArgumentError(f'Unknown option {key!r}')
        else:
            bare.append(token)
    if len(bare) > 2:
        raise InvalidArgumentError(f'Could not understand {" ".join(bare[2:])!r}')
    if bare:
        options.setdefault('n', _to_int('n', bare[0]))
    if len(bare) == 2:
        options.setdefault('prob', uniform(_to_int('N', bare[1])))
    if 'n' not in options:
        raise InvalidArgumentError('No number of draws given, try n=23')
    if 'prob' not in options:
        raise InvalidArgumentError('No probabilities given, try N=365 or prob=[.5,.5]')
    return options

def process_input(text: str) -> CollisionResult:
    '''Answers a query such as "n=23 N=365".'''
    options = parse_input(text)
    return pbirthday_up(options['n'], options['prob'], options['method'])

def curve(n: int, prob, method: str = EXACT_REFERENCE, last: float|None = None) -> np.ndarray:
    '''
    Returns the collision probability for 1, 2, ..., n draws.
    Both exact methods sum the same terms, so exact curves always use the fast
    enumerator. The large n warning is only given once, by the call for n itself.
    last (optional): The probability for n draws, if already known
    '''
    method = resolve_method(method)
    if method != APPROX:
        method = EXACT_FAST
    out = np.empty(n)
    stop = n if last is None else n - 1
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', SlowComputationWarning)
        for k in range(1, stop + 1):
            out[k-1] = pbirthday_up(k, prob, method).probability
    if last is not None:
        out[n-1] = last
    return out

def plot(n: int, prob, method: str = EXACT_REFERENCE,
         name: str|None = None, last: float|None = None) -> 'matplotlib.figure.Figure': # type: ignore
    '''
    Plots the probability of at least one collision against the number of draws.
    n: The largest number of draws to plot
    prob: The occurrence probabilities
    name (optional): A custom name for the plot
    last (optional): The probability for n draws, if already known
    '''
    global plt_initialized, plt
    # If matplotlib isn't imported yet, we wait
    if not plt_initialized:
        import_thread.join()
        plt_initialized = True
    assert plt is not None
    if name is None:
        name = f'n={n}, N={len(prob)}, method={method}'
    x = np.arange(1, n + 1)
    y = curve(n, prob, method, last)
    fig, ax = plt.subplots()
    if fig.canvas.manager is not None:
        fig.canvas.manager.set_window_title(name)
    plt.title('Probability of at least one collision, ' + name)
    # stems get cluttered past a hundred or so points
    if n < 100:
        ax.stem(x, y, label='Probability', basefmt='')
    else:
        ax.plot(x, y, label='Probability', color='tab:blue')
    ax.axhline(0.5, color='tab:red', linestyle='--', label='1/2')
    ax.set_ylim(-.05, 1.05)
    ax.set_xlabel('Number of draws')
    ax.legend()
    return fig

def report(result: CollisionResult) -> str:
    '''Internal function, describes a result in a couple of lines.'''
    out = f'Probability of at least one collision: {result.probability:.12g}'
    if result.is_exact:
        out += f'\nExact, summed over {len(result.partitions)} partitions of n={result.n}.'
    else:
        out += f'\nApproximate (mase1992), {len(result.sigma)} factors.'
    if not 0 <= result.probability <= 1:
        out += '\nPossible rounding errors.'
    return out

def handle(text: str) -> 'tuple[CollisionResult, matplotlib.figure.Figure|None]': # type: ignore
    '''
    text: A query such as "n=23 N=365"
    Returns (r, f) where r is the CollisionResult and f is a matplotlib figure
    with the probability curve, or None if the query contains noplot.
    The curve reuses r.probability for its last point.
    Ex:
    r, f = handle('23 365')
    f.savefig('bday.png')
    '''
    options = parse_input(text)
    result = pbirthday_up(options['n'], options['prob'], options['method'])
    fig = None
    if options['plot']:
        fig = plot(options['n'], options['prob'], options['method'],
                   last=result.probability)
    return result, fig

def _answer(text: str):
    '''Internal function, answers one query and prints the outcome.'''
    try:
        result, fig = handle(text)
        print(report(result))
        if fig is not None:
            print('Plotting in other window. That window must be closed to continue.')
            plt.show()
    except BirthdayError as e:
        print('Not a valid input:', e)
    except Exception:
        print('Error encountered, aborting input.')
        traceback.print_exc()

def main():
    '''
    Answers the query given on the command line, or starts an interactive
    session where the user can type in queries such as 23 365.
    '''
    if len(sys.argv) > 1:
        _answer(' '.join(sys.argv[1:]))
        sys.exit()
    print(birthday_strings.intro_string)
    while True:
        print('\nEnter q to quit. Enter help for options.')
        text = input('>>').strip()
        text = re.sub(r'\s+', ' ', text)
        if text.lower() in ('q', 'quit', 'exit'):
            break
        if text.lower() in ('?', 'h', 'help'):
            print(birthday_strings.intro_string)
            print(birthday_strings.help_string)
            continue
        if len(text) > 0:
            _answer(text)


if __name__ == '__main__':
    print('\33]0;Birthday Problem\a', end='')
    sys.stdout.flush()
    main()
