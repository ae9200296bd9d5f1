"""
Composition-preserving randomization of sequences.
"""
from typing import Mapping, Callable

import numpy as np

from molseq.core.composition import composition
from molseq.utils.resources import RESOURCES, jit


# Constants ------------------------------------------------------------------------------------------------------------
CHUNK_SIZE = 65_536  # Positions drawn per block of uniform numbers


# Functions ------------------------------------------------------------------------------------------------------------
def randomize(seq: 'Seq', counts: Mapping[str, int] = None, callback: Callable[[str], None] = None,
              rng: np.random.Generator = None) -> 'Seq':
    """
    Draws a random sequence that keeps a composition.

    At each position every symbol with a remaining count draws a uniform number scaled by that count, and the
    largest value wins. Ties go to the symbol that comes first in ``counts``. The winner's count is decremented,
    so the output contains each symbol exactly as often as counted.

    Args:
        seq: The template sequence. Its alphabet is used for the result.
        counts: Symbol counts to draw. If omitted, the composition of ``seq`` is used. If given, the output
            length is ``len(seq)`` plus the sum of ``counts``; once the counts are used up, the remaining
            positions are drawn from all symbols using their (exhausted) counts.
        callback: Called with each drawn symbol instead of building the sequence.
        rng: Random number generator. Defaults to the shared ``RESOURCES.rng``.

    Returns:
        A new ``Seq`` with the alphabet of ``seq``, or an empty one if a callback was given.

    Raises:
        ValueError: If counts are negative or not whole numbers, or a counted symbol is not a single
            non-whitespace character.

    Examples:
        >>> s = Alphabet.NUCLEIC.seq('atgcatgcaaaa')
        >>> shuffled = s.randomize(rng=np.random.default_rng(42))
        >>> shuffled.composition() == s.composition()
        True
    """
    if rng is None: rng = RESOURCES.rng
    length = len(seq)
    if counts is None: counts = composition(seq)
    else: length += _check_counts(counts)

    symbols = list(counts.keys())
    remaining = np.array([int(counts[s]) for s in symbols], dtype=np.int64)
    if length > 0 and not symbols: raise ValueError('Cannot randomize without any symbol counts')

    drawn = np.empty(length, dtype=np.int64)
    for start in range(0, length, CHUNK_SIZE):
        stop = min(start + CHUNK_SIZE, length)
        _draw_kernel(remaining, rng.random((stop - start, len(symbols))), drawn[start:stop])

    chosen = np.array(symbols, dtype=object)[drawn] if length else []
    if callback is not None:
        for symbol in chosen: callback(symbol)
        return seq.alphabet.empty_seq()
    return seq.alphabet.seq(''.join(chosen))


def randomize_from_counts(alphabet: 'Alphabet', counts: Mapping[str, int], callback: Callable[[str], None] = None,
                          rng: np.random.Generator = None) -> 'Seq':
    """
    Generates a random sequence whose composition is exactly ``counts``.

    Examples:
        >>> s = randomize_from_counts(Alphabet.NUCLEIC, {'a': 10, 'c': 20, 'g': 30, 't': 40})
        >>> len(s)
        100
    """
    return randomize(alphabet.empty_seq(), counts, callback, rng)


def _check_counts(counts: Mapping[str, int]) -> int:
    n = 0
    for symbol, count in counts.items():
        if not isinstance(symbol, str) or len(symbol) != 1 or symbol.isspace():
            raise ValueError(f'Counted symbols must be single non-whitespace characters, not {symbol!r}')
        if count < 0: raise ValueError(f'Count of {symbol!r} must not be negative ({count})')
        if count != int(count): raise ValueError(f'Count of {symbol!r} must be a whole number ({count})')
        n += int(count)
    return n


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _draw_kernel(remaining, draws, out):
    """
    Picks one symbol per row of ``draws`` (uniform numbers, one column per symbol), decrementing ``remaining``.
    Strict comparison keeps the first symbol on ties.
    """
    n_symbols = remaining.shape[0]
    for i in range(draws.shape[0]):
        best = -1
        best_value = 0.0
        for j in range(n_symbols):
            if remaining[j] > 0:
                value = draws[i, j] * remaining[j]
                if best == -1 or value > best_value:
                    best = j
                    best_value = value
        if best == -1:  # All counts used up
            for j in range(n_symbols):
                value = draws[i, j] * remaining[j]
                if best == -1 or value > best_value:
                    best = j
                    best_value = value
        remaining[best] -= 1
        out[i] = best
