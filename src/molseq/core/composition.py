"""
Symbol counting over sequences: composition, weighted totals and codon usage.
"""
from typing import Mapping

import numpy as np


# Functions ------------------------------------------------------------------------------------------------------------
def composition(seq: 'Seq') -> dict[str, int]:
    """
    Counts the occurrences of each symbol.

    Args:
        seq: The sequence.

    Returns:
        A dictionary of symbol counts, ordered by first occurrence in the sequence. Symbols that do not occur
        are absent. The counts sum to ``len(seq)``.

    Examples:
        >>> composition(Alphabet.NUCLEIC.seq('atgcaa'))
        {'a': 3, 't': 1, 'g': 1, 'c': 1}
    """
    data = seq.encoded
    if len(data) == 0: return {}
    symbols, first, counts = np.unique(data, return_index=True, return_counts=True)
    return {chr(symbols[i]): int(counts[i]) for i in np.argsort(first, kind='stable')}


def total(seq: 'Seq', weights: Mapping[str, float]) -> float:
    """
    Sums a per-symbol value over the sequence, e.g. an amino acid index.

    Args:
        seq: The sequence.
        weights: Value of each symbol. Symbols missing from the mapping contribute zero, and keys that are not
            single characters are ignored.

    Returns:
        The sum as a float.

    Examples:
        >>> total(Alphabet.NUCLEIC.seq('atgc'), {'a': 1.5, 't': 2, 'g': 3})
        6.5
    """
    table = np.zeros(256, dtype=np.float64)
    for symbol, value in weights.items():
        if isinstance(symbol, bytes): symbol = symbol.decode('latin-1')
        if isinstance(symbol, str) and len(symbol) == 1 and ord(symbol) < 256: table[ord(symbol)] = value
    return float(table[seq.encoded].sum())


def codon_usage(seq: 'Seq') -> dict[str, int]:
    """Counts each non-overlapping codon read from the first position, in order of first occurrence."""
    usage = {}
    for codon in seq.window_search(3, 3):
        codon = str(codon)
        usage[codon] = usage.get(codon, 0) + 1
    return usage
