"""
Module for representing biological sequences as normalized, alphabet-tagged symbol buffers.
"""
from typing import Union, Generator, Callable, Mapping, Optional, Iterable

import numpy as np

from molseq.core.composition import composition, total, codon_usage
from molseq.core.genetic_code import GeneticCode
from molseq.core.location import Location
from molseq.core.randomize import randomize
from molseq.core.splice import splice
from molseq.utils.protocols import HasAlphabet, HasLocations


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class SeqError(Exception):
    """Raised when sequences cannot be combined or compared."""


# Classes --------------------------------------------------------------------------------------------------------------
class Seq(HasAlphabet):
    """
    Alphabet-aware sequence container owning a buffer of ASCII symbols (uint8).

    ``Seq`` objects should be created via ``Alphabet.seq()`` rather than directly, to ensure the buffer is
    normalized for its alphabet (nucleic acids lowercase, amino acids uppercase, no whitespace).

    Pure operations return new sequences that never share the buffer with their source. Methods ending in
    ``_in_place`` replace this sequence's buffer instead, so a ``Seq`` is not hashable.

    Positions passed to ``subseq`` and locations are 1-based and inclusive; Python indexing (``seq[0]``,
    ``seq[1:4]``) is 0-based as usual.

    Args:
        data: A numpy uint8 array of normalized ASCII symbols.
        alphabet: The ``Alphabet`` that owns this sequence.
        _validation_token: Internal token (must be the alphabet) to prevent
            direct construction.

    Examples:
        >>> seq = Alphabet.NUCLEIC.seq('atgcatgcATGCATGCAAAA')
        >>> len(seq)
        20
        >>> str(seq.subseq(2, 6))
        'tgcat'
        >>> str(seq.reverse_complement())
        'ttttgcatgcatgcatgcat'
    """
    __slots__ = ('_data', '_alphabet')
    __hash__ = None

    def __init__(self, data: np.ndarray, alphabet: 'Alphabet', _validation_token: object = None):
        if _validation_token is not alphabet:
            raise PermissionError("Seq objects must be created via an Alphabet")
        self._alphabet = alphabet
        self._set(data)

    def _set(self, data: np.ndarray):
        self._data = data
        self._data.flags.writeable = False  # Only replaced wholesale, never written through

    @property
    def alphabet(self) -> 'Alphabet':
        """Returns the alphabet (variant) of this sequence."""
        return self._alphabet

    @property
    def encoded(self) -> np.ndarray:
        """Returns the underlying read-only symbol array (zero-copy)."""
        return self._data

    def __array__(self, dtype=None):
        return self._data.astype(dtype, copy=False) if dtype else self._data

    def __bytes__(self) -> bytes: return self._alphabet.decode(self._data)
    def tobytes(self) -> bytes: return self.__bytes__()
    def __len__(self): return self._data.shape[0]
    def __str__(self): return self.__bytes__().decode('ascii')
    def __iter__(self): return iter(str(self))
    def __bool__(self): return len(self._data) > 0
    def __repr__(self):
        if len(self) <= 14: return str(self)
        head = self._alphabet.decode(self._data[:7]).decode('ascii')
        tail = self._alphabet.decode(self._data[-7:]).decode('ascii')
        return f"{head}...{tail}"

    def __reversed__(self) -> 'Seq': return self._alphabet.new_seq(self._data[::-1].copy())

    def __contains__(self, item: Union['Seq', str, bytes]):
        if isinstance(item, Seq):
            if item.alphabet is not self._alphabet: return False
            query = item.tobytes()
        elif isinstance(item, (str, bytes)): query = self._alphabet.encode(item).tobytes()
        else: return False
        return query in self._data.tobytes()

    def __eq__(self, other):
        if self is other: return True
        if isinstance(other, (str, bytes)):
            if not other.isascii(): return False
            other = self._alphabet.seq(other)
        if not isinstance(other, Seq): return False
        if self._alphabet is not other._alphabet: return False
        return np.array_equal(self._data, other._data)

    def __getitem__(self, item: Union[slice, int]) -> 'Seq':
        """Extracts a subsequence by 0-based index or slice.

        Examples:
            >>> seq = Alphabet.NUCLEIC.seq('atgcga')
            >>> seq[1:4]
            tgc
        """
        if isinstance(item, slice): return self._alphabet.new_seq(self._data[item].copy())
        if isinstance(item, (int, np.integer)): return self._alphabet.new_seq(self._data[[item]])
        raise TypeError(f'Seq indices must be integers or slices, not {type(item)}')

    def _coerce(self, other: Union['Seq', str, bytes]) -> np.ndarray:
        if isinstance(other, Seq):
            if other.alphabet is not self._alphabet:
                raise SeqError('Cannot concatenate sequences with different alphabets')
            return other.encoded
        if isinstance(other, (str, bytes)): return self._alphabet.encode(other)
        raise SeqError(f'Cannot concatenate {type(other)} to a sequence')

    def __add__(self, other: Union['Seq', str, bytes]) -> 'Seq':
        return self._alphabet.new_seq(np.concatenate((self._data, self._coerce(other))))

    def extend(self, other: Union['Seq', str, bytes]) -> 'Seq':
        """Appends another sequence (or raw text, normalized by this alphabet) to this buffer."""
        self._set(np.concatenate((self._data, self._coerce(other))))
        return self

    def copy(self) -> 'Seq': return self._alphabet.new_seq(self._data.copy())

    def normalize(self) -> 'Seq':
        """Returns a re-normalized copy of the sequence."""
        return self._alphabet.seq(self.tobytes())

    def normalize_in_place(self) -> 'Seq':
        self._set(self._alphabet.encode(self.tobytes()))
        return self

    def subseq(self, start: int = 1, end: int = None) -> Optional['Seq']:
        """
        Returns the subsequence between two 1-based, inclusive positions.

        Args:
            start: First position (1-based).
            end: Last position (1-based, inclusive). Defaults to the sequence length.

        Returns:
            A new ``Seq``, empty if ``end < start``, or ``None`` if either position is below 1.

        Examples:
            >>> str(Alphabet.NUCLEIC.seq('atgcatgcatgcatgcaaaa').subseq(2, 6))
            'tgcat'
        """
        if end is None: end = len(self)
        if start < 1 or end < 1: return None
        return self._alphabet.new_seq(self._data[start - 1:end].copy())

    def window_search(self, window_size: int, step_size: int = 1) -> Generator['Seq', None, 'Seq']:
        """
        Lazily yields windows of ``window_size`` symbols, starting every ``step_size`` symbols.

        The generator returns the remainder (the symbols after the last window) when exhausted, which can be
        captured with ``yield from``. ``window_remainder`` gives the same remainder directly.

        Args:
            window_size: Number of symbols per window.
            step_size: Distance between window starts.

        Returns:
            A generator of ``Seq`` windows.

        Raises:
            ValueError: If either size is below 1.

        Examples:
            >>> seq = Alphabet.NUCLEIC.seq('atgcatgcatgcatgcaaaa')
            >>> [str(w.translate()) for w in seq.window_search(15, 3)]
            ['MHACM', 'HACMQ']
        """
        self._check_window(window_size, step_size)
        return self._window_generator(window_size, step_size)

    def _window_generator(self, window_size: int, step_size: int) -> Generator['Seq', None, 'Seq']:
        data = self._data
        last = None
        for i in range(0, len(data) - window_size + 1, step_size):
            yield self._alphabet.new_seq(data[i:i + window_size].copy())
            last = i
        return self._remainder(data, last, window_size)

    def window_remainder(self, window_size: int, step_size: int = 1) -> 'Seq':
        """Returns the symbols left after the last window emitted by ``window_search``."""
        self._check_window(window_size, step_size)
        n = len(self._data)
        last = ((n - window_size) // step_size) * step_size if n >= window_size else None
        return self._remainder(self._data, last, window_size)

    def _remainder(self, data: np.ndarray, last: Optional[int], window_size: int) -> 'Seq':
        if last is None: return self._alphabet.new_seq(data.copy())
        return self._alphabet.new_seq(data[last + window_size:].copy())

    @staticmethod
    def _check_window(window_size: int, step_size: int):
        if window_size < 1: raise ValueError(f'Window size must be positive, not {window_size}')
        if step_size < 1: raise ValueError(f'Step size must be positive, not {step_size}')

    def to_fasta(self, header: str = '', width: int = None) -> str:
        """
        Formats the sequence as FASTA text.

        Args:
            header: The header line, without the leading '>'.
            width: Line width for sequence wrapping (None or 0 for a single line).

        Returns:
            The FASTA text, ending with a newline.

        Examples:
            >>> print(Alphabet.NUCLEIC.seq('atgcatgcatgc').to_fasta('test', 8), end='')
            >test
            atgcatgc
            atgc
        """
        text = str(self)
        if width is not None and width < 0: raise ValueError(f'Width must not be negative, not {width}')
        if width:
            body = ''.join(f"{text[i:i + width]}\n" for i in range(0, len(text), width))
        else:
            body = f"{text}\n"
        return f">{header}\n{body}"

    # Composition ------------------------------------------------------------------------------------------------------
    def composition(self) -> dict[str, int]:
        """Returns the occurrence count of each symbol, in order of first occurrence."""
        return composition(self)

    def total(self, weights: Mapping[str, float]) -> float:
        """Sums ``weights`` over the symbols of the sequence. Symbols missing from ``weights`` count as zero."""
        return total(self, weights)

    def codon_usage(self) -> dict[str, int]:
        return codon_usage(self)

    def randomize(self, counts: Mapping[str, int] = None, callback: Callable[[str], None] = None,
                  rng: np.random.Generator = None) -> 'Seq':
        """
        Returns a random shuffle of the sequence that keeps its composition.

        Args:
            counts: Extra symbol counts to draw in addition to the length of this sequence.
            callback: Called with each drawn symbol instead of building the sequence.
            rng: Random number generator (optional).

        Returns:
            A new ``Seq`` of this alphabet (empty if a callback was given).
        """
        return randomize(self, counts, callback, rng)

    def splice(self, locations: Union[HasLocations, Location, str, Iterable[Location]]) -> 'Seq':
        """
        Assembles a new sequence from locations, e.g. ``seq.splice('complement(join(1..5,16..20))')``.
        """
        return splice(self, locations)

    # Nucleic acids ----------------------------------------------------------------------------------------------------
    def is_rna(self) -> bool:
        """Whether the sequence contains 'u'. Nucleic acids only."""
        return self._alphabet.is_rna(self._data)

    def forward_complement(self) -> 'Seq':
        """Returns the complement without reversing ("atgc" -> "tacg")."""
        return self._alphabet.new_seq(self._alphabet.forward_complement(self._data))

    def forward_complement_in_place(self) -> 'Seq':
        self._set(self._alphabet.forward_complement(self._data))
        return self

    def reverse_complement(self) -> 'Seq':
        """Returns the reverse complement ("atgc" -> "gcat")."""
        return self._alphabet.new_seq(self._alphabet.reverse_complement(self._data))

    def reverse_complement_in_place(self) -> 'Seq':
        self._set(self._alphabet.reverse_complement(self._data))
        return self

    complement = reverse_complement
    complement_in_place = reverse_complement_in_place

    def dna(self) -> 'Seq': return self._alphabet.new_seq(self._alphabet.to_dna(self._data))
    def rna(self) -> 'Seq': return self._alphabet.new_seq(self._alphabet.to_rna(self._data))

    def dna_in_place(self) -> 'Seq':
        self._set(self._alphabet.to_dna(self._data))
        return self

    def rna_in_place(self) -> 'Seq':
        self._set(self._alphabet.to_rna(self._data))
        return self

    def translate(self, frame: int = 1, table=GeneticCode.DEFAULT, unknown: str = 'X') -> 'Seq':
        """
        Translates into an amino acid sequence. See ``NucleicAlphabet.translate``.

        Examples:
            >>> str(Alphabet.NUCLEIC.seq('atgaaataa').translate())
            'MK*'
        """
        return self._alphabet.translate(self, frame, table, unknown)

    def gc_percent(self) -> float: return self._alphabet.gc_percent(self._data)
    def illegal_bases(self) -> list[str]: return self._alphabet.illegal_bases(self._data)

    # Both variants ----------------------------------------------------------------------------------------------------
    def molecular_weight(self) -> float: return self._alphabet.molecular_weight(self)
    def to_regex(self) -> str: return self._alphabet.to_regex(self)
    def names(self) -> list[Optional[str]]: return self._alphabet.names(self)

    # Amino acids ------------------------------------------------------------------------------------------------------
    def codes(self) -> list[Optional[str]]: return self._alphabet.codes(self)
