"""
Module for representing the two sequence variants (nucleic acid and amino acid) as alphabets.

An ``Alphabet`` owns the normalization rules of its variant and implements the operations only that variant
supports. ``Seq`` objects carry their alphabet as a tag and delegate variant-specific work to it.
"""
from collections.abc import Mapping
from typing import Union, Final, ClassVar, Callable, Optional
from warnings import warn

import numpy as np

from molseq import MolseqWarning
from molseq.core.seq import Seq
from molseq.core.genetic_code import GeneticCode, GeneticCodeError
from molseq.core.tables import NucleicAcid, AminoAcid
from molseq.core.randomize import randomize_from_counts


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class AlphabetError(Exception):
    """Raised when input is not valid for an alphabet or an operation is incompatible with the alphabet."""


class TranslationError(AlphabetError):
    """Raised when nucleotide-to-amino-acid translation cannot be set up (e.g. unknown genetic code)."""


class TranslationWarning(MolseqWarning):
    """Issued when a translation produces no residues."""


# Classes --------------------------------------------------------------------------------------------------------------
class Alphabet:
    """
    Base class for sequence variants.

    Symbols are stored as ASCII bytes. Each alphabet unifies case and strips whitespace on the way in, so every
    ``Seq`` it creates is normalized.

    Examples:
        >>> s = Alphabet.NUCLEIC.seq('ATG cat\\n')
        >>> str(s)
        'atgcat'
        >>> str(Alphabet.AMINO.seq('mkv'))
        'MKV'
    """
    __slots__ = ('name', '_case_table')
    DTYPE: Final = np.uint8
    ENCODING: Final = 'ascii'
    WHITESPACE: Final = b' \t\n\r'

    NUCLEIC: ClassVar['NucleicAlphabet']
    AMINO: ClassVar['AminoAlphabet']

    def __init__(self, name: str, case: Callable[[bytes], bytes]):
        """
        Initializes an Alphabet.

        Args:
            name: Human readable name of the variant.
            case: Case conversion applied to all symbols (``bytes.lower`` or ``bytes.upper``).
        """
        self.name = name
        symbols = bytes(range(256))
        self._case_table = bytes.maketrans(symbols, case(symbols))

    def __repr__(self): return f"Alphabet({self.name})"

    @property
    def can_complement(self) -> bool:
        """Whether sequences of this alphabet have a complementary strand."""
        return False

    @classmethod
    def detect(cls, text: Union[str, bytes], threshold: float = 0.9) -> 'Alphabet':
        """
        Guesses the alphabet of raw text.

        The text is considered nucleic acid when the fraction of A, C, G, T and U symbols, ignoring N, is above
        the threshold. U counts as a nucleotide, so RNA is detected as nucleic acid; a count over A, C, G and T
        alone would call RNA text protein.

        Args:
            text: The raw sequence text.
            threshold: Minimum fraction of nucleotide symbols.

        Returns:
            ``Alphabet.NUCLEIC`` or ``Alphabet.AMINO``.
        """
        data = cls.NUCLEIC.encode(text)
        if len(data) == 0: return cls.AMINO
        counts = np.bincount(data, minlength=256)
        bases = sum(counts[ord(b)] for b in 'acgtu')
        total = len(data) - counts[ord('n')]
        if total > 0 and bases / total > threshold: return cls.NUCLEIC
        return cls.AMINO

    @classmethod
    def auto(cls, text: Union[str, bytes], threshold: float = 0.9) -> 'Seq':
        """Creates a sequence using the alphabet detected from the text."""
        return cls.detect(text, threshold).seq(text)

    def encode(self, text: Union[str, bytes, 'Seq', np.ndarray]) -> np.ndarray:
        """
        Normalizes raw text into a new symbol buffer.

        Args:
            text: The text to normalize.

        Returns:
            A new, writeable ``uint8`` array of normalized ASCII symbols.

        Raises:
            AlphabetError: If the text is not ASCII.
        """
        if isinstance(text, Seq): text = text.tobytes()
        elif isinstance(text, np.ndarray): text = text.astype(self.DTYPE, copy=False).tobytes()
        elif isinstance(text, str):
            try: text = text.encode(self.ENCODING)
            except UnicodeEncodeError as e: raise AlphabetError('Sequence must be a valid ASCII string') from e
        elif not isinstance(text, (bytes, bytearray, memoryview)):
            raise TypeError(f'Cannot create a sequence from {type(text)}')
        text = bytes(text)
        if not text.isascii(): raise AlphabetError('Sequence must be a valid ASCII string')
        return np.frombuffer(text.translate(self._case_table, delete=self.WHITESPACE), dtype=self.DTYPE).copy()

    def decode(self, data: np.ndarray) -> bytes: return data.tobytes()

    def new_seq(self, data: np.ndarray) -> 'Seq':
        """
        Factory method. The ONLY valid way to create a Seq. ``data`` must already be normalized and owned.
        """
        return Seq(data, self, _validation_token=self)

    def seq(self, text: Union[str, bytes, 'Seq'] = '') -> 'Seq':
        """Creates a normalized ``Seq`` of this alphabet from raw text.

        Args:
            text: The raw text. Whitespace is removed and case is unified.

        Returns:
            A new ``Seq``.
        """
        return self.new_seq(self.encode(text))

    def empty_seq(self) -> 'Seq':
        """Returns an empty sequence with this alphabet."""
        return self.new_seq(np.empty(0, dtype=self.DTYPE))

    def random_seq(self, counts: Mapping[str, int], callback: Callable[[str], None] = None,
                   rng: np.random.Generator = None) -> 'Seq':
        """
        Generates a random sequence with exactly the given symbol counts.

        Args:
            counts: Number of occurrences of each symbol.
            callback: Called with each drawn symbol instead of building the sequence.
            rng: Random number generator (optional).

        Returns:
            The random ``Seq`` (empty if a callback was given).
        """
        return randomize_from_counts(self, counts, callback, rng)

    # Variant capabilities. The base alphabet supports none of them.
    def _unsupported(self, operation: str):
        raise AlphabetError(f'{operation} is not supported for {self.name} sequences')

    def is_rna(self, data: np.ndarray) -> bool: self._unsupported('is_rna')
    def forward_complement(self, data: np.ndarray) -> np.ndarray: self._unsupported('Complementation')
    def reverse_complement(self, data: np.ndarray) -> np.ndarray: self._unsupported('Complementation')
    def to_dna(self, data: np.ndarray) -> np.ndarray: self._unsupported('DNA conversion')
    def to_rna(self, data: np.ndarray) -> np.ndarray: self._unsupported('RNA conversion')
    def translate(self, seq: 'Seq', frame: int = 1, table=GeneticCode.DEFAULT, unknown: str = 'X') -> 'Seq':
        self._unsupported('Translation')
    def gc_percent(self, data: np.ndarray) -> float: self._unsupported('GC content')
    def illegal_bases(self, data: np.ndarray) -> list[str]: self._unsupported('illegal_bases')
    def codes(self, seq: 'Seq') -> list[Optional[str]]: self._unsupported('Residue codes')
    def molecular_weight(self, seq: 'Seq') -> float: self._unsupported('Molecular weight')
    def to_regex(self, seq: 'Seq') -> str: self._unsupported('Regular expressions')
    def names(self, seq: 'Seq') -> list[Optional[str]]: self._unsupported('Names')

    def finish_splice(self, data: np.ndarray) -> np.ndarray:
        """Post-processes the buffer assembled by splicing."""
        return data


class NucleicAlphabet(Alphabet):
    """
    DNA and RNA sequences, stored lowercase.

    A buffer containing 'u' is treated as RNA, even if it also contains 't'.

    Examples:
        >>> s = Alphabet.NUCLEIC.seq('atgcrymkdhvbswn')
        >>> str(s.forward_complement())
        'tacgyrkmhdbvswn'
    """
    __slots__ = ('_dna_complement', '_rna_complement', '_dna', '_rna')
    CANONICAL: Final = b'atgcu'

    def __init__(self):
        super().__init__('nucleic acid', bytes.lower)
        self._dna_complement = _translation_table(b'atgcrymkdhvbswn', b'tacgyrkmhdbvswn')
        self._rna_complement = _translation_table(b'augcrymkdhvbswn', b'uacgyrkmhdbvswn')
        self._dna = _translation_table(b'u', b't')
        self._rna = _translation_table(b't', b'u')

    @property
    def can_complement(self) -> bool: return True

    def is_rna(self, data: np.ndarray) -> bool: return bool(np.any(data == ord('u')))

    def forward_complement(self, data: np.ndarray) -> np.ndarray:
        """Complements each base without reversing ("atgc" -> "tacg")."""
        return (self._rna_complement if self.is_rna(data) else self._dna_complement)[data]

    def reverse_complement(self, data: np.ndarray) -> np.ndarray:
        """Reverses, then complements ("atgc" -> "gcat")."""
        return self.forward_complement(data[::-1])

    def to_dna(self, data: np.ndarray) -> np.ndarray: return self._dna[data]
    def to_rna(self, data: np.ndarray) -> np.ndarray: return self._rna[data]

    def translate(self, seq: 'Seq', frame: int = 1, table=GeneticCode.DEFAULT, unknown: str = 'X') -> 'Seq':
        """
        Translates into an amino acid sequence.

        Args:
            seq: The nucleic acid sequence.
            frame: 1, 2 or 3 for the forward strand; -1, -2, -3 (or 4, 5, 6) for the reverse strand.
                Any other value reads the forward strand from the first base.
            table: NCBI table number, a ``GeneticCode`` or any mapping of lowercase DNA codons to residues.
            unknown: Residue used for codons missing from the table (e.g. 'nnn').

        Returns:
            A new amino acid ``Seq``. Stop codons translate to '*'.

        Raises:
            TranslationError: If the genetic code is not available.
        """
        code = self._codon_table(table)
        data = self._dna[seq.encoded]
        if frame in (1, 2, 3): offset = frame - 1
        elif frame in (4, 5, 6):
            offset = frame - 4
            data = self.reverse_complement(data)
        elif frame in (-1, -2, -3):
            offset = -1 - frame
            data = self.reverse_complement(data)
        else: offset = 0
        n_codons = max(0, len(data) - offset) // 3
        text = data[offset:offset + n_codons * 3].tobytes().decode(self.ENCODING)
        protein = ''.join(code.get(text[i:i + 3]) or unknown for i in range(0, len(text), 3))
        if not protein:
            warn(f'Translated to an empty sequence: {seq!r} (frame {frame})', TranslationWarning)
        return Alphabet.AMINO.seq(protein)

    @staticmethod
    def _codon_table(table) -> Mapping:
        if isinstance(table, Mapping): return table
        try: return GeneticCode.get_table(table)
        except GeneticCodeError as e: raise TranslationError(f'Unknown genetic code {table!r}') from e

    def gc_percent(self, data: np.ndarray) -> float:
        """Returns the percentage of G+C among A, T, U, G and C bases, or NaN if there are none."""
        counts = np.bincount(data, minlength=256)
        gc = int(counts[ord('g')] + counts[ord('c')])
        at = int(counts[ord('a')] + counts[ord('t')] + counts[ord('u')])
        if gc + at == 0: return float('nan')
        return 100 * gc / (gc + at)

    def illegal_bases(self, data: np.ndarray) -> list[str]:
        """Returns the sorted distinct symbols other than a, t, g, c and u."""
        illegal = data[~np.isin(data, np.frombuffer(self.CANONICAL, dtype=self.DTYPE))]
        return [chr(i) for i in np.unique(illegal)]

    def molecular_weight(self, seq: 'Seq') -> float:
        return NucleicAcid.weight(str(seq), self.is_rna(seq.encoded))

    def to_regex(self, seq: 'Seq') -> str:
        return NucleicAcid.to_regex(str(seq), self.is_rna(seq.encoded))

    def names(self, seq: 'Seq') -> list[Optional[str]]:
        return [NucleicAcid.NAMES.get(base) for base in str(seq)]

    def finish_splice(self, data: np.ndarray) -> np.ndarray:
        # Harmonise t/u with the spliced product's own RNA/DNA state
        return self.to_rna(data) if self.is_rna(data) else self.to_dna(data)


class AminoAlphabet(Alphabet):
    """
    Protein sequences, stored uppercase.
    """
    __slots__ = ()

    def __init__(self):
        super().__init__('amino acid', bytes.upper)

    def codes(self, seq: 'Seq') -> list[Optional[str]]:
        """Returns the three-letter code of each residue (None for unknown symbols)."""
        return [AminoAcid.CODES.get(residue) for residue in str(seq)]

    def names(self, seq: 'Seq') -> list[Optional[str]]:
        """Returns the long name of each residue (None for unknown symbols)."""
        return [AminoAcid.NAMES.get(code) if code else None for code in self.codes(seq)]

    def molecular_weight(self, seq: 'Seq') -> float: return AminoAcid.weight(str(seq))
    def to_regex(self, seq: 'Seq') -> str: return AminoAcid.to_regex(str(seq))


# Functions ------------------------------------------------------------------------------------------------------------
def _translation_table(source: bytes, target: bytes) -> np.ndarray:
    """Builds a 256-entry byte lookup table mapping ``source`` symbols to ``target``, others to themselves."""
    table = np.arange(256, dtype=Alphabet.DTYPE)
    table[np.frombuffer(source, dtype=Alphabet.DTYPE)] = np.frombuffer(target, dtype=Alphabet.DTYPE)
    table.flags.writeable = False
    return table


# Initialize Standard Alphabets
Alphabet.NUCLEIC = NucleicAlphabet()
Alphabet.AMINO = AminoAlphabet()
