"""
Codon translation tables (NCBI genetic codes).
"""
from collections.abc import Mapping
from itertools import product
from typing import Iterator, ClassVar, Optional


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class GeneticCodeError(KeyError):
    """Raised when a genetic code identifier is not available."""


# Classes --------------------------------------------------------------------------------------------------------------
class GeneticCode(Mapping):
    """
    Read-only mapping of lowercase DNA codons to single-letter amino acid symbols.

    Stop codons translate to ``STOP`` ('*'). Codons that are not made of the four
    canonical bases (e.g. 'nnn') have no entry, so ``get`` returns ``None`` for them.

    Examples:
        >>> code = GeneticCode.get_table(1)
        >>> code['atg']
        'M'
        >>> code.get('nnn') is None
        True
    """
    __slots__ = ('id', 'name', '_codons', '_starts', '_stops')
    STOP: ClassVar[str] = '*'
    DEFAULT: ClassVar[int] = 1
    _BASES = 'tcag'
    # id: (name, amino acids in TCAG order, start codons)
    _TABLES = {
        1: ('Standard', 'FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG',
            ('ttg', 'ctg', 'atg')),
        2: ('Vertebrate Mitochondrial', 'FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSS**VVVVAAAADDEEGGGG',
            ('att', 'atc', 'ata', 'atg', 'gtg')),
        3: ('Yeast Mitochondrial', 'FFLLSSSSYY**CCWWTTTTPPPPHHQQRRRRIIMMTTTTNNKKSSRRVVVVAAAADDEEGGGG',
            ('ata', 'atg')),
        4: ('Mold, Protozoan, and Coelenterate Mitochondrial',
            'FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG',
            ('tta', 'ttg', 'ctg', 'att', 'atc', 'ata', 'atg', 'gtg')),
        5: ('Invertebrate Mitochondrial', 'FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSSSVVVVAAAADDEEGGGG',
            ('ttg', 'att', 'atc', 'ata', 'atg', 'gtg')),
        6: ('Ciliate, Dasycladacean and Hexamita Nuclear',
            'FFLLSSSSYYQQCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG', ('atg',)),
        9: ('Echinoderm and Flatworm Mitochondrial',
            'FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG', ('atg', 'gtg')),
        10: ('Euplotid Nuclear', 'FFLLSSSSYY**CCCWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG', ('atg',)),
        11: ('Bacterial, Archaeal and Plant Plastid',
             'FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG',
             ('ttg', 'ctg', 'att', 'atc', 'ata', 'atg', 'gtg')),
        12: ('Alternative Yeast Nuclear', 'FFLLSSSSYY**CC*WLLLSPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG',
             ('ctg', 'atg')),
        13: ('Ascidian Mitochondrial', 'FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSGGVVVVAAAADDEEGGGG',
             ('ttg', 'ata', 'atg', 'gtg')),
        14: ('Alternative Flatworm Mitochondrial',
             'FFLLSSSSYYY*CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG', ('atg',)),
    }
    _CACHE = {}

    def __init__(self, table_id: int = DEFAULT):
        """
        Initializes a genetic code from the NCBI table identifier.

        Args:
            table_id: NCBI translation table number.

        Raises:
            GeneticCodeError: If the table is not available.
        """
        if (table := self._TABLES.get(table_id)) is None:
            raise GeneticCodeError(f'Genetic code {table_id} not implemented')
        self.id: int = table_id
        self.name: str = table[0]
        codons = (''.join(c) for c in product(self._BASES, repeat=3))
        self._codons: dict[str, str] = dict(zip(codons, table[1]))
        self._starts: frozenset[str] = frozenset(table[2])
        self._stops: frozenset[str] = frozenset(k for k, v in self._codons.items() if v == self.STOP)

    @classmethod
    def get_table(cls, table_id: int = DEFAULT) -> 'GeneticCode':
        """Returns a cached instance of the genetic code with the given NCBI identifier."""
        if (cached := cls._CACHE.get(table_id)) is None:
            cls._CACHE[table_id] = (cached := cls(table_id))
        return cached

    @classmethod
    def available(cls) -> list[int]: return sorted(cls._TABLES)

    def __repr__(self): return f"GeneticCode({self.id}: {self.name})"
    def __len__(self): return len(self._codons)
    def __iter__(self) -> Iterator[str]: return iter(self._codons)
    def __getitem__(self, codon: str) -> str: return self._codons[self._key(codon)]

    def get(self, codon: str, default: Optional[str] = None) -> Optional[str]:
        return self._codons.get(self._key(codon), default)

    @property
    def starts(self) -> frozenset[str]: return self._starts

    @property
    def stops(self) -> frozenset[str]: return self._stops

    def is_start(self, codon: str) -> bool: return self._key(codon) in self._starts
    def is_stop(self, codon: str) -> bool: return self._key(codon) in self._stops

    @staticmethod
    def _key(codon: str) -> str:
        # Tables are keyed on lowercase DNA; accept RNA and either case
        return codon.lower().replace('u', 't') if isinstance(codon, str) else codon
