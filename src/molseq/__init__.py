"""
Top-level module: typed nucleic acid and amino acid sequences.

Examples:
    >>> from molseq import Alphabet
    >>> na = Alphabet.NUCLEIC.seq('atgcatgcATGCATGCAAAA')
    >>> na.gc_percent()
    40.0
    >>> str(na.splice('complement(join(1..5,16..20))'))
    'ttttgtgcat'
"""


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class MolseqWarning(Warning): pass


# Public API -----------------------------------------------------------------------------------------------------------
from molseq.core.alphabet import (Alphabet, NucleicAlphabet, AminoAlphabet, AlphabetError, TranslationError,
                                  TranslationWarning)
from molseq.core.seq import Seq, SeqError
from molseq.core.genetic_code import GeneticCode, GeneticCodeError
from molseq.core.location import Strand, Location, Locations, LocationError
from molseq.core.tables import NucleicAcid, AminoAcid, TableError
from molseq.utils.resources import RESOURCES
