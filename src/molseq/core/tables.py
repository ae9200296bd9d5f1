"""
Lookup tables for nucleotides and amino acids: molecular weights, IUPAC ambiguity patterns and names.
"""
from re import escape
from typing import ClassVar


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class TableError(ValueError):
    """Raised when a symbol has no entry in a lookup table."""


# Classes --------------------------------------------------------------------------------------------------------------
class NucleicAcid:
    """
    Nucleotide tables. Symbols are lowercase, as stored in nucleic acid sequences.

    Examples:
        >>> NucleicAcid.to_regex('atgn')
        'atg[atgcyrwskmbdhvn]'
        >>> NucleicAcid.to_regex('atgn', rna=True)
        'aug[augcyrwskmbdhvn]'
    """
    # Residue weights (as calculated by BioPerl's SeqStats)
    WEIGHTS: ClassVar[dict[str, float]] = {'a': 135.15, 't': 126.13, 'g': 151.15, 'c': 111.12, 'u': 112.10}
    DEOXYRIBOSE_PHOSPHATE: ClassVar[float] = 196.11
    RIBOSE_PHOSPHATE: ClassVar[float] = 212.11
    HYDROGEN: ClassVar[float] = 1.00794
    WATER: ClassVar[float] = 18.015
    AMBIGUITY: ClassVar[dict[str, str]] = {
        'y': 'tcy', 'r': 'agr', 'w': 'atw', 's': 'gcs', 'k': 'tgk', 'm': 'acm',
        'b': 'tgcyskb', 'd': 'atgrwkd', 'h': 'atcwmyh', 'v': 'agcmrsv', 'n': 'atgcyrwskmbdhvn'
    }
    NAMES: ClassVar[dict[str, str]] = {
        'a': 'adenine', 't': 'thymine', 'g': 'guanine', 'c': 'cytosine', 'u': 'uracil',
        'y': 'pyrimidine', 'r': 'purine', 'w': 'weak', 's': 'strong', 'k': 'keto', 'm': 'amino',
        'b': 'not adenine', 'd': 'not cytosine', 'h': 'not guanine', 'v': 'not thymine', 'n': 'any base'
    }

    @classmethod
    def weight(cls, seq: str, rna: bool = False) -> float:
        """
        Estimates the molecular weight of a single-stranded nucleic acid.

        Args:
            seq: The nucleotide symbols.
            rna: Use ribose instead of deoxyribose phosphate backbone weights.

        Returns:
            The weight in Daltons.

        Raises:
            TableError: If the sequence contains a symbol other than a, t, g, c or u.
        """
        seq = str(seq).lower()
        if len(seq) == 1 and seq in cls.WEIGHTS: return cls.WEIGHTS[seq]
        phosphate = cls.RIBOSE_PHOSPHATE if rna else cls.DEOXYRIBOSE_PHOSPHATE
        total = 0.0
        for base in seq:
            if (w := cls.WEIGHTS.get(base)) is None: raise TableError(f"Invalid nucleic acid '{base}'")
            total += w + phosphate - cls.HYDROGEN * 2
        return total - cls.WATER * max(0, len(seq) - 1)

    @classmethod
    def to_regex(cls, seq: str, rna: bool = False) -> str:
        """Expands IUPAC ambiguity codes into a regular expression pattern string."""
        parts = []
        for base in str(seq).lower():
            if code := cls.AMBIGUITY.get(base):
                parts.append(f"[{code.replace('t', 'u') if rna else code}]")
            else:
                parts.append('u' if rna and base == 't' else escape(base))
        return ''.join(parts)


class AminoAcid:
    """
    Amino acid tables. Symbols are uppercase, as stored in amino acid sequences.
    """
    WEIGHTS: ClassVar[dict[str, float]] = {
        'A': 89.09, 'C': 121.15, 'D': 133.10, 'E': 147.13, 'F': 165.19, 'G': 75.07, 'H': 155.16, 'I': 131.17,
        'K': 146.19, 'L': 131.17, 'M': 149.21, 'N': 132.12, 'O': 255.31, 'P': 115.13, 'Q': 146.15, 'R': 174.20,
        'S': 105.09, 'T': 119.12, 'U': 168.06, 'V': 117.15, 'W': 204.23, 'Y': 181.19
    }
    AMBIGUITY: ClassVar[dict[str, str]] = {
        'B': 'DNB', 'Z': 'EQZ', 'J': 'ILJ', 'X': 'ACDEFGHIKLMNPQRSTVWYUOX'
    }
    CODES: ClassVar[dict[str, str]] = {
        'A': 'Ala', 'C': 'Cys', 'D': 'Asp', 'E': 'Glu', 'F': 'Phe', 'G': 'Gly', 'H': 'His', 'I': 'Ile',
        'K': 'Lys', 'L': 'Leu', 'M': 'Met', 'N': 'Asn', 'P': 'Pro', 'Q': 'Gln', 'R': 'Arg', 'S': 'Ser',
        'T': 'Thr', 'V': 'Val', 'W': 'Trp', 'Y': 'Tyr', 'U': 'Sec', 'O': 'Pyl', 'B': 'Asx', 'Z': 'Glx',
        'J': 'Xle', 'X': 'Xaa', '*': 'Ter'
    }
    NAMES: ClassVar[dict[str, str]] = {
        'Ala': 'alanine', 'Cys': 'cysteine', 'Asp': 'aspartic acid', 'Glu': 'glutamic acid',
        'Phe': 'phenylalanine', 'Gly': 'glycine', 'His': 'histidine', 'Ile': 'isoleucine', 'Lys': 'lysine',
        'Leu': 'leucine', 'Met': 'methionine', 'Asn': 'asparagine', 'Pro': 'proline', 'Gln': 'glutamine',
        'Arg': 'arginine', 'Ser': 'serine', 'Thr': 'threonine', 'Val': 'valine', 'Trp': 'tryptophan',
        'Tyr': 'tyrosine', 'Sec': 'selenocysteine', 'Pyl': 'pyrrolysine', 'Asx': 'asparagine or aspartic acid',
        'Glx': 'glutamine or glutamic acid', 'Xle': 'leucine or isoleucine', 'Xaa': 'unknown', 'Ter': 'stop'
    }

    @classmethod
    def weight(cls, seq: str) -> float:
        """
        Estimates the molecular weight of a peptide as the sum of residues minus the water lost per peptide bond.

        Raises:
            TableError: If the sequence contains a residue without a known weight.
        """
        seq = str(seq).upper()
        total = 0.0
        for residue in seq:
            if (w := cls.WEIGHTS.get(residue)) is None: raise TableError(f"Invalid amino acid '{residue}'")
            total += w
        return total - NucleicAcid.WATER * max(0, len(seq) - 1)

    @classmethod
    def to_regex(cls, seq: str) -> str:
        return ''.join(f"[{code}]" if (code := cls.AMBIGUITY.get(r)) else escape(r) for r in str(seq).upper())
