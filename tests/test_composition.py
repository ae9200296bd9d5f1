import pytest
from molseq.core.alphabet import Alphabet
from molseq.core.composition import composition, total, codon_usage


class TestComposition:
    def test_first_occurrence_order(self):
        comp = composition(Alphabet.NUCLEIC.seq('atgcaa'))
        assert comp == {'a': 3, 't': 1, 'g': 1, 'c': 1}
        assert list(comp) == ['a', 't', 'g', 'c']

    def test_counts_sum_to_length(self):
        seq = Alphabet.NUCLEIC.seq('atgcatgcATGCATGCAAAAnnry')
        assert sum(seq.composition().values()) == len(seq)

    def test_absent_symbols_omitted(self):
        assert 'u' not in Alphabet.NUCLEIC.seq('atgc').composition()

    def test_amino(self):
        assert Alphabet.AMINO.seq('mkkv').composition() == {'M': 1, 'K': 2, 'V': 1}

    def test_empty(self):
        assert Alphabet.NUCLEIC.seq('').composition() == {}


class TestTotal:
    def test_weighted_sum(self):
        assert total(Alphabet.NUCLEIC.seq('atgc'), {'a': 1.5, 't': 2, 'g': 3}) == 6.5

    def test_missing_symbols_are_zero(self):
        assert Alphabet.NUCLEIC.seq('cccc').total({'a': 1}) == 0.0

    def test_ignores_long_keys(self):
        assert Alphabet.NUCLEIC.seq('aa').total({'a': 1, 'aa': 100}) == 2.0

    def test_bytes_keys(self):
        assert Alphabet.AMINO.seq('MM').total({b'M': 2.5}) == 5.0

    def test_empty(self):
        assert Alphabet.AMINO.seq('').total({'M': 1}) == 0.0

    def test_returns_float(self):
        assert isinstance(Alphabet.NUCLEIC.seq('a').total({'a': 1}), float)


class TestCodonUsage:
    def test_counts(self):
        usage = codon_usage(Alphabet.NUCLEIC.seq('atgaaaatgtaa'))
        assert usage == {'atg': 2, 'aaa': 1, 'taa': 1}
        assert list(usage) == ['atg', 'aaa', 'taa']

    def test_trailing_bases_ignored(self):
        assert Alphabet.NUCLEIC.seq('atgaaaatgtaaat').codon_usage() == {'atg': 2, 'aaa': 1, 'taa': 1}

    def test_short(self):
        assert Alphabet.NUCLEIC.seq('at').codon_usage() == {}
