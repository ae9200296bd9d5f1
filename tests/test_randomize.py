from collections import Counter

import numpy as np
import pytest
from molseq.core import randomize as randomize_module
from molseq.core.alphabet import Alphabet
from molseq.core.randomize import randomize, randomize_from_counts


class ConstantRng:
    """Draws the same number everywhere, so every symbol with a remaining count ties."""
    def random(self, shape): return np.full(shape, 0.5)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


class TestRandomize:
    def test_keeps_composition(self, rng):
        seq = Alphabet.NUCLEIC.seq('atgcatgcATGCATGCAAAA')
        shuffled = seq.randomize(rng=rng)
        assert len(shuffled) == len(seq)
        assert shuffled.composition() == seq.composition()
        assert shuffled.alphabet is Alphabet.NUCLEIC

    def test_amino(self, rng):
        seq = Alphabet.AMINO.seq('MKVLAGMKVLAG')
        shuffled = randomize(seq, rng=rng)
        assert shuffled.alphabet is Alphabet.AMINO
        assert Counter(str(shuffled)) == Counter(str(seq))

    def test_reproducible(self):
        seq = Alphabet.NUCLEIC.seq('atgcatgcatgcatgcaaaa' * 5)
        first = seq.randomize(rng=np.random.default_rng(7))
        second = seq.randomize(rng=np.random.default_rng(7))
        assert first == second

    def test_default_rng(self):
        seq = Alphabet.NUCLEIC.seq('aattggcc')
        assert seq.randomize().composition() == seq.composition()

    def test_empty(self, rng):
        assert len(Alphabet.NUCLEIC.seq('').randomize(rng=rng)) == 0

    def test_extra_counts_add_to_length(self, rng):
        # Positions beyond the counted symbols are drawn from the exhausted counts
        product = Alphabet.NUCLEIC.seq('atgc').randomize({'a': 2}, rng=rng)
        assert str(product) == 'aaaaaa'

    def test_chunked(self, rng, monkeypatch):
        monkeypatch.setattr(randomize_module, 'CHUNK_SIZE', 7)
        product = randomize_from_counts(Alphabet.NUCLEIC, {'a': 10, 't': 15}, rng=rng)
        assert product.composition() == {'a': 10, 't': 15}

    def test_ties_go_to_first_counted_symbol(self):
        product = randomize_from_counts(Alphabet.NUCLEIC, {'c': 1, 'a': 1}, rng=ConstantRng())
        assert str(product) == 'ca'
        product = randomize_from_counts(Alphabet.NUCLEIC, {'a': 1, 'c': 1}, rng=ConstantRng())
        assert str(product) == 'ac'


class TestRandomFromCounts:
    def test_exact_counts(self, rng):
        counts = {'a': 10, 'c': 20, 'g': 30, 't': 40}
        seq = randomize_from_counts(Alphabet.NUCLEIC, counts, rng=rng)
        assert len(seq) == 100
        assert seq.composition() == counts

    def test_alphabet_entry_point(self, rng):
        seq = Alphabet.AMINO.random_seq({'M': 2, 'K': 3}, rng=rng)
        assert seq.alphabet is Alphabet.AMINO
        assert seq.composition() == {'M': 2, 'K': 3}

    def test_callback(self, rng):
        drawn = []
        counts = {'a': 10, 'c': 20, 'g': 30, 't': 40}
        seq = Alphabet.NUCLEIC.random_seq(counts, callback=drawn.append, rng=rng)
        assert len(seq) == 0
        assert len(drawn) == 100
        assert Counter(drawn) == counts

    def test_zero_counts(self, rng):
        assert str(Alphabet.NUCLEIC.random_seq({'a': 3, 'c': 0}, rng=rng)) == 'aaa'
        assert len(Alphabet.NUCLEIC.random_seq({}, rng=rng)) == 0

    def test_negative_count(self, rng):
        with pytest.raises(ValueError, match="negative"):
            Alphabet.NUCLEIC.random_seq({'a': -1}, rng=rng)

    def test_fractional_count(self, rng):
        with pytest.raises(ValueError, match="whole number"):
            Alphabet.NUCLEIC.random_seq({'a': 1.5}, rng=rng)

    @pytest.mark.parametrize('symbol', [' ', '\n', 'ac', ''])
    def test_invalid_symbol(self, rng, symbol):
        with pytest.raises(ValueError, match="single non-whitespace"):
            randomize_from_counts(Alphabet.NUCLEIC, {'a': 2, symbol: 3}, rng=rng)
