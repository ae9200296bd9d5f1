import numpy as np
from molseq.core.alphabet import Alphabet
from molseq.utils.protocols import HasAlphabet
from molseq.utils.resources import RESOURCES, jit


class TestResources:
    def test_package(self):
        assert RESOURCES.package == 'molseq'

    def test_rng_is_shared(self):
        assert isinstance(RESOURCES.rng, np.random.Generator)
        assert RESOURCES.rng is RESOURCES.rng

    def test_has_module(self):
        assert RESOURCES.has_module('numpy')
        assert not RESOURCES.has_module('molseq_no_such_module')


class TestJit:
    def test_configured(self):
        @jit(nopython=True, cache=False)
        def double(x): return x * 2
        assert double(2) == 4

    def test_bare(self):
        @jit
        def triple(x): return x * 3
        assert triple(2) == 6


class TestProtocols:
    def test_seq_has_alphabet(self):
        assert isinstance(Alphabet.NUCLEIC.seq('atg'), HasAlphabet)
