import numpy as np
import pytest
from molseq.core.alphabet import Alphabet, AlphabetError, NucleicAlphabet, AminoAlphabet


class TestAlphabetInit:
    def test_singletons(self):
        assert isinstance(Alphabet.NUCLEIC, NucleicAlphabet)
        assert isinstance(Alphabet.AMINO, AminoAlphabet)
        assert Alphabet.NUCLEIC.can_complement
        assert not Alphabet.AMINO.can_complement

    def test_nucleic_normalization(self):
        seq = Alphabet.NUCLEIC.seq('ATGC atgc\tAT\nG\rC')
        assert str(seq) == 'atgcatgcatgc'
        assert len(seq) == 12

    def test_amino_normalization(self):
        seq = Alphabet.AMINO.seq('acd efg\nhik')
        assert str(seq) == 'ACDEFGHIK'

    def test_empty(self):
        assert len(Alphabet.NUCLEIC.seq('')) == 0
        assert len(Alphabet.AMINO.seq()) == 0
        assert len(Alphabet.NUCLEIC.empty_seq()) == 0
        assert str(Alphabet.NUCLEIC.seq(' \n\t\r')) == ''

    def test_bytes_input(self):
        assert str(Alphabet.NUCLEIC.seq(b'ATGC')) == 'atgc'

    def test_non_ascii(self):
        with pytest.raises(AlphabetError, match="ASCII"):
            Alphabet.NUCLEIC.seq('atgé')

    def test_invalid_type(self):
        with pytest.raises(TypeError):
            Alphabet.NUCLEIC.seq(42)

    def test_other_symbols_are_kept(self):
        # Normalization only strips whitespace and unifies case
        assert str(Alphabet.NUCLEIC.seq('AT-G*C1')) == 'at-g*c1'


class TestAlphabetEncoding:
    def test_encode_is_ascii(self):
        encoded = Alphabet.NUCLEIC.encode(b'ACGT')
        np.testing.assert_array_equal(encoded, np.frombuffer(b'acgt', dtype=np.uint8))
        assert encoded.flags.writeable

    def test_decode(self):
        assert Alphabet.AMINO.decode(np.frombuffer(b'MKV', dtype=np.uint8)) == b'MKV'

    def test_encode_seq_renormalizes(self):
        na = Alphabet.NUCLEIC.seq('atgc')
        assert str(Alphabet.AMINO.seq(na)) == 'ATGC'


class TestAlphabetDetect:
    def test_detect_dna(self):
        assert Alphabet.detect('ATGCATGCNNNN') is Alphabet.NUCLEIC

    def test_detect_rna(self):
        assert Alphabet.detect('augcaugcaugc') is Alphabet.NUCLEIC

    def test_detect_protein(self):
        assert Alphabet.detect('MRVLKFGGTSVANAERFLRVADILESNARQGQVATVLSAPAKITNHLVAMIEKTISGQDA') is Alphabet.AMINO

    def test_detect_threshold(self):
        text = 'atgcatgcaq'  # 90% nucleotides, not above the threshold
        assert Alphabet.detect(text) is Alphabet.AMINO
        assert Alphabet.detect(text, threshold=0.5) is Alphabet.NUCLEIC

    def test_detect_empty(self):
        assert Alphabet.detect('') is Alphabet.AMINO

    def test_auto(self):
        na = Alphabet.auto('ATGC')
        assert na.alphabet is Alphabet.NUCLEIC
        assert str(na) == 'atgc'
        aa = Alphabet.auto('mkvl')
        assert aa.alphabet is Alphabet.AMINO
        assert str(aa) == 'MKVL'


class TestAlphabetCapabilities:
    @pytest.mark.parametrize('operation', [
        'forward_complement', 'reverse_complement', 'complement', 'translate', 'gc_percent',
        'illegal_bases', 'is_rna', 'dna', 'rna', 'forward_complement_in_place', 'reverse_complement_in_place'
    ])
    def test_nucleic_only(self, operation):
        aa = Alphabet.AMINO.seq('MKV')
        with pytest.raises(AlphabetError, match="not supported for amino acid"):
            getattr(aa, operation)()

    def test_amino_only(self):
        with pytest.raises(AlphabetError, match="not supported for nucleic acid"):
            Alphabet.NUCLEIC.seq('atg').codes()

    def test_failed_in_place_leaves_buffer(self):
        aa = Alphabet.AMINO.seq('MKV')
        with pytest.raises(AlphabetError):
            aa.reverse_complement_in_place()
        assert str(aa) == 'MKV'
