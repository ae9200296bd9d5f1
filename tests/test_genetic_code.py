import pytest
from molseq.core.genetic_code import GeneticCode, GeneticCodeError


class TestGeneticCode:
    def test_standard(self):
        code = GeneticCode.get_table(1)
        assert code.name == 'Standard'
        assert code['atg'] == 'M'
        assert code['ttt'] == 'F'
        assert code['ggg'] == 'G'
        assert len(code) == 64

    def test_case_and_rna(self):
        code = GeneticCode.get_table()
        assert code['AUG'] == 'M'
        assert code.get('Tga') == GeneticCode.STOP

    def test_cached(self):
        assert GeneticCode.get_table(11) is GeneticCode.get_table(11)

    def test_missing_codon(self):
        code = GeneticCode.get_table(1)
        assert code.get('nnn') is None
        assert code.get('nnn', 'X') == 'X'
        with pytest.raises(KeyError):
            code['nnn']

    def test_stops(self):
        assert GeneticCode.get_table(1).stops == {'taa', 'tag', 'tga'}
        assert GeneticCode.get_table(2).stops == {'taa', 'tag', 'aga', 'agg'}
        assert GeneticCode.get_table(6).stops == {'tga'}

    def test_starts(self):
        standard, bacterial = GeneticCode.get_table(1), GeneticCode.get_table(11)
        assert standard.is_start('atg')
        assert not standard.is_start('gtg')
        assert bacterial.is_start('GUG')
        assert standard.is_stop('uaa')
        assert not standard.is_stop('atg')

    def test_variant_assignments(self):
        assert GeneticCode.get_table(2)['tga'] == 'W'
        assert GeneticCode.get_table(6)['taa'] == 'Q'
        assert GeneticCode.get_table(12)['ctg'] == 'S'

    def test_available(self):
        assert GeneticCode.available() == [1, 2, 3, 4, 5, 6, 9, 10, 11, 12, 13, 14]

    @pytest.mark.parametrize('table_id', GeneticCode.available())
    def test_complete(self, table_id):
        code = GeneticCode.get_table(table_id)
        assert len(code) == 64
        assert all(len(aa) == 1 for aa in code.values())
        assert code.starts <= set(code)

    def test_unknown(self):
        with pytest.raises(GeneticCodeError):
            GeneticCode(7)
        with pytest.raises(KeyError):
            GeneticCode.get_table(99)
