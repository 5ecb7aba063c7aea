"""
Unit tests for EntropyCalculator.
"""

import pytest

from transmission_messenger.EntropyCalculator import EntropyCalculator
from transmission_messenger.HuffmanCoder import CodeTable, HuffmanCoder


class TestEntropyCalculator:

    def test_uniform_message_has_no_redundancy(self):
        calc = EntropyCalculator(b"abcd")
        assert calc.entropy == pytest.approx(2.0)
        assert calc.max_entropy == pytest.approx(2.0)
        assert calc.relative_redundancy == pytest.approx(0.0)

    def test_skewed_message(self):
        calc = EntropyCalculator(b"abbbc")
        assert calc.entropy < calc.max_entropy
        assert calc.absolute_redundancy == pytest.approx(calc.max_entropy - calc.entropy)
        assert 0.0 < calc.relative_redundancy < 1.0

    def test_single_symbol(self):
        calc = EntropyCalculator(b"aaaa")
        assert calc.entropy == 0.0
        assert calc.relative_redundancy == 0.0

    def test_huffman_is_within_one_bit_of_entropy(self):
        message = b"it was the best of times, it was the worst of times"
        calc = EntropyCalculator(message)
        compressed = HuffmanCoder.optimal_for(message).compress(message)
        assert calc.compression_bound(len(message)) <= len(compressed)
        assert len(compressed) < calc.compression_bound(len(message)) + len(message)

    def test_empty_message(self):
        with pytest.raises(ValueError):
            EntropyCalculator(b"")

    def test_repr(self):
        assert repr(EntropyCalculator(b"ab")).startswith("EntropyCalculator(H=1.0000 bits/byte")


class TestCodeEfficiency:

    def test_expected_length(self):
        calc = EntropyCalculator(b"aaab")
        table = CodeTable({ord("a"): "0", ord("b"): "10"})
        assert calc.expected_length(table) == pytest.approx(0.75 * 1 + 0.25 * 2)

    def test_uniform_four_symbols_are_perfectly_coded(self):
        calc = EntropyCalculator(b"abcd" * 3)
        table = CodeTable({ord("a"): "00", ord("b"): "01", ord("c"): "10", ord("d"): "11"})
        assert calc.efficiency(table) == pytest.approx(1.0)

    def test_dyadic_message_reaches_entropy(self):
        # probabilities 1/2, 1/4, 1/8, 1/8
        calc = EntropyCalculator(b"aaaabbcd")
        efficiencies = calc.table_efficiencies()
        assert efficiencies["huffman"] == pytest.approx(1.0)
        assert efficiencies["shannon"] == pytest.approx(1.0)

    def test_fitted_tables_never_beat_entropy(self):
        calc = EntropyCalculator(b"it was the best of times, it was the worst of times")
        efficiencies = calc.table_efficiencies()
        assert set(efficiencies) == {"huffman", "shannon"}
        assert 0.9 < efficiencies["huffman"] <= 1.0
        assert 0.0 < efficiencies["shannon"] <= efficiencies["huffman"]

    def test_wasteful_table_scores_lower(self):
        calc = EntropyCalculator(b"abcd")
        table = CodeTable({ord("a"): "0", ord("b"): "10", ord("c"): "110", ord("d"): "111"})
        assert calc.efficiency(table) == pytest.approx(2.0 / 2.25)

    def test_single_symbol_scores_zero(self):
        calc = EntropyCalculator(b"zzz")
        assert calc.table_efficiencies() == {"huffman": 0.0, "shannon": 0.0}

    def test_table_missing_a_symbol(self):
        calc = EntropyCalculator(b"abc")
        with pytest.raises(ValueError):
            calc.efficiency(CodeTable({ord("a"): "0", ord("b"): "1"}))
