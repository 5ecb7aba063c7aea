"""
Tests for the experiment scripts built on top of the payload pipeline.
"""

import pytest

from MaxErrorRateFinder import find_max_error_rate, test_pipeline_for_error_rate as pipeline_for_error_rate
from TransmissionModule import TransmissionModule
from transmission_messenger.ChannelCoder import CodingScheme
from transmission_messenger.TransmissionErrors import UncorrectableTransmissionError


class TestTransmissionModule:

    @pytest.mark.parametrize("compression", ["rle", "huffman", "shannon"])
    @pytest.mark.parametrize("coding", ["hamming", "parity", "r3", "r5"])
    def test_lossless_without_noise(self, compression, coding):
        module = TransmissionModule(b"hello, world", compression=compression, coding=coding)
        assert module.lossless
        assert module.error is None
        assert module.error_description == "No error introduced"
        assert module.stats.detected == 0

    def test_parity_reports_uncorrectable_noise(self):
        module = TransmissionModule(b"hello, world", compression="rle", coding="parity",
                                    per_bit_error_rate=1.0)
        assert not module.lossless
        assert isinstance(module.error, UncorrectableTransmissionError)
        assert module.output_bytes is None

    def test_redundancy_rate(self):
        module = TransmissionModule(b"abcdefgh", compression="rle", coding=CodingScheme.R3)
        assert module.redundancy_rate == pytest.approx(3.0)

    def test_summary(self):
        summary = repr(TransmissionModule(b"rust", compression="rle", coding="parity"))
        assert "9h5XqeZ6QA==" in summary
        assert "Lossless: True" in summary

    def test_empty_message(self):
        module = TransmissionModule(b"", compression="huffman", coding="hamming")
        assert module.lossless
        assert module.entropyCalculator is None
        assert module.code_efficiencies == {}
        assert "Code efficiencies: n/a" in repr(module)

    def test_code_efficiencies(self):
        module = TransmissionModule(b"aaaabbcd", compression="huffman", coding="hamming")
        assert module.code_efficiencies == pytest.approx({"huffman": 1.0, "shannon": 1.0})
        assert "Code efficiencies: huffman 100.00%, shannon 100.00%" in repr(module)


class TestMaxErrorRateFinder:

    def test_noiseless_pipeline_passes(self):
        assert pipeline_for_error_rate(b"abc", 0.0, 0.95, number_of_tests=3)

    def test_parity_fails_at_full_noise(self):
        assert not pipeline_for_error_rate(b"abc", 1.0, 0.95, compression="rle", coding="parity",
                                           number_of_tests=3, seed=1)

    def test_search_stops_at_first_failure(self):
        rate = find_max_error_rate(b"abc", compression="rle", coding="parity", step=0.5,
                                   number_of_tests=3, seed=1)
        assert rate in (0.0, 0.5)
