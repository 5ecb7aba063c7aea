"""
Unit tests for the noise channel used by experiments.
"""

import pytest

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.NoiseChannel import NoiseChannel, NoiseLevel


class TestNoiseChannel:

    def test_no_noise(self):
        bits = BitSequence.from_str("1011001")
        transmitted, desc = NoiseChannel(0.0).transmit(bits)
        assert transmitted == bits
        assert desc == "No error introduced"

    def test_full_noise_flips_everything(self):
        good = BitSequence([1] * 42)
        bad, desc = NoiseLevel.NOISE_100.channel().transmit(good)
        assert bad == BitSequence([0] * 42)
        assert desc.startswith("42 bit errors")

    def test_seed_makes_noise_reproducible(self):
        bits = BitSequence.zeros(1000)
        first, _ = NoiseChannel(0.05, seed=3).transmit(bits)
        second, _ = NoiseChannel(0.05, seed=3).transmit(bits)
        assert first == second

    def test_error_rate_is_roughly_respected(self):
        bits = BitSequence.zeros(20000)
        transmitted, _ = NoiseLevel.NOISE_015.channel(seed=11).transmit(bits)
        assert 0.13 < transmitted.count_ones() / len(bits) < 0.17

    def test_description_lists_positions(self):
        transmitted, desc = NoiseChannel(1.0).transmit(BitSequence.from_str("0"))
        assert desc == "Single bit error at position 0"

    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            NoiseChannel(1.5)

    def test_level_labels(self):
        assert [level.label() for level in NoiseLevel] == ["0.01", "0.05", "0.15", "1.00"]
