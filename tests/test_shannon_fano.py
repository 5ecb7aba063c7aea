"""
Unit tests for Shannon-Fano coding.
"""

import pytest

from transmission_messenger.ShannonFanoCoder import ShannonFanoCoder, build_shannon_fano_table
from transmission_messenger.TransmissionErrors import InvalidProbabilitiesError, UnexpectedMoreDataError

DISTRIBUTION = {1: 0.36, 2: 0.18, 3: 0.18, 4: 0.12, 5: 0.09, 6: 0.07}


class TestShannonFanoCoder:

    def test_code_lengths(self):
        coder = ShannonFanoCoder.with_probabilities(DISTRIBUTION)
        assert sorted(coder.table.lengths().values()) == [2, 2, 2, 3, 4, 4]

    def test_codes(self):
        # first split: {6, 5, 4, 2} -> 1, {3, 1} -> 0
        table = build_shannon_fano_table(DISTRIBUTION)
        assert dict(table.codes) == {
            6: "1111", 5: "1110", 4: "110", 2: "10", 3: "01", 1: "00",
        }

    def test_compress_message(self):
        coder = ShannonFanoCoder.with_probabilities(DISTRIBUTION)
        message = [1, 5, 2, 4, 3, 2, 5, 1]
        assert coder.decompress(coder.compress(message)) == message

    def test_roundtrip_text(self):
        text = b"hello, world!"
        coder = ShannonFanoCoder.optimal_for(text)
        assert bytes(coder.decompress(coder.compress(text))) == text

    def test_single_symbol(self):
        coder = ShannonFanoCoder.optimal_for(b"zzz")
        assert dict(coder.table.codes) == {ord("z"): "0"}
        assert bytes(coder.decompress(coder.compress(b"zzz"))) == b"zzz"

    def test_dominant_symbol_still_splits(self):
        coder = ShannonFanoCoder.with_probabilities({"a": 1.0, "b": 0.0})
        assert sorted(coder.table.lengths().values()) == [1, 1]

    def test_invalid_probabilities(self):
        with pytest.raises(InvalidProbabilitiesError):
            ShannonFanoCoder.with_probabilities({"a": 0.7, "b": 0.7})

    def test_truncated_stream(self):
        coder = ShannonFanoCoder.with_probabilities(DISTRIBUTION)
        bits = coder.compress([6])
        with pytest.raises(UnexpectedMoreDataError):
            coder.decompress(bits.truncate(2))
