"""
File: ChannelCoder.py
Description: Selects one of the line codes by scheme and runs it.
"""

from enum import Enum
from typing import Tuple
import logging

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.CodingStats import Stats
from transmission_messenger.HammingCoder74 import HammingCoder74
from transmission_messenger.ParityCoder import ParityCoder
from transmission_messenger.RepetitionCoder import Repetition3, Repetition5

logger = logging.getLogger(__name__)


class CodingScheme(Enum):
    """Line codes available for a payload. Values are the wire names."""
    HAMMING = "hamming"
    PARITY = "parity"
    R3 = "r3"
    R5 = "r5"

    @classmethod
    def from_name(cls, name) -> "CodingScheme":
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).lower())
        except ValueError:
            raise ValueError(f"Unknown coding scheme: {name!r}") from None


_hamming = HammingCoder74()
_parity = ParityCoder()


def _coder_for(coding: CodingScheme):
    if coding is CodingScheme.HAMMING:
        return _hamming
    elif coding is CodingScheme.PARITY:
        return _parity
    elif coding is CodingScheme.R3:
        return Repetition3
    elif coding is CodingScheme.R5:
        return Repetition5
    raise ValueError(f"Unknown coding scheme: {coding!r}")


def encode(coding: CodingScheme, bits: BitSequence) -> BitSequence:
    """Add the redundancy of the given line code. Never fails on a well-formed sequence."""
    coding = CodingScheme.from_name(coding)
    encoded = _coder_for(coding).encode(bits)
    logger.debug("%s encoded %d bits into %d bits", coding.value, len(bits), len(encoded))
    return encoded


def decode(coding: CodingScheme, bits: BitSequence) -> Tuple[BitSequence, Stats]:
    """Strip the redundancy again and report what the code noticed on the way."""
    coding = CodingScheme.from_name(coding)
    decoded, stats = _coder_for(coding).decode(bits)
    logger.debug("%s decoded %d bits into %d bits (detected=%d, corrected=%d)",
                 coding.value, len(bits), len(decoded), stats.detected, stats.corrected)
    return decoded, stats


def redundancy_rate(coding: CodingScheme, length: int) -> float:
    """Encoded length divided by original length for a message of `length` bits."""
    if length <= 0:
        raise ValueError(f"length must be > 0, got {length}")
    coding = CodingScheme.from_name(coding)
    return len(encode(coding, BitSequence.zeros(length))) / length
