"""
File: ShannonFanoCoder.py
Description: Implements Shannon-Fano coding for source compression. The code
             table it builds is used exactly like a Huffman table.
"""

from typing import Dict, Hashable, Iterable, List, Mapping, Sequence, Tuple

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.HuffmanCoder import (
    CodeTable,
    Probability,
    check_probabilities,
    frequencies_of,
)


class ShannonFanoCoder:
    def __init__(self, table: CodeTable):
        self.table = table

    @classmethod
    def with_probabilities(cls, probabilities: Mapping[Hashable, Probability]) -> "ShannonFanoCoder":
        check_probabilities(probabilities)
        return cls(build_shannon_fano_table(probabilities))

    @classmethod
    def optimal_for(cls, sample: Iterable[Hashable]) -> "ShannonFanoCoder":
        probabilities = frequencies_of(sample)
        if not probabilities:
            return cls(CodeTable({}))
        return cls.with_probabilities(probabilities)

    def compress(self, symbols: Iterable[Hashable]) -> BitSequence:
        return self.table.compress(symbols)

    def decompress(self, bits: BitSequence) -> List[Hashable]:
        return self.table.decompress(bits)

    def __repr__(self):
        return f"ShannonFanoCoder({self.table!r})"


def build_shannon_fano_table(probabilities: Mapping[Hashable, Probability]) -> CodeTable:
    if not probabilities:
        return CodeTable({})

    # ascending by probability, equal probabilities by symbol
    pairs = sorted(probabilities.items(), key=lambda item: (item[1], item[0]))

    if len(pairs) == 1:
        return CodeTable({pairs[0][0]: "0"})

    codes = {symbol: "" for symbol, _ in pairs}
    _split(codes, pairs)
    return CodeTable(codes)


def _separator(pairs: Sequence[Tuple[Hashable, Probability]]) -> int:
    """Index that cuts the slice where the running sum is nearest to half of its total."""
    total = sum(p for _, p in pairs)
    median = total / 2
    running = 0.0
    separator = 0

    for i, (_, p) in enumerate(pairs):
        if running + p > median:
            if abs(running - median) > abs(running + p - median):
                separator = i + 1
            break
        running += p
        separator = i + 1

    # both halves need at least one symbol
    return min(max(separator, 1), len(pairs) - 1)


def _split(codes: Dict[Hashable, str], pairs: Sequence[Tuple[Hashable, Probability]]) -> None:
    if len(pairs) < 2:
        return

    separator = _separator(pairs)
    lower, upper = pairs[:separator], pairs[separator:]

    for symbol, _ in lower:
        codes[symbol] += "1"
    for symbol, _ in upper:
        codes[symbol] += "0"

    _split(codes, lower)
    _split(codes, upper)
