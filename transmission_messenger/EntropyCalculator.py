"""
File: EntropyCalculator.py
Description: Measures how close a prefix code table gets to the entropy of a byte message.
"""

from collections import Counter
from typing import Dict
import numpy as np

from transmission_messenger.HuffmanCoder import CodeTable, build_huffman_table
from transmission_messenger.ShannonFanoCoder import build_shannon_fano_table


class EntropyCalculator:
    def __init__(self, data: bytes):
        if not data:
            raise ValueError("Input message cannot be empty")

        counts = Counter(bytes(data))
        self.length = len(data)
        self.symbols = np.array(sorted(counts), dtype=int)
        self.probabilities = np.array([counts[s] for s in self.symbols], dtype=float) / self.length

        # entropy and its upper limit for this alphabet size, in bits per byte
        self.entropy = float(np.dot(self.probabilities, np.log2(1.0 / self.probabilities)))
        self.max_entropy = float(np.log2(len(self.symbols)))

    @property
    def absolute_redundancy(self) -> float:
        return self.max_entropy - self.entropy

    @property
    def relative_redundancy(self) -> float:
        if self.max_entropy == 0:
            return 0.0
        return 1.0 - self.entropy / self.max_entropy

    # fewest bits any prefix code can spend on `length` bytes with these statistics
    def compression_bound(self, length: int) -> float:
        return self.entropy * length

    def expected_length(self, table: CodeTable) -> float:
        """Average codeword length of the table over this message's symbol distribution."""
        lengths = table.lengths()
        missing = [int(s) for s in self.symbols if int(s) not in lengths]
        if missing:
            raise ValueError(f"Code table has no codeword for symbols {missing}")
        code_lengths = np.array([lengths[int(s)] for s in self.symbols], dtype=float)
        return float(np.dot(self.probabilities, code_lengths))

    def efficiency(self, table: CodeTable) -> float:
        """Entropy divided by the expected codeword length, 1.0 for a perfect code."""
        # a single symbol carries no information, so its one-bit code scores 0
        return self.entropy / self.expected_length(table)

    def table_efficiencies(self) -> Dict[str, float]:
        """Efficiency of the Huffman and Shannon-Fano tables fitted to this message."""
        distribution = {int(s): float(p) for s, p in zip(self.symbols, self.probabilities)}
        return {
            "huffman": self.efficiency(build_huffman_table(distribution)),
            "shannon": self.efficiency(build_shannon_fano_table(distribution)),
        }

    def __repr__(self):
        return (f"EntropyCalculator(H={self.entropy:.4f} bits/byte, "
                f"H0={self.max_entropy:.4f} bits/byte, "
                f"r={self.relative_redundancy:.2%})")
