"""
File: RepetitionCoder.py
Description: Implements the repetition codes R3 and R5 for channel coding.
"""

from typing import Tuple
import numpy as np

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.CodingStats import Stats


class RepetitionCoder:
    def __init__(self, n: int):
        if n < 1 or n % 2 == 0:
            raise ValueError(f"Repetition factor must be a positive odd number, got {n}")
        self.n = n
        # number of ones needed to decide for a one
        self.majority = (n + 1) // 2

    # Every bit is sent n times in a row
    def encode(self, data: BitSequence) -> BitSequence:
        return BitSequence(np.repeat(data.to_array(), self.n))

    # Majority vote over each block of n bits. Bits that do not fill a whole block are dropped.
    def decode(self, received: BitSequence) -> Tuple[BitSequence, Stats]:
        blocks_count = len(received) // self.n
        blocks = received.to_array()[:blocks_count * self.n].reshape(blocks_count, self.n)

        ones = blocks.sum(axis=1)
        decoded = (ones >= self.majority).astype(np.int8)

        # a block that is not unanimous was hit by noise, the vote always settles it.
        # if every bit of a block flipped we cannot see it at all.
        damaged = int(np.count_nonzero((ones != 0) & (ones != self.n)))

        return BitSequence(decoded), Stats(detected=damaged, corrected=damaged)

    def __repr__(self):
        return f"RepetitionCoder(n={self.n})"


Repetition3 = RepetitionCoder(3)
Repetition5 = RepetitionCoder(5)
