"""
File: ParityCoder.py
Description: Implements a single parity bit code over groups of four bits.
             It detects an odd number of flipped bits per group but cannot correct.
"""

from typing import Tuple
import numpy as np

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.CodingStats import Stats


class ParityCoder:
    def __init__(self, group_size: int = 4):
        self.group_size = group_size
        self.block_size = group_size + 1

    def encode(self, data: BitSequence) -> BitSequence:
        bits = data.to_array()
        full_len = len(bits) // self.group_size * self.group_size

        # full groups: append the xor of the group
        groups = bits[:full_len].reshape(-1, self.group_size)
        parity = groups.sum(axis=1, dtype=np.int64) % 2
        blocks = np.hstack([groups, parity.reshape(-1, 1).astype(np.int8)]).reshape(-1)

        # a shorter trailing group gets its own parity bit too
        tail = bits[full_len:]
        if len(tail):
            tail_parity = np.int8(int(tail.sum()) % 2)
            blocks = np.concatenate([blocks, tail, [tail_parity]])

        return BitSequence(blocks)

    def decode(self, received: BitSequence) -> Tuple[BitSequence, Stats]:
        bits = received.to_array()
        full_len = len(bits) // self.block_size * self.block_size

        blocks = bits[:full_len].reshape(-1, self.block_size)
        data = blocks[:, :self.group_size]
        mismatches = int(np.count_nonzero(blocks.sum(axis=1, dtype=np.int64) % 2))
        decoded = data.reshape(-1)

        tail = bits[full_len:]
        if len(tail):
            if int(tail.sum()) % 2:
                mismatches += 1
            decoded = np.concatenate([decoded, tail[:-1]])

        # parity only tells us something is wrong, never where
        return BitSequence(decoded), Stats(detected=mismatches, corrected=0)

    def __repr__(self):
        return f"ParityCoder(group_size={self.group_size})"
