"""
File: HammingCoder74.py
Description: Implements Hamming(7,4) error correction code for channel coding.
"""

from typing import Tuple
import numpy as np

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.CodingStats import Stats

# codeword layout is [p0, p1, b0, p2, b1, b2, b3]
DATA_POSITIONS = (2, 4, 5, 6)

# codeword length needed to carry the first 1, 2 or 3 data bits of a short final block
SHORT_BLOCK_LENGTHS = {1: 3, 2: 5, 3: 6}


class HammingCoder74:
    def __init__(self):
        # Matrix used to encode a set of four bits
        self.encoder_matrix = np.array([
            [1, 1, 1, 0, 0, 0, 0],
            [1, 0, 0, 1, 1, 0, 0],
            [0, 1, 0, 1, 0, 1, 0],
            [1, 1, 0, 1, 0, 0, 1]
        ], dtype=int)

        # Matrix used to generate the syndrome, read as a 1-based position of the wrong bit
        self.correction_matrix = np.array([
            [1, 0, 1, 0, 1, 0, 1],
            [0, 1, 1, 0, 0, 1, 1],
            [0, 0, 0, 1, 1, 1, 1]
        ], dtype=int)

        # Matrix used to decode the 7 bit coding back to the four bits
        self.decoder_matrix = np.array([
            [0, 0, 1, 0, 0, 0, 0],
            [0, 0, 0, 0, 1, 0, 0],
            [0, 0, 0, 0, 0, 1, 0],
            [0, 0, 0, 0, 0, 0, 1]
        ], dtype=int)

    def encode(self, data: BitSequence) -> BitSequence:
        bits = data.to_array()
        remainder = len(bits) % 4

        # Pad the array to be a multiple of 4 for the parity computation
        padded_len = (len(bits) + 3) // 4 * 4
        padded = np.pad(bits, (0, padded_len - len(bits)), constant_values=0).astype(int)

        # Encode every set of four bits at once using the encoding matrix
        codewords = np.matmul(padded.reshape(-1, 4), self.encoder_matrix) % 2
        encoded = codewords.reshape(-1)

        # the last codeword only keeps the positions up to its last real data bit
        if remainder:
            cut = len(encoded) - 7 + SHORT_BLOCK_LENGTHS[remainder]
            encoded = encoded[:cut]

        return BitSequence(encoded.astype(np.int8))

    def decode(self, received: BitSequence) -> Tuple[BitSequence, Stats]:
        bits = received.to_array().astype(int)
        full_len = len(bits) // 7 * 7

        # all full blocks at once: one syndrome per row, read as a 1-based position
        blocks = bits[:full_len].reshape(-1, 7).copy()
        syndromes = np.matmul(blocks, self.correction_matrix.T) % 2
        positions = syndromes[:, 0] * 1 + syndromes[:, 1] * 2 + syndromes[:, 2] * 4

        # if the resulting position is zero, there is no error
        rows = np.flatnonzero(positions)
        blocks[rows, positions[rows] - 1] ^= 1
        detected = len(rows)
        corrected = len(rows)

        decoded = np.matmul(blocks, self.decoder_matrix.T).reshape(-1)

        tail = bits[full_len:]
        if len(tail):
            tail_bits, tail_detected, tail_corrected = self._decode_short_block(tail)
            decoded = np.concatenate([decoded, tail_bits])
            detected += tail_detected
            corrected += tail_corrected

        return BitSequence(decoded.astype(np.int8)), Stats(detected, corrected)

    def _decode_short_block(self, chunk: np.ndarray) -> Tuple[np.ndarray, int, int]:
        block_len = len(chunk)

        # treated as a full block whose missing positions are zero
        chunk = np.pad(chunk, (0, 7 - block_len), constant_values=0)
        syndrome = np.matmul(self.correction_matrix, chunk) % 2
        position = syndrome[0] * 1 + syndrome[1] * 2 + syndrome[2] * 4

        detected = corrected = 0
        if position != 0:
            detected = 1
            # the missing positions are known zeros, so they cannot be the wrong bit
            if position <= block_len:
                chunk[position - 1] ^= 1
                corrected = 1

        data_count = sum(1 for pos in DATA_POSITIONS if pos < block_len)
        return np.matmul(self.decoder_matrix, chunk)[:data_count], detected, corrected

    def __repr__(self):
        return "HammingCoder74()"
