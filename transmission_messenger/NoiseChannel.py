"""
File: NoiseChannel.py
Description: Simulates a noisy channel by flipping bits independently with a given probability.
             Only used by tests and experiments, the payload pipeline never adds noise itself.
"""

from enum import Enum
from typing import Optional, Tuple
import numpy as np

from transmission_messenger.BitSequence import BitSequence


class NoiseChannel:
    def __init__(self, per_bit_error_rate: float, seed: Optional[int] = None):
        if not 0.0 <= per_bit_error_rate <= 1.0:
            raise ValueError(f"per_bit_error_rate must be in [0, 1], got {per_bit_error_rate}")
        self.per_bit_error_rate = per_bit_error_rate
        self.rng = np.random.default_rng(seed)

    # flips every bit with probability per_bit_error_rate
    def transmit(self, code: BitSequence) -> Tuple[BitSequence, str]:
        bits = code.to_array()
        flips = self.rng.random(len(bits)) < self.per_bit_error_rate
        error_positions = np.flatnonzero(flips).tolist()

        transmitted = BitSequence(np.where(flips, 1 - bits, bits))

        if not error_positions:
            desc = "No error introduced"
        elif len(error_positions) == 1:
            desc = f"Single bit error at position {error_positions[0]}"
        else:
            desc = f"{len(error_positions)} bit errors at positions {', '.join(map(str, error_positions))}"

        return transmitted, desc

    def __repr__(self):
        return f"NoiseChannel(per_bit_error_rate={self.per_bit_error_rate})"


class NoiseLevel(Enum):
    """Noise presets offered by the messenger."""
    NOISE_001 = 0.01
    NOISE_005 = 0.05
    NOISE_015 = 0.15
    # flips all bits
    NOISE_100 = 1.00

    def channel(self, seed: Optional[int] = None) -> NoiseChannel:
        return NoiseChannel(self.value, seed=seed)

    def label(self) -> str:
        return f"{self.value:.2f}"
