"""
File: BitSequence.py
Description: Immutable, explicitly sized sequence of bits used by every coder.
"""

from typing import Iterable, Union
import numpy as np


class BitSequence:
    """
    Ordered bits with an explicit length, independent of byte alignment.

    The bits are stored as a read-only numpy array of 0/1 values (int8), the
    same representation the coders work on internally. Every operation that
    "changes" the sequence returns a new one.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits: Union[Iterable, np.ndarray] = ()):
        if not isinstance(bits, np.ndarray):
            bits = list(bits)
        array = np.array(bits, dtype=np.int8).reshape(-1)
        if array.size and not np.all((array == 0) | (array == 1)):
            raise ValueError("BitSequence accepts only 0/1 or boolean values")
        array.setflags(write=False)
        self._bits = array

    @classmethod
    def zeros(cls, length: int) -> "BitSequence":
        return cls(np.zeros(length, dtype=np.int8))

    @classmethod
    def from_str(cls, text: str) -> "BitSequence":
        """Build from a string such as '0110'. Whitespace is ignored."""
        cleaned = "".join(text.split())
        if any(ch not in "01" for ch in cleaned):
            raise ValueError(f"Not a bit string: {text!r}")
        return cls([int(ch) for ch in cleaned])

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitSequence":
        # MSB first, 8 bits per byte
        unpacked = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))
        return cls(unpacked)

    def to_bytes(self) -> bytes:
        # np.packbits pads the last byte with zero bits
        return np.packbits(self._bits.astype(np.uint8)).tobytes()

    def to_array(self) -> np.ndarray:
        return self._bits

    def __len__(self) -> int:
        return int(self._bits.size)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return BitSequence(self._bits[index])
        return bool(self._bits[index])

    def __iter__(self):
        return (bool(bit) for bit in self._bits)

    def with_bit(self, index: int, value: bool) -> "BitSequence":
        bits = self._bits.copy()
        bits[index] = 1 if value else 0
        return BitSequence(bits)

    def flip(self, *indices: int) -> "BitSequence":
        bits = self._bits.copy()
        for index in indices:
            bits[index] ^= 1
        return BitSequence(bits)

    def truncate(self, length: int) -> "BitSequence":
        if length >= len(self):
            return self
        return BitSequence(self._bits[:length])

    def append(self, other: Union["BitSequence", Iterable]) -> "BitSequence":
        other_bits = other._bits if isinstance(other, BitSequence) else np.array(list(other), dtype=np.int8)
        return BitSequence(np.concatenate([self._bits, other_bits]))

    def __add__(self, other: "BitSequence") -> "BitSequence":
        if not isinstance(other, BitSequence):
            return NotImplemented
        return self.append(other)

    def count_ones(self) -> int:
        return int(self._bits.sum())

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitSequence):
            return NotImplemented
        return np.array_equal(self._bits, other._bits)

    def __hash__(self) -> int:
        return hash((len(self), self.to_bytes()))

    def __str__(self) -> str:
        return "".join(map(str, self._bits.tolist()))

    def __repr__(self) -> str:
        if len(self) > 64:
            return f"BitSequence('{str(self[:64])}...', len={len(self)})"
        return f"BitSequence('{self}')"
