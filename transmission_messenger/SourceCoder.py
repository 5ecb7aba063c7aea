"""
File: SourceCoder.py
Description: Selects one of the compressors by scheme and runs it on a byte message.
"""

from dataclasses import dataclass
from typing import Union
import logging

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.HuffmanCoder import CodeTable, build_huffman_table, frequencies_of
from transmission_messenger.RunLengthCoder import RunLengthCoder
from transmission_messenger.ShannonFanoCoder import build_shannon_fano_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rle:
    name = "rle"


@dataclass(frozen=True)
class Huffman:
    table: CodeTable
    name = "huffman"

    @classmethod
    def optimal_for(cls, data: bytes) -> "Huffman":
        return cls(build_huffman_table(frequencies_of(bytes(data))))


@dataclass(frozen=True)
class ShannonFano:
    table: CodeTable
    name = "shannon"

    @classmethod
    def optimal_for(cls, data: bytes) -> "ShannonFano":
        return cls(build_shannon_fano_table(frequencies_of(bytes(data))))


CompressionScheme = Union[Rle, Huffman, ShannonFano]

COMPRESSION_NAMES = ("rle", "huffman", "shannon")

_rle = RunLengthCoder()


def scheme_for(name: str, data: bytes = b"") -> CompressionScheme:
    """Turn a wire name into a scheme. Table based schemes get a table fitted to `data`."""
    name = str(name).lower()
    if name == "rle":
        return Rle()
    elif name == "huffman":
        return Huffman.optimal_for(data)
    elif name == "shannon":
        return ShannonFano.optimal_for(data)
    raise ValueError(f"Unknown compression scheme: {name!r}")


def compress(scheme: CompressionScheme, data: bytes) -> BitSequence:
    if isinstance(scheme, Rle):
        compressed = _rle.compress(data)
    elif isinstance(scheme, (Huffman, ShannonFano)):
        compressed = scheme.table.compress(bytes(data))
    else:
        raise TypeError(f"Unknown compression scheme: {scheme!r}")

    logger.debug("%s compressed %d bytes into %d bits", scheme.name, len(data), len(compressed))
    return compressed


def decompress(scheme: CompressionScheme, bits: BitSequence) -> bytes:
    if isinstance(scheme, Rle):
        return _rle.decompress(bits)
    elif isinstance(scheme, (Huffman, ShannonFano)):
        return bytes(scheme.table.decompress(bits))
    raise TypeError(f"Unknown compression scheme: {scheme!r}")
