"""
File: Payload.py
Description: The container that carries a message across the channel.

Sending compresses the message and then adds the redundancy of a line code.
Receiving strips the line code, refuses data with errors it could not fix,
and decompresses the rest.

Wire format (see to_dict):
    {"coding": "hamming" | "parity" | "r3" | "r5",
     "compression": "rle" | "huffman" | "shannon",
     "length": number of valid bits in "bytes",
     "bytes": base64 of the bits, packed MSB first}

Huffman and Shannon-Fano payloads start with the codebook header of their
code table, so the receiver needs nothing but the payload.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Union
import base64
import binascii
import json
import logging

from transmission_messenger import ChannelCoder, SourceCoder
from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.ChannelCoder import CodingScheme
from transmission_messenger.HuffmanCoder import CodeTable
from transmission_messenger.TransmissionErrors import PayloadFormatError, UncorrectableTransmissionError

logger = logging.getLogger(__name__)

DEFAULT_CODING = CodingScheme.HAMMING
DEFAULT_COMPRESSION = "rle"


@dataclass(frozen=True)
class Payload:
    coding: CodingScheme
    compression: str
    bit_length: int
    data: bytes

    def __post_init__(self):
        try:
            coding = CodingScheme.from_name(self.coding)
        except ValueError as e:
            raise PayloadFormatError(str(e)) from e
        object.__setattr__(self, "coding", coding)

        compression = str(self.compression).lower()
        if compression not in SourceCoder.COMPRESSION_NAMES:
            raise PayloadFormatError(f"Unknown compression scheme: {self.compression!r}")
        object.__setattr__(self, "compression", compression)

    @classmethod
    def from_bytes(cls, message: bytes,
                   compression: Union[str, SourceCoder.CompressionScheme] = DEFAULT_COMPRESSION,
                   coding: Union[str, CodingScheme] = DEFAULT_CODING) -> "Payload":
        coding = CodingScheme.from_name(coding)
        if isinstance(compression, str):
            compression = SourceCoder.scheme_for(compression, message)

        # Source encode the message, table based schemes ship their table in front
        compressed = SourceCoder.compress(compression, message)
        if isinstance(compression, (SourceCoder.Huffman, SourceCoder.ShannonFano)):
            compressed = compression.table.to_header() + compressed

        # Channel encode the source coded bits
        encoded = ChannelCoder.encode(coding, compressed)

        logger.debug("Payload of %d bytes: %d compressed bits, %d encoded bits (%s/%s)",
                     len(message), len(compressed), len(encoded), compression.name, coding.value)
        return cls(coding=coding, compression=compression.name,
                   bit_length=len(encoded), data=encoded.to_bytes())

    def bits(self) -> BitSequence:
        """The encoded bits without the padding of the last byte."""
        bits = BitSequence.from_bytes(self.data)
        if self.bit_length > len(bits):
            raise PayloadFormatError(
                f"Payload claims {self.bit_length} bits but carries only {len(bits)}"
            )
        return bits.truncate(self.bit_length)

    def into_bytes(self) -> bytes:
        # Channel decode, refuse data that still contains known errors
        decoded, stats = ChannelCoder.decode(self.coding, self.bits())
        if not stats.recoverable:
            logger.warning("Dropping %s payload: %d errors detected, %d corrected",
                           self.coding.value, stats.detected, stats.corrected)
            raise UncorrectableTransmissionError(stats)

        if stats.detected:
            logger.info("Corrected %d errors in %s payload", stats.corrected, self.coding.value)

        # Source decode
        if self.compression == "rle":
            return SourceCoder.decompress(SourceCoder.Rle(), decoded)

        table, offset = CodeTable.from_header(decoded)
        return bytes(table.decompress(decoded[offset:]))

    def with_noise(self, channel) -> "Payload":
        """Copy of this payload after its bits went through a noise channel."""
        noisy, desc = channel.transmit(self.bits())
        logger.debug("Noise channel: %s", desc)
        return replace(self, data=noisy.to_bytes())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coding": self.coding.value,
            "compression": self.compression,
            "length": self.bit_length,
            "bytes": base64.b64encode(self.data).decode("ascii"),
        }

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "Payload":
        try:
            coding = CodingScheme.from_name(record["coding"])
            compression = str(record["compression"]).lower()
            bit_length = record["length"]
            data = base64.b64decode(record["bytes"], validate=True)
        except KeyError as e:
            raise PayloadFormatError(f"Missing payload field: {e}") from e
        except (ValueError, TypeError, binascii.Error) as e:
            raise PayloadFormatError(f"Invalid payload record: {e}") from e

        if compression not in SourceCoder.COMPRESSION_NAMES:
            raise PayloadFormatError(f"Unknown compression scheme: {compression!r}")
        if isinstance(bit_length, bool) or not isinstance(bit_length, int) or bit_length < 0:
            raise PayloadFormatError(f"Invalid payload length: {bit_length!r}")
        if bit_length > len(data) * 8:
            raise PayloadFormatError(f"Payload length {bit_length} exceeds {len(data) * 8} carried bits")

        return cls(coding=coding, compression=compression, bit_length=bit_length, data=data)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "Payload":
        try:
            record = json.loads(text)
        except json.JSONDecodeError as e:
            raise PayloadFormatError(f"Payload is not valid JSON: {e}") from e
        if not isinstance(record, dict):
            raise PayloadFormatError("Payload JSON must be an object")
        return cls.from_dict(record)
