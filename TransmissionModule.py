"""
File: TransmissionModule.py
Description: Main transmission module. Sends one message through the payload
             pipeline and an optional noisy channel, and reports every stage.
"""

from typing import Optional
import logging
import os

from transmission_messenger import ChannelCoder
from transmission_messenger.ChannelCoder import CodingScheme
from transmission_messenger.EntropyCalculator import EntropyCalculator
from transmission_messenger.NoiseChannel import NoiseChannel
from transmission_messenger.Payload import DEFAULT_CODING, DEFAULT_COMPRESSION, Payload
from transmission_messenger.TransmissionErrors import TransmissionError


class TransmissionModule:
    def __init__(self, input_bytes: bytes, compression: str = DEFAULT_COMPRESSION,
                 coding=DEFAULT_CODING, per_bit_error_rate: float = 0.00, seed: Optional[int] = None):

        self.input_bytes: bytes = bytes(input_bytes)
        self.entropyCalculator = EntropyCalculator(self.input_bytes) if self.input_bytes else None
        self.code_efficiencies = self.entropyCalculator.table_efficiencies() if self.entropyCalculator else {}

        self.coding = CodingScheme.from_name(coding)
        self.per_bit_error_rate = per_bit_error_rate

        # Source and channel encode the message
        self.payload = Payload.from_bytes(self.input_bytes, compression, self.coding)

        # Simulate transmission through a noisy channel (bit-level errors)
        self.channel = NoiseChannel(self.per_bit_error_rate, seed=seed)
        self.transmitted, self.error_description = self.channel.transmit(self.payload.bits())
        self.received = Payload(self.payload.coding, self.payload.compression,
                                self.payload.bit_length, self.transmitted.to_bytes())

        # What the line code saw, independent of whether the payload survives
        self.channel_decoded, self.stats = ChannelCoder.decode(self.coding, self.transmitted)

        # Channel and source decode
        self.error: Optional[TransmissionError] = None
        try:
            self.output_bytes: Optional[bytes] = self.received.into_bytes()
        except TransmissionError as e:
            self.output_bytes = None
            self.error = e

        self.lossless = self.input_bytes == self.output_bytes

    @property
    def redundancy_rate(self) -> float:
        if not len(self.channel_decoded):
            return 0.0
        return ChannelCoder.redundancy_rate(self.coding, len(self.channel_decoded))

    def _format_efficiencies(self) -> str:
        return ", ".join(f"{name} {value:.2%}" for name, value in self.code_efficiencies.items()) or "n/a"

    def __repr__(self):
        output = self.output_bytes if self.error is None else f"Decoding failed: {self.error}"
        return (f"TransmissionModule:\n"
                f"*****SUMMARY*******************************************************************\n\n"
                f"**  Input: {self.input_bytes!r}\n\n"
                f"**  Entropy Calculations: {self.entropyCalculator}\n\n"
                f"**  Code efficiencies: {self._format_efficiencies()}\n\n"
                f"**  Schemes: {self.payload.compression} / {self.coding.value}\n\n"
                f"**  Payload: {self.payload.to_json()}\n\n"
                f"**  Redundancy rate: {self.redundancy_rate:.3f}\n\n"
                f"**  Per bit error rate: {self.per_bit_error_rate}\n\n"
                f"**  Transmitted: \n'{self.transmitted}'\n\n"
                f"**  Error Description: '{self.error_description}'\n\n"
                f"**  Detected / Corrected: {self.stats.detected} / {self.stats.corrected}\n\n"
                f"**  Output: {output!r}\n\n"
                f"**  Lossless: {self.lossless}\n\n"
                f"******************************************************************************\n")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    file_path = os.path.join(os.path.dirname(__file__), "tests", "data", "input_text_short.txt")
    if os.path.exists(file_path):
        with open(file_path, "rb") as file_handle:
            text = file_handle.read()
    else:
        text = b"hello, world"

    myTransmissionModule = TransmissionModule(input_bytes=text, compression="huffman",
                                              coding="hamming", per_bit_error_rate=0.001)
    print(myTransmissionModule)
