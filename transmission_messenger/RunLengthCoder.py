"""
File: RunLengthCoder.py
Description: Implements run-length encoding (RLE) for source compression.

The byte stream is written as records (count, payload) where count is a signed byte:

* count > 0: the following single byte repeats count times.
* count < 0: the following -count bytes are copied as they are.
* count == 0 is never written and rejected when reading.

The encoder is a small state machine folded over the input one byte at a time.
A literal run is only turned into a repeat run once its last byte showed up
three times in a row, so a single double in the middle of random data does not
split the literal run.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.TransmissionErrors import RleExpectedMoreDataError, RleZeroRepetitionError

MAX_REPEAT = 127    # i8::MAX
MAX_LITERAL = 128   # -i8::MIN


@dataclass(frozen=True)
class Initial:
    pass


@dataclass(frozen=True)
class FirstNew:
    new: int


@dataclass(frozen=True)
class ManySame:
    last: int
    count: int          # always >= 2


@dataclass(frozen=True)
class ManyDifferent:
    buffer: Tuple[int, ...]     # always at least 2 bytes
    count: int                  # 1 if the last byte of buffer is a double, else 0


State = Union[Initial, FirstNew, ManySame, ManyDifferent]


def _repeat_record(count: int, byte: int) -> Tuple[int, ...]:
    return (count, byte)


def _literal_record(buffer: Tuple[int, ...]) -> Tuple[int, ...]:
    return ((-len(buffer)) & 0xFF,) + tuple(buffer)


def step(state: State, byte: int) -> Tuple[State, Tuple[int, ...]]:
    """One transition of the encoder: the next state and the bytes it emits."""
    if isinstance(state, Initial):
        return FirstNew(byte), ()

    if isinstance(state, FirstNew):
        if state.new == byte:
            return ManySame(byte, 2), ()
        return ManyDifferent((state.new, byte), 0), ()

    if isinstance(state, ManySame):
        if state.last == byte:
            if state.count == MAX_REPEAT:
                return FirstNew(byte), _repeat_record(state.count, state.last)
            return ManySame(state.last, state.count + 1), ()
        # a double alone is cheaper inside a literal run
        if state.count == 2:
            return ManyDifferent((state.last, state.last, byte), 0), ()
        return FirstNew(byte), _repeat_record(state.count, state.last)

    if isinstance(state, ManyDifferent):
        buffer = state.buffer
        if len(buffer) == MAX_LITERAL:
            return FirstNew(byte), _literal_record(buffer)

        last = buffer[-1]
        if last != byte:
            return ManyDifferent(buffer + (byte,), 0), ()
        if state.count == 0:
            return ManyDifferent(buffer + (byte,), 1), ()
        # third time in a row: the tail double plus this byte become a repeat run
        return ManySame(last, 3), _literal_record(buffer[:-2])

    raise TypeError(f"Unknown encoder state: {state!r}")


def finish(state: State) -> Tuple[int, ...]:
    """Bytes that flush whatever the encoder still holds at the end of input."""
    if isinstance(state, FirstNew):
        return _repeat_record(1, state.new)
    if isinstance(state, ManySame):
        return _repeat_record(state.count, state.last)
    if isinstance(state, ManyDifferent):
        return _literal_record(state.buffer)
    return ()


class RunLengthCoder:
    def compress(self, data: bytes) -> BitSequence:
        state: State = Initial()
        out: List[int] = []

        for byte in bytes(data):
            state, emitted = step(state, byte)
            out.extend(emitted)
        out.extend(finish(state))

        return BitSequence.from_bytes(bytes(out))

    def decompress(self, bits: BitSequence) -> bytes:
        data = bits.to_bytes()
        out = bytearray()
        pos = 0

        while pos < len(data):
            # control byte as a signed 8 bit integer
            count = data[pos] - 256 if data[pos] > 127 else data[pos]
            pos += 1

            if count == 0:
                raise RleZeroRepetitionError(f"Zero repetition count at byte {pos - 1}")

            if count > 0:
                if pos >= len(data):
                    raise RleExpectedMoreDataError("Repeat record is missing its byte")
                out.extend(data[pos:pos + 1] * count)
                pos += 1
            else:
                end = pos - count
                if end > len(data):
                    raise RleExpectedMoreDataError(
                        f"Literal record needs {-count} bytes, only {len(data) - pos} left"
                    )
                out.extend(data[pos:end])
                pos = end

        return bytes(out)

    def __repr__(self):
        return "RunLengthCoder()"
