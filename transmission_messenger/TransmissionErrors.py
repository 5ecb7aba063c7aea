"""
File: TransmissionErrors.py
Description: Exception hierarchy for coding, compression and payload handling.

All exceptions inherit from TransmissionError so callers can catch the whole
family at once.
"""


class TransmissionError(Exception):
    """Base exception for all transmission related errors."""
    pass


class UncorrectableTransmissionError(TransmissionError):
    """Raised when decoding flagged more errors than it could correct."""

    def __init__(self, stats):
        super().__init__(
            f"Uncorrectable transmission: {stats.detected} errors detected, "
            f"{stats.corrected} corrected"
        )
        self.stats = stats


class CompressionError(TransmissionError):
    """Base class for malformed compressed streams."""
    pass


class RleZeroRepetitionError(CompressionError):
    """Raised when a run-length record has a zero count."""
    pass


class RleExpectedMoreDataError(CompressionError):
    """Raised when a run-length stream ends inside a record."""
    pass


class UnexpectedMoreDataError(CompressionError):
    """Raised when a prefix-code bit stream ends in the middle of a codeword."""
    pass


class UnknownSymbolError(CompressionError):
    """Raised when a symbol has no codeword in the code table."""

    def __init__(self, symbol):
        super().__init__(f"Symbol {symbol!r} is not in the code table")
        self.symbol = symbol


class InvalidProbabilitiesError(TransmissionError, ValueError):
    """Raised when a probability table is out of [0, 1] or does not sum up to 1."""
    pass


class PayloadFormatError(TransmissionError, ValueError):
    """Raised when a wire-level payload record cannot be parsed."""
    pass
