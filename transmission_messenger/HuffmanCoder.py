"""
File: HuffmanCoder.py
Description: Implements Huffman coding for source compression, and the prefix
             code table that Huffman and Shannon-Fano coding share.
"""

import heapq
from collections import Counter
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, List, Mapping, Tuple, Union

from transmission_messenger.BitSequence import BitSequence
from transmission_messenger.TransmissionErrors import (
    CompressionError,
    InvalidProbabilitiesError,
    UnexpectedMoreDataError,
    UnknownSymbolError,
)

Probability = float

PROBABILITY_TOLERANCE = 1e-10

# codebook header field widths, see CodeTable.to_header
HEADER_COUNT_BITS = 9
HEADER_SYMBOL_BITS = 8
HEADER_LENGTH_BITS = 8

_MISSING = object()


def check_probabilities(probabilities: Mapping[Hashable, Probability]) -> None:
    """Raise InvalidProbabilitiesError unless every p is in [0, 1] and they sum up to 1."""
    total = 0.0
    for symbol, p in probabilities.items():
        if not 0.0 <= p <= 1.0:
            raise InvalidProbabilitiesError(f"Probability of {symbol!r} is out of range [0, 1]: {p}")
        total += p
    if abs(total - 1.0) >= PROBABILITY_TOLERANCE:
        raise InvalidProbabilitiesError(f"Probabilities sum up to {total}, expected 1")


def frequencies_of(sample: Iterable[Hashable]) -> Dict[Hashable, Probability]:
    counts = Counter(sample)
    total = sum(counts.values())
    return {symbol: count / total for symbol, count in counts.items()}


def _bits_to_int(bits: str) -> int:
    return int(bits, 2) if bits else 0


class CodeTable:
    """
    Bidirectional mapping between symbols and their prefix-free codewords.

    The table is checked once when it is built and cannot be changed afterwards.
    """

    def __init__(self, codes: Mapping[Hashable, Union[BitSequence, str]]):
        forward = {}
        for symbol, code in codes.items():
            code = str(code) if isinstance(code, BitSequence) else "".join(code.split())
            if not code or any(ch not in "01" for ch in code):
                raise ValueError(f"Invalid codeword {code!r} for symbol {symbol!r}")
            forward[symbol] = code

        # after sorting, a codeword that is a prefix of another sits right before one it prefixes
        ordered = sorted(forward.values())
        for shorter, longer in zip(ordered, ordered[1:]):
            if longer.startswith(shorter):
                raise ValueError(f"Code table is not prefix-free: {shorter!r} prefixes {longer!r}")

        self._codes = MappingProxyType(forward)
        self._symbols = MappingProxyType({code: symbol for symbol, code in forward.items()})

    @property
    def codes(self) -> Mapping[Hashable, str]:
        return self._codes

    def codeword(self, symbol: Hashable) -> BitSequence:
        try:
            return BitSequence.from_str(self._codes[symbol])
        except KeyError:
            raise UnknownSymbolError(symbol) from None

    def lengths(self) -> Dict[Hashable, int]:
        return {symbol: len(code) for symbol, code in self._codes.items()}

    def __len__(self) -> int:
        return len(self._codes)

    def __contains__(self, symbol) -> bool:
        return symbol in self._codes

    def __eq__(self, other) -> bool:
        if not isinstance(other, CodeTable):
            return NotImplemented
        return dict(self._codes) == dict(other._codes)

    def __hash__(self) -> int:
        return hash(frozenset(self._codes.items()))

    def __repr__(self) -> str:
        return f"CodeTable({dict(self._codes)!r})"

    # Concatenates the codeword of every symbol
    def compress(self, symbols: Iterable[Hashable]) -> BitSequence:
        parts = []
        for symbol in symbols:
            code = self._codes.get(symbol)
            if code is None:
                raise UnknownSymbolError(symbol)
            parts.append(code)
        return BitSequence.from_str("".join(parts))

    # Reads bits until they form a known codeword, then starts over
    def decompress(self, bits: BitSequence) -> List[Hashable]:
        decoded = []
        current_code = ""

        for bit in str(bits):
            current_code += bit
            symbol = self._symbols.get(current_code, _MISSING)
            if symbol is not _MISSING:
                decoded.append(symbol)
                current_code = ""

        if current_code:
            raise UnexpectedMoreDataError(
                f"Bit stream ended inside a codeword ({len(current_code)} bits pending)"
            )
        return decoded

    def to_header(self) -> BitSequence:
        """Encode the table itself so that a receiver can rebuild it.

        Format:
        - 9 bits: number of symbols (0 - 256)
        - For each symbol, in ascending order:
          - 8 bits: the byte value
          - 8 bits: length of its codeword
          - N bits: the codeword itself
        """
        header = [format(len(self._codes), f"0{HEADER_COUNT_BITS}b")]
        for symbol in sorted(self._codes):
            if not isinstance(symbol, int) or not 0 <= symbol <= 255:
                raise ValueError(f"Only byte symbols can be written to a header, got {symbol!r}")
            code = self._codes[symbol]
            header.append(format(symbol, f"0{HEADER_SYMBOL_BITS}b"))
            header.append(format(len(code), f"0{HEADER_LENGTH_BITS}b"))
            header.append(code)
        return BitSequence.from_str("".join(header))

    @classmethod
    def from_header(cls, bits: BitSequence) -> Tuple["CodeTable", int]:
        """Parse a table written by to_header. Returns the table and the number of bits consumed."""
        text = str(bits)
        pos = 0

        def take(count: int) -> str:
            nonlocal pos
            if pos + count > len(text):
                raise UnexpectedMoreDataError("Bit stream ended inside the codebook header")
            chunk = text[pos:pos + count]
            pos += count
            return chunk

        num_symbols = _bits_to_int(take(HEADER_COUNT_BITS))
        codes = {}
        for _ in range(num_symbols):
            symbol = _bits_to_int(take(HEADER_SYMBOL_BITS))
            code_length = _bits_to_int(take(HEADER_LENGTH_BITS))
            codes[symbol] = take(code_length)

        try:
            return cls(codes), pos
        except ValueError as e:
            raise CompressionError(f"Malformed codebook header: {e}") from e


# the node class is used to build the tree
class Node:
    def __init__(self, probability, order, symbol=None, left=None, right=None):
        self.probability = probability
        self.order = order
        self.symbol = symbol
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    # lowest probability first, among equal probabilities the most recently created node
    def __lt__(self, other):
        return (self.probability, -self.order) < (other.probability, -other.order)


class HuffmanCoder:
    def __init__(self, table: CodeTable):
        self.table = table

    @classmethod
    def with_probabilities(cls, probabilities: Mapping[Hashable, Probability]) -> "HuffmanCoder":
        check_probabilities(probabilities)
        return cls(build_huffman_table(probabilities))

    @classmethod
    def optimal_for(cls, sample: Iterable[Hashable]) -> "HuffmanCoder":
        """Build the table from the symbol frequencies of a sample message."""
        probabilities = frequencies_of(sample)
        if not probabilities:
            return cls(CodeTable({}))
        return cls.with_probabilities(probabilities)

    def compress(self, symbols: Iterable[Hashable]) -> BitSequence:
        return self.table.compress(symbols)

    def decompress(self, bits: BitSequence) -> List[Hashable]:
        return self.table.decompress(bits)

    def __repr__(self):
        return f"HuffmanCoder({self.table!r})"


def build_huffman_table(probabilities: Mapping[Hashable, Probability]) -> CodeTable:
    if not probabilities:
        return CodeTable({})

    # leaves are numbered in ascending symbol order so the result does not depend on dict order
    leaves = sorted(probabilities.items(), key=lambda item: item[0])

    # only one symbol, encoding is trivial
    if len(leaves) == 1:
        return CodeTable({leaves[0][0]: "0"})

    priority_queue = [Node(p, order, symbol=symbol) for order, (symbol, p) in enumerate(leaves)]
    heapq.heapify(priority_queue)
    next_order = len(priority_queue)

    while len(priority_queue) > 1:
        # we take the two lowest probability elements and form a new node
        left_node = heapq.heappop(priority_queue)
        right_node = heapq.heappop(priority_queue)

        merged_node = Node(left_node.probability + right_node.probability, next_order,
                           left=left_node, right=right_node)
        next_order += 1
        heapq.heappush(priority_queue, merged_node)

    codes = {}
    _generate_codes_recursive(priority_queue[0], "", codes)
    return CodeTable(codes)


def _generate_codes_recursive(node: Node, current_code: str, codes_map: dict) -> None:
    # if there is a symbol then we reached the end of a branch
    if node.is_leaf():
        codes_map[node.symbol] = current_code
        return

    # if not then we are at a junction node
    _generate_codes_recursive(node.left, current_code + "0", codes_map)
    _generate_codes_recursive(node.right, current_code + "1", codes_map)
