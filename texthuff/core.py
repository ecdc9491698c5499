import heapq
import itertools
import logging
from collections import Counter
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple

from .errors import CorruptStreamError, EmptyInputError, UnknownSymbolError

logger = logging.getLogger(__name__)


# ---------------------------------
# Basic tree node
# ---------------------------------
class Node:
    def __init__(self, symbol: Optional[str], weight: int):
        # symbol: None for internal nodes, a single character for leaves
        self.symbol = symbol
        self.weight = weight
        self.left: Optional['Node'] = None
        self.right: Optional['Node'] = None

    @property
    def is_leaf(self) -> bool:
        return self.symbol is not None

    def __repr__(self):
        if self.is_leaf:
            return f"Node({self.symbol!r}, {self.weight})"
        return f"Node(None, {self.weight})"


# ------------------------------------
# 1) Count symbols (freq)
# ------------------------------------
def build_freq_map(text: Iterable[str]) -> Dict[str, int]:
    # Counter keeps first-appearance order, which the tree builder relies on
    freq = dict(Counter(text))
    if not freq:
        raise EmptyInputError("Input has no symbols to encode")
    logger.debug("Frequency table: %d distinct symbols", len(freq))
    return freq


# -------------------------------------
# 2) Build Huffman tree from the table
# -------------------------------------
def build_tree(freq_map: Mapping[str, int]) -> Node:
    """Greedy weight merge over a binary heap.

    Heap entries are ``(weight, sequence, node)``. Leaves get their sequence
    numbers in table order and every merged node gets the next one, so nodes
    of equal weight come out first-in-first-out and the same table always
    gives the same tree. The first node popped becomes the left child.
    """
    if not freq_map:
        raise EmptyInputError("Cannot build a tree from an empty frequency table")

    order = itertools.count()
    h = [(fr, next(order), Node(sym, fr)) for sym, fr in freq_map.items()]
    heapq.heapify(h)

    # only one symbol: wrap it so its code is "0" instead of ""
    if len(h) == 1:
        _, _, single = h[0]
        parent = Node(None, single.weight)
        parent.left = single
        return parent

    while len(h) > 1:
        wa, _, a = heapq.heappop(h)
        wb, _, b = heapq.heappop(h)
        p = Node(None, wa + wb)
        p.left = a
        p.right = b
        heapq.heappush(h, (p.weight, next(order), p))

    root = h[0][2]
    logger.debug("Huffman tree built: root weight %d", root.weight)
    return root


# ---------------------------
# 3) Walk tree -> code map
# ---------------------------
def make_codes(root: Optional[Node]) -> Dict[str, str]:
    codes: Dict[str, str] = {}
    if root is None:
        return codes

    def walk(node: Node, prefix: str):
        if node.is_leaf:
            codes[node.symbol] = prefix
            return
        if node.left:
            walk(node.left, prefix + "0")
        if node.right:
            walk(node.right, prefix + "1")

    walk(root, "")
    return codes


# ----------------------------------------------
# 4) Encode text using codes -> big bitstring
# ----------------------------------------------
def encode_text(text: Iterable[str], codes: Mapping[str, str]) -> str:
    pieces = []
    for ch in text:
        try:
            pieces.append(codes[ch])
        except KeyError:
            raise UnknownSymbolError(ch) from None
    return "".join(pieces)


def pad_bits(bits: str) -> Tuple[str, int]:
    # pad to full bytes; return padded string + pad count (0..7)
    extra = (8 - (len(bits) % 8)) % 8
    return bits + ("0" * extra), extra


def bits_to_bytes(bits: str) -> bytes:
    arr = bytearray()
    for i in range(0, len(bits), 8):
        arr.append(int(bits[i:i + 8], 2))
    return bytes(arr)


# ----------------------------------------------
# 5) Read packed bytes back and walk the tree
# ----------------------------------------------
def iter_bits(packed: bytes, bit_length: int) -> Iterator[int]:
    """Yield exactly ``bit_length`` bits from ``packed``, MSB first.

    Padding in the last byte is never looked at: a zero pad bit cannot be
    told apart from a real "0", so the count is the only stop condition.
    """
    if bit_length > len(packed) * 8:
        raise CorruptStreamError(
            f"Stream holds {len(packed) * 8} bits but {bit_length} were declared")
    for i in range(bit_length):
        yield (packed[i >> 3] >> (7 - (i & 7))) & 1


def decode_bits(packed: bytes, root: Node, bit_length: int) -> str:
    if root is None:
        raise CorruptStreamError("No Huffman tree to decode with")

    out = []
    node = root
    for bit in iter_bits(packed, bit_length):
        node = node.right if bit else node.left
        if node is None:
            raise CorruptStreamError("Corrupt bitstream (walked off the tree)")
        if node.is_leaf:
            out.append(node.symbol)
            node = root

    if node is not root:
        raise CorruptStreamError("Bitstream ends in the middle of a code")
    logger.debug("Decoded %d symbols from %d bits", len(out), bit_length)
    return "".join(out)
