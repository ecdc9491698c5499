import itertools

import pytest

from texthuff.core import (
    Node,
    bits_to_bytes,
    build_freq_map,
    build_tree,
    decode_bits,
    encode_text,
    iter_bits,
    make_codes,
    pad_bits,
)
from texthuff.errors import CorruptStreamError, EmptyInputError, UnknownSymbolError


def _shape(node):
    # nested tuples describing a tree, for structural comparison
    if node is None:
        return None
    return (node.symbol, node.weight, _shape(node.left), _shape(node.right))


def _pack(text, codes):
    bits = encode_text(text, codes)
    padded, _ = pad_bits(bits)
    return bits_to_bytes(padded), len(bits)


# ---------------------------
# Frequency table
# ---------------------------
def test_freq_map_abracadabra():
    freq = build_freq_map("abracadabra")
    assert freq == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    # first-appearance order
    assert list(freq) == ["a", "b", "r", "c", "d"]


def test_freq_map_counts_sum_to_length():
    text = "the quick brown fox jumps over the lazy dog"
    assert sum(build_freq_map(text).values()) == len(text)


def test_freq_map_counts_do_not_depend_on_order():
    assert build_freq_map("abcabc") == build_freq_map("cbacba")


def test_freq_map_empty_input():
    with pytest.raises(EmptyInputError):
        build_freq_map("")


# ---------------------------
# Tree
# ---------------------------
def test_build_tree_empty_table():
    with pytest.raises(EmptyInputError):
        build_tree({})


def test_build_tree_weights():
    root = build_tree({"a": 5, "b": 2, "r": 2, "c": 1, "d": 1})
    assert root.weight == 11
    assert not root.is_leaf

    def check(node):
        if node.is_leaf:
            return 1
        assert node.weight == node.left.weight + node.right.weight
        return check(node.left) + check(node.right)

    assert check(root) == 5


def test_build_tree_tie_break_first_in_first_out():
    root = build_tree({"x": 1, "y": 1})
    assert root.left.symbol == "x"
    assert root.right.symbol == "y"


def test_build_tree_is_deterministic():
    freq = {"e": 4, "t": 4, "a": 4, " ": 4, "o": 2, "n": 2, "z": 1}
    assert _shape(build_tree(freq)) == _shape(build_tree(dict(freq)))


def test_single_symbol_tree_is_wrapped():
    root = build_tree({"a": 4})
    assert root.symbol is None
    assert root.weight == 4
    assert root.left.symbol == "a"
    assert root.right is None


# ---------------------------
# Codes
# ---------------------------
def test_codes_abracadabra():
    freq = build_freq_map("abracadabra")
    codes = make_codes(build_tree(freq))
    assert codes == {"a": "0", "c": "100", "d": "101", "b": "110", "r": "111"}


def test_single_symbol_code_is_zero():
    assert make_codes(build_tree({"a": 4})) == {"a": "0"}


def test_make_codes_without_tree():
    assert make_codes(None) == {}


def test_make_codes_is_idempotent():
    root = build_tree(build_freq_map("mississippi river"))
    assert make_codes(root) == make_codes(root)


def test_codes_are_prefix_free():
    text = "It was the best of times, it was the worst of times; 1234567890!?"
    codes = make_codes(build_tree(build_freq_map(text)))
    assert len(codes) == len(set(text))
    for a, b in itertools.permutations(codes.values(), 2):
        assert not b.startswith(a)


def test_code_lengths_are_optimal_for_abracadabra():
    freq = build_freq_map("abracadabra")
    codes = make_codes(build_tree(freq))
    assert sum(freq[s] * len(c) for s, c in codes.items()) == 23


# ---------------------------
# Bits
# ---------------------------
def test_pad_bits():
    assert pad_bits("101") == ("10100000", 5)
    assert pad_bits("11110000") == ("11110000", 0)
    assert pad_bits("") == ("", 0)


def test_bits_to_bytes_msb_first():
    assert bits_to_bytes("1010000000000001") == b"\xa0\x01"


def test_iter_bits_stops_by_count():
    assert list(iter_bits(b"\xa0", 3)) == [1, 0, 1]
    assert list(iter_bits(b"\xa0", 0)) == []


def test_iter_bits_short_source():
    with pytest.raises(CorruptStreamError):
        list(iter_bits(b"\xff", 9))


def test_encode_unknown_symbol():
    with pytest.raises(UnknownSymbolError) as excinfo:
        encode_text("abz", {"a": "0", "b": "1"})
    assert excinfo.value.symbol == "z"


def test_encode_decode_abracadabra():
    root = build_tree(build_freq_map("abracadabra"))
    packed, bit_length = _pack("abracadabra", make_codes(root))
    assert bit_length == 23
    assert len(packed) == 3
    assert decode_bits(packed, root, bit_length) == "abracadabra"


def test_decode_ignores_padding():
    root = build_tree({"a": 4})
    # "0000" followed by four zero pad bits must not become "aaaaaaaa"
    assert decode_bits(b"\x00", root, 4) == "aaaa"


def test_decode_ends_mid_code():
    root = build_tree(build_freq_map("abracadabra"))
    # "1" starts c/d/b/r but is not a whole code
    with pytest.raises(CorruptStreamError):
        decode_bits(b"\x80", root, 1)


def test_decode_walks_off_tree():
    root = build_tree({"a": 3})
    # the wrapper root has no right child
    with pytest.raises(CorruptStreamError):
        decode_bits(b"\x80", root, 1)


def test_decode_short_payload():
    root = build_tree(build_freq_map("abracadabra"))
    packed, bit_length = _pack("abracadabra", make_codes(root))
    with pytest.raises(CorruptStreamError):
        decode_bits(packed[:-1], root, bit_length)


def test_decode_without_tree():
    with pytest.raises(CorruptStreamError):
        decode_bits(b"\x00", None, 1)


def test_node_repr():
    assert repr(Node("a", 3)) == "Node('a', 3)"
    assert repr(Node(None, 7)) == "Node(None, 7)"
