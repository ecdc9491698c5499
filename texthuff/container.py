"""Binary container for an encoded text.

Layout (all integers are unsigned 32-bit big-endian)::

    0 .. 4      frequency-table byte length L
    4 .. 8      bit length of the code stream
    8 .. 8+L    frequency table: entry count, then (code point, count) pairs
    8+L ..      packed code bytes, exactly ceil(bit_length / 8) of them

Symbols are stored by code point, never as text, so whitespace, quotes or
any separator-looking character round-trips without escaping. Table entries
keep the order of the frequency table because the tree builder breaks weight
ties by that order.
"""
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

from .config import HEADER, MAX_CODE_POINT, TABLE_COUNT, TABLE_ENTRY, UINT32_MAX
from .errors import (
    ArtifactTooLargeError,
    CorruptStreamError,
    MalformedContainerError,
    TruncatedStreamError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Artifact:
    frequencies: Mapping[str, int]
    bit_length: int
    packed: bytes

    @property
    def pad_count(self) -> int:
        return len(self.packed) * 8 - self.bit_length


def packed_size(bit_length: int) -> int:
    return (bit_length + 7) // 8


# -----------------------------
# Frequency table <-> bytes
# -----------------------------
def serialize_table(freq_map: Mapping[str, int]) -> bytes:
    out = bytearray(TABLE_COUNT.pack(len(freq_map)))
    for sym, count in freq_map.items():
        if count > UINT32_MAX:
            raise ArtifactTooLargeError(
                f"Count {count} for {sym!r} does not fit in 32 bits")
        out += TABLE_ENTRY.pack(ord(sym), count)
    return bytes(out)


def parse_table(region: bytes) -> Dict[str, int]:
    if len(region) < TABLE_COUNT.size:
        raise MalformedContainerError("Frequency table is missing its entry count")
    (entries,) = TABLE_COUNT.unpack_from(region, 0)
    if entries == 0:
        raise MalformedContainerError("Frequency table is empty")
    expected = TABLE_COUNT.size + entries * TABLE_ENTRY.size
    if len(region) != expected:
        raise MalformedContainerError(
            f"Frequency table declares {entries} entries ({expected} bytes) "
            f"but its region is {len(region)} bytes")

    freq: Dict[str, int] = {}
    for code_point, count in TABLE_ENTRY.iter_unpack(region[TABLE_COUNT.size:]):
        if code_point > MAX_CODE_POINT:
            raise MalformedContainerError(f"Invalid code point {code_point:#x}")
        sym = chr(code_point)
        if sym in freq:
            raise MalformedContainerError(f"Symbol {sym!r} appears twice")
        if count == 0:
            raise MalformedContainerError(f"Symbol {sym!r} has a zero count")
        freq[sym] = count
    return freq


# -----------------------------
# Whole artifact
# -----------------------------
def serialize_artifact(freq_map: Mapping[str, int], bit_length: int, packed: bytes) -> bytes:
    if bit_length > UINT32_MAX:
        raise ArtifactTooLargeError(f"Bit length {bit_length} does not fit in 32 bits")
    if len(packed) != packed_size(bit_length):
        raise CorruptStreamError(
            f"{len(packed)} packed bytes cannot hold exactly {bit_length} bits")

    table = serialize_table(freq_map)
    if len(table) > UINT32_MAX:
        raise ArtifactTooLargeError("Frequency table is too large")

    blob = HEADER.pack(len(table), bit_length) + table + bytes(packed)
    logger.debug("Serialized artifact: table %d bytes, %d bits, %d total bytes",
                 len(table), bit_length, len(blob))
    return blob


def parse_artifact(blob: bytes) -> Artifact:
    blob = bytes(blob)
    if len(blob) < HEADER.size:
        raise MalformedContainerError(
            f"Artifact is {len(blob)} bytes, shorter than the {HEADER.size}-byte header")

    table_len, bit_length = HEADER.unpack_from(blob, 0)
    start = HEADER.size
    end = start + table_len
    if end > len(blob):
        raise MalformedContainerError(
            f"Header declares a {table_len}-byte frequency table but only "
            f"{len(blob) - start} bytes follow the header")

    freq = parse_table(blob[start:end])

    packed = blob[end:]
    needed = packed_size(bit_length)
    if len(packed) < needed:
        raise TruncatedStreamError(
            f"Header declares {bit_length} bits ({needed} bytes) but only "
            f"{len(packed)} payload bytes are present")
    if len(packed) > needed:
        raise MalformedContainerError(
            f"{len(packed) - needed} unexpected bytes after the code stream")

    return Artifact(MappingProxyType(freq), bit_length, packed)
