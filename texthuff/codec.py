import dataclasses
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Union

from .config import ENCODED_SUFFIX, TEXT_ENCODING, TEXT_SUFFIX
from .container import Artifact, parse_artifact, serialize_artifact
from .core import (
    Node,
    bits_to_bytes,
    build_freq_map,
    build_tree,
    decode_bits,
    encode_text,
    make_codes,
    pad_bits,
)
from .errors import CorruptStreamError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class CompressionStats:
    original_bytes: int
    original_symbols: int
    compressed_bytes: int
    unique_symbols: int
    bit_length: int
    pad_count: int
    timings: Mapping[str, float] = field(default_factory=dict)

    @property
    def compression_ratio(self) -> float:
        return self.compressed_bytes / self.original_bytes

    @property
    def space_saved_percent(self) -> float:
        return (self.original_bytes - self.compressed_bytes) / self.original_bytes * 100.0


@dataclass(frozen=True)
class DecompressionStats:
    compressed_bytes: int
    restored_bytes: int
    restored_symbols: int
    pad_count: int
    timings: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class EncodeResult:
    """Everything an encode produces; front ends only read from it."""
    frequencies: Mapping[str, int]
    root: Node
    codes: Mapping[str, str]
    artifact: bytes
    stats: CompressionStats


@dataclass(frozen=True)
class DecodeResult:
    text: str
    frequencies: Mapping[str, int]
    root: Node
    bit_length: int
    stats: DecompressionStats


# -------------------------
# Compressor
# -------------------------
def compress_text(text: str) -> EncodeResult:
    t0 = time.perf_counter()
    freq = build_freq_map(text)
    t_freq = time.perf_counter()

    root = build_tree(freq)
    t_tree = time.perf_counter()

    codes = make_codes(root)
    t_codes = time.perf_counter()

    bitstr = encode_text(text, codes)
    padded, pad_count = pad_bits(bitstr)
    packed = bits_to_bytes(padded)
    t_pack = time.perf_counter()

    blob = serialize_artifact(freq, len(bitstr), packed)
    t_serialize = time.perf_counter()

    stats = CompressionStats(
        original_bytes=len(text.encode(TEXT_ENCODING, "surrogatepass")),
        original_symbols=len(text),
        compressed_bytes=len(blob),
        unique_symbols=len(freq),
        bit_length=len(bitstr),
        pad_count=pad_count,
        timings=MappingProxyType({
            "Count Symbols": t_freq - t0,
            "Build Tree": t_tree - t_freq,
            "Make Codes": t_codes - t_tree,
            "Encode & Pack": t_pack - t_codes,
            "Serialize": t_serialize - t_pack,
            "Total": t_serialize - t0,
        }),
    )
    logger.info("Encoded %d symbols (%d distinct) into %d bits, %d bytes",
                stats.original_symbols, stats.unique_symbols,
                stats.bit_length, stats.compressed_bytes)
    return EncodeResult(
        frequencies=MappingProxyType(freq),
        root=root,
        codes=MappingProxyType(codes),
        artifact=blob,
        stats=stats,
    )


# -------------------------
# Decompressor
# -------------------------
def decompress_artifact(blob: bytes) -> DecodeResult:
    t0 = time.perf_counter()
    artifact: Artifact = parse_artifact(blob)
    t_parse = time.perf_counter()

    # the tree comes out identical to the encoder's because the table
    # keeps its original order
    root = build_tree(artifact.frequencies)
    t_tree = time.perf_counter()

    text = decode_bits(artifact.packed, root, artifact.bit_length)
    t_decode = time.perf_counter()

    expected = sum(artifact.frequencies.values())
    if len(text) != expected:
        raise CorruptStreamError(
            f"Decoded {len(text)} symbols but the frequency table counts {expected}")

    stats = DecompressionStats(
        compressed_bytes=len(blob),
        restored_bytes=len(text.encode(TEXT_ENCODING, "surrogatepass")),
        restored_symbols=len(text),
        pad_count=artifact.pad_count,
        timings=MappingProxyType({
            "Parse Container": t_parse - t0,
            "Rebuild Tree": t_tree - t_parse,
            "Decode": t_decode - t_tree,
            "Total": t_decode - t0,
        }),
    )
    logger.info("Decoded %d bytes into %d symbols", len(blob), len(text))
    return DecodeResult(
        text=text,
        frequencies=artifact.frequencies,
        root=root,
        bit_length=artifact.bit_length,
        stats=stats,
    )


# -------------------------
# Files
# -------------------------
def default_output_name(name: str, encode: bool) -> str:
    """Artifacts always end in ``.huf``, restored text always in ``.txt``.

    The suffix is swapped when the input carries the opposite one
    (``notes.txt`` <-> ``notes.huf``), otherwise it is appended.
    """
    path = Path(name)
    source, target = (TEXT_SUFFIX, ENCODED_SUFFIX) if encode else (ENCODED_SUFFIX, TEXT_SUFFIX)
    if path.suffix == source:
        return str(path.with_suffix(target))
    return str(path) + target


def _with_timings(stats, **extra: float):
    timings: Dict[str, float] = dict(stats.timings)
    total = timings.pop("Total", 0.0)
    timings.update(extra)
    timings["Total"] = total + sum(extra.values())
    return dataclasses.replace(stats, timings=MappingProxyType(timings))


def compress_file(src: PathLike, dst: PathLike) -> EncodeResult:
    t0 = time.perf_counter()
    with open(src, "r", encoding=TEXT_ENCODING, newline="") as f:
        text = f.read()
    t_read = time.perf_counter()

    result = compress_text(text)

    t1 = time.perf_counter()
    Path(dst).write_bytes(result.artifact)
    t_write = time.perf_counter()

    stats = _with_timings(result.stats, **{"Read File": t_read - t0,
                                           "Write File": t_write - t1})
    return dataclasses.replace(result, stats=stats)


def decompress_file(src: PathLike, dst: PathLike) -> DecodeResult:
    t0 = time.perf_counter()
    blob = Path(src).read_bytes()
    t_read = time.perf_counter()

    result = decompress_artifact(blob)

    t1 = time.perf_counter()
    # encode before touching dst so a failure leaves no half-written file;
    # raw bytes keep "\r\n" exactly as it was
    data = result.text.encode(TEXT_ENCODING)
    Path(dst).write_bytes(data)
    t_write = time.perf_counter()

    stats = _with_timings(result.stats, **{"Read File": t_read - t0,
                                           "Write File": t_write - t1})
    return dataclasses.replace(result, stats=stats)
