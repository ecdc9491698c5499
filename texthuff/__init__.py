from .codec import (
    CompressionStats,
    DecodeResult,
    DecompressionStats,
    EncodeResult,
    compress_file,
    compress_text,
    decompress_artifact,
    decompress_file,
)
from .container import Artifact, parse_artifact, serialize_artifact
from .core import (
    Node,
    build_freq_map,
    build_tree,
    decode_bits,
    encode_text,
    make_codes,
)
from .errors import (
    ArtifactTooLargeError,
    CorruptStreamError,
    EmptyInputError,
    HuffmanCodecError,
    MalformedContainerError,
    TruncatedStreamError,
    UnknownSymbolError,
)

__version__ = "0.1.0"
