# -------------------------------------------------
# Codec errors
# -------------------------------------------------
# Everything derives from ValueError so callers that only know about
# "bad data" (like the Streamlit page) can still catch it in one place.


class HuffmanCodecError(ValueError):
    """Base class for every failure raised by the codec."""


class EmptyInputError(HuffmanCodecError):
    """There are no symbols to encode."""


class UnknownSymbolError(HuffmanCodecError):
    """A symbol in the input has no entry in the code table."""

    def __init__(self, symbol: str):
        super().__init__(f"No code for symbol {symbol!r}")
        self.symbol = symbol


class CorruptStreamError(HuffmanCodecError):
    """The bit stream does not line up with the Huffman tree."""


class MalformedContainerError(HuffmanCodecError):
    """The artifact header or frequency table cannot be parsed."""


class TruncatedStreamError(CorruptStreamError, MalformedContainerError):
    """The packed payload is shorter than the header's bit length says."""


class ArtifactTooLargeError(HuffmanCodecError):
    """A length or count does not fit the 32-bit container fields."""
