import logging
import os
import struct
from typing import Optional, Union

logger = logging.getLogger(__name__)

# ---------------------------------
# Container layout
# ---------------------------------
# header: frequency-table byte length, bit length (both uint32 big-endian)
HEADER = struct.Struct(">II")
# frequency table: entry count, then (code point, count) pairs
TABLE_COUNT = struct.Struct(">I")
TABLE_ENTRY = struct.Struct(">II")
UINT32_MAX = 0xFFFFFFFF
MAX_CODE_POINT = 0x10FFFF

# ---------------------------------
# Files
# ---------------------------------
TEXT_ENCODING = "utf-8"
TEXT_SUFFIX = ".txt"
ENCODED_SUFFIX = ".huf"

# how deep the Graphviz view goes before cutting subtrees off
TREE_MAX_DEPTH = 6

# ---------------------------------
# Logging
# ---------------------------------
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVEL = os.environ.get("TEXTHUFF_LOG_LEVEL", "WARNING").upper()


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Set up root logging for the front ends (CLI and Streamlit page)."""
    if level is None:
        level = LOG_LEVEL
    logging.basicConfig(level=level, format=LOG_FORMAT)


def tree_max_depth() -> int:
    """Graphviz cut-off, from ``TEXTHUFF_TREE_DEPTH`` when it holds a number."""
    raw = os.environ.get("TEXTHUFF_TREE_DEPTH")
    if raw is None:
        return TREE_MAX_DEPTH
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "TEXTHUFF_TREE_DEPTH=%r is not a number, using %d", raw, TREE_MAX_DEPTH)
        return TREE_MAX_DEPTH
