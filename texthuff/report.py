"""Streamlit report sections and upload handling for the page in ``app.py``."""
from dataclasses import dataclass
from typing import Union

import streamlit as st

from .codec import (
    DecodeResult,
    EncodeResult,
    compress_text,
    decompress_artifact,
    default_output_name,
)
from .config import TEXT_ENCODING
from .views import code_table_frame, timings_frame, tree_to_dot

ACTIONS = ("Compress", "Decompress")


@dataclass(frozen=True)
class Processed:
    result: Union[EncodeResult, DecodeResult]
    payload: bytes
    file_name: str
    mime: str


def process_upload(name: str, data: bytes, action: str) -> Processed:
    """Run the chosen action on an uploaded file; codec errors propagate."""
    if action == "Compress":
        result = compress_text(data.decode(TEXT_ENCODING))
        return Processed(result, result.artifact,
                         default_output_name(name, encode=True),
                         "application/octet-stream")
    if action == "Decompress":
        result = decompress_artifact(data)
        return Processed(result, result.text.encode(TEXT_ENCODING),
                         default_output_name(name, encode=False),
                         "text/plain")
    raise ValueError(f"Unknown action {action!r}")


# ------------------------
#   Report sections
# ------------------------
def show_compression(result: EncodeResult):
    stats = result.stats
    st.subheader("3) Compression Summary")
    col1, col2, col3 = st.columns(3)
    col1.metric("**Original Size**", f"{stats.original_bytes} bytes")
    col2.metric("**Compressed Size**", f"{stats.compressed_bytes} bytes")
    col3.metric("Space Saved", f"{stats.space_saved_percent:.2f}%")

    st.markdown(f"*Compression ratio: {stats.compression_ratio:.4f}*")
    st.markdown(f"*Unique symbols: {stats.unique_symbols}*")
    st.markdown(f"*Encoded bits: {stats.bit_length}* (padding bits: {stats.pad_count})")

    st.divider()
    st.subheader("4) Huffman Codes")
    st.dataframe(code_table_frame(result.frequencies, result.codes), hide_index=True)

    st.divider()
    st.subheader("5) Processing Timings")
    st.table(timings_frame(stats.timings))

    st.divider()
    st.subheader("6) Huffman Tree")
    st.graphviz_chart(tree_to_dot(result.root))


def show_decompression(result: DecodeResult):
    stats = result.stats
    st.subheader("3) Decompression Report")
    col1, col2, col3 = st.columns(3)
    col1.metric("Compressed file size", f"{stats.compressed_bytes} bytes")
    col2.metric("Restored file size", f"{stats.restored_bytes} bytes")
    col3.metric("Padding bits", f"{stats.pad_count}")

    st.divider()
    st.subheader("4) Processing Timings")
    st.table(timings_frame(stats.timings))


def show_result(action: str, result: Union[EncodeResult, DecodeResult]):
    if action == "Compress":
        show_compression(result)
    else:
        show_decompression(result)
