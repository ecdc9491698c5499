# ----------------
# Importations
# ----------------
import logging

import streamlit as st

from texthuff.config import ENCODED_SUFFIX, TEXT_ENCODING, configure_logging
from texthuff.errors import EmptyInputError, HuffmanCodecError
from texthuff.report import ACTIONS, process_upload, show_result

configure_logging()
logger = logging.getLogger("texthuff.app")


# ------------------------
#   Streamlit App
# ------------------------
st.set_page_config(page_title="Text Compressor", layout="centered")
st.title("Huffman Text Compressor 🗜")

# ---------------------
#    Instructions
# ---------------------
st.subheader("1) Instructions")

st.markdown(f"""
*How to Use This Text Compression Tool*

1. Upload a UTF-8 text file, or a {ENCODED_SUFFIX} file made by this tool.
2. Choose *Compress* for text and *Decompress* for {ENCODED_SUFFIX} files.
3. Click *Process File* to start.
4. Download your file after processing.
""")
st.divider()

# -------------------
# file Uploading
# -------------------
st.subheader("2) File Uploader")
uploaded_file = st.file_uploader("Upload a file", type=None)
if uploaded_file:
    data = uploaded_file.getvalue()
    st.success(f"Uploaded file: {uploaded_file.name} ({len(data)} bytes)")

    is_encoded = uploaded_file.name.endswith(ENCODED_SUFFIX)
    action = st.radio("**Choose Action**", ACTIONS, index=1 if is_encoded else 0)

    if st.button("Process File"):
        st.divider()
        try:
            with st.spinner(f"{action}ing file..."):
                processed = process_upload(uploaded_file.name, data, action)
        except EmptyInputError:
            st.error("File is empty!")
        except UnicodeError as e:
            logger.error("Upload %s is not valid %s text: %s",
                         uploaded_file.name, TEXT_ENCODING, e)
            st.error(f"Error: the file is not valid {TEXT_ENCODING} text.")
        except HuffmanCodecError as e:
            logger.error("%s failed for %s: %s", action, uploaded_file.name, e)
            st.error(f"Error: {e}")
        else:
            show_result(action, processed.result)

            # ------------------------
            #   File Downloading
            # ------------------------
            st.divider()
            st.subheader("Download Button")
            st.info(f"Download your {action.lower()}ed file here.")
            st.download_button(
                label=processed.file_name,
                data=processed.payload,
                file_name=processed.file_name,
                mime=processed.mime,
            )
