"""Command-line front end.

Usage::

    texthuff encode notes.txt            # writes notes.huf
    texthuff decode notes.huf -o out.txt
"""
import argparse
import logging
import sys
from typing import List, Optional

from .codec import compress_file, decompress_file, default_output_name
from .config import configure_logging
from .errors import HuffmanCodecError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="texthuff", description="Huffman-compress text files and restore them.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every step at debug level")
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="compress a UTF-8 text file")
    enc.add_argument("src")
    enc.add_argument("-o", "--output", help="artifact path (default: SRC with .huf)")

    dec = sub.add_parser("decode", help="restore a text file from an artifact")
    dec.add_argument("src")
    dec.add_argument("-o", "--output", help="text path (default: SRC with .txt)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)

    dst = args.output or default_output_name(args.src, encode=args.command == "encode")
    try:
        if args.command == "encode":
            stats = compress_file(args.src, dst).stats
            print(f"{args.src} ({stats.original_bytes} bytes) -> {dst} "
                  f"({stats.compressed_bytes} bytes), "
                  f"{stats.space_saved_percent:.2f}% saved")
        else:
            stats = decompress_file(args.src, dst).stats
            print(f"{args.src} ({stats.compressed_bytes} bytes) -> {dst} "
                  f"({stats.restored_bytes} bytes)")
    except (HuffmanCodecError, OSError, UnicodeError) as e:
        logger.error("%s failed for %s: %s", args.command, args.src, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
