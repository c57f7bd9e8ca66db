"""
Command line entry point: decode a quote file and print it.

Usage:
    tdquote quote.dat
    tdquote --json quote.dat
"""

import argparse
import logging
import sys

from .abi import decode
from .display import format_quote
from .serialize import quote_to_json
from .types import FileUnreadableError, QuoteDecodeError
from .utils import load_quote_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tdquote",
        description="Decode an SGX/TDX attestation quote",
    )
    parser.add_argument("file", help="Path to the raw quote file")
    parser.add_argument(
        "--json", action="store_true", default=False,
        help="Print the decoded quote as JSON",
    )
    parser.add_argument(
        "--strict", action="store_true", default=False,
        help="Reject quotes whose declared body size differs from the bytes read",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", default=False,
        help="Enable debug logging",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        data = load_quote_file(args.file)
    except FileUnreadableError as e:
        logger.error(str(e))
        return 1

    logger.debug(f"Read {len(data)} bytes from {args.file}")

    try:
        quote = decode(data, strict=args.strict)
    except QuoteDecodeError as e:
        logger.error(f"Error decoding quote: {e}")
        return 1

    if args.json:
        print(quote_to_json(quote))
    else:
        print(format_quote(quote))
    return 0


if __name__ == "__main__":
    sys.exit(main())
