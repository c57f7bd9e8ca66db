"""
Decoder for SGX/TDX attestation quotes.
"""

from .abi import (
    Quote,
    QuoteBody,
    QuoteHeader,
    TdQuoteBody,
    TeeType,
    decode,
    parse_quote,
)
from .attributes import TdAttributes, decompose
from .types import (
    BodySizeMismatchError,
    FileUnreadableError,
    QuoteDecodeError,
    QuoteError,
    TruncatedInputError,
    UnrecognizedTeeTypeError,
)

__all__ = [
    "Quote",
    "QuoteBody",
    "QuoteHeader",
    "TdQuoteBody",
    "TeeType",
    "decode",
    "parse_quote",
    "TdAttributes",
    "decompose",
    "QuoteError",
    "FileUnreadableError",
    "QuoteDecodeError",
    "TruncatedInputError",
    "UnrecognizedTeeTypeError",
    "BodySizeMismatchError",
]
