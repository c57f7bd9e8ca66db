"""
Shared errors for quote decoding.

This module has no intra-package dependencies, so any module
can import from it without risk of circular imports.
"""


class QuoteError(Exception):
    """Base class for quote errors"""
    pass


class FileUnreadableError(QuoteError):
    """Raised when the quote file cannot be opened or read"""
    pass


class QuoteDecodeError(QuoteError):
    """Raised when quote content cannot be decoded"""
    pass


class TruncatedInputError(QuoteDecodeError):
    """Raised when the buffer ends before a field is complete"""

    def __init__(self, offset: int, wanted: int, available: int):
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"Quote truncated at offset 0x{offset:x}: "
            f"need {wanted} bytes, only {available} available"
        )


class UnrecognizedTeeTypeError(QuoteDecodeError):
    """Raised when the TEE type is neither SGX nor TDX"""

    def __init__(self, tee_type: int, offset: int):
        self.tee_type = tee_type
        self.offset = offset
        super().__init__(f"Invalid TEE type: 0x{tee_type:x} at offset 0x{offset:x}")


class BodySizeMismatchError(QuoteDecodeError):
    """Raised in strict mode when the declared body size is not the size read"""

    def __init__(self, declared: int, expected: int, offset: int):
        self.declared = declared
        self.expected = expected
        self.offset = offset
        super().__init__(
            f"Declared body size {declared} at offset 0x{offset:x} does not match "
            f"the {expected} bytes of TD quote body read"
        )
