"""
Quote parsing structures and constants.

This module provides data structures and parsing logic for the fixed
portion of SGX/TDX attestation quotes: the 48-byte header, the body
type and size, and the 648-byte TD quote body. Certification data
following the fixed portion is kept as opaque trailing bytes.
"""

import logging
import struct
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import List

from .attributes import TD_ATTRIBUTES_SIZE, TdAttributes, decompose
from .types import (
    BodySizeMismatchError,
    TruncatedInputError,
    UnrecognizedTeeTypeError,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

# Quote structure sizes
HEADER_SIZE = 0x30  # 48 bytes
BODY_PREFIX_SIZE = 0x06  # 2 bytes body type + 4 bytes size
TD_QUOTE_BODY_SIZE = 0x288  # 648 bytes
QUOTE_FIXED_SIZE = HEADER_SIZE + BODY_PREFIX_SIZE + TD_QUOTE_BODY_SIZE  # 702 bytes

# Header field sizes
RESERVED_SIZE = 0x02  # 2 bytes each
QE_VENDOR_ID_SIZE = 0x10  # 16 bytes
USER_DATA_SIZE = 0x14  # 20 bytes

# Body field sizes
TEE_TCB_SVN_SIZE = 0x10  # 16 bytes
MR_SEAM_SIZE = 0x30  # 48 bytes
MR_SIGNER_SEAM_SIZE = 0x30  # 48 bytes
SEAM_ATTRIBUTES_SIZE = 0x08  # 8 bytes
XFAM_SIZE = 0x08  # 8 bytes
MR_TD_SIZE = 0x30  # 48 bytes
MR_CONFIG_ID_SIZE = 0x30  # 48 bytes
MR_OWNER_SIZE = 0x30  # 48 bytes
MR_OWNER_CONFIG_SIZE = 0x30  # 48 bytes
RTMR_SIZE = 0x30  # 48 bytes
REPORT_DATA_SIZE = 0x40  # 64 bytes
MR_SERVICE_TD_SIZE = 0x30  # 48 bytes

# Field offsets (relative to quote start)
HEADER_TEE_TYPE_START = 0x04
BODY_TYPE_START = HEADER_SIZE  # 0x30
BODY_SIZE_START = BODY_TYPE_START + 0x02  # 0x32
TD_QUOTE_BODY_START = BODY_TYPE_START + BODY_PREFIX_SIZE  # 0x36

# Intel QE Vendor ID: 939a7233-f79c-4ca9-940a-0db3957f0607
INTEL_QE_VENDOR_ID = bytes.fromhex("939a7233f79c4ca9940a0db3957f0607")


class TeeType(int, Enum):
    """TEE type discriminator in the quote header"""
    SGX = 0x00000000
    TDX = 0x00000081


# TD quote body layout, in wire order: (field name, size)
TD_QUOTE_BODY_FIELDS = (
    ("tee_tcb_svn", TEE_TCB_SVN_SIZE),
    ("mr_seam", MR_SEAM_SIZE),
    ("mr_signer_seam", MR_SIGNER_SEAM_SIZE),
    ("seam_attributes", SEAM_ATTRIBUTES_SIZE),
    ("td_attributes", TD_ATTRIBUTES_SIZE),
    ("xfam", XFAM_SIZE),
    ("mr_td", MR_TD_SIZE),
    ("mr_config_id", MR_CONFIG_ID_SIZE),
    ("mr_owner", MR_OWNER_SIZE),
    ("mr_owner_config", MR_OWNER_CONFIG_SIZE),
    ("rtmr0", RTMR_SIZE),
    ("rtmr1", RTMR_SIZE),
    ("rtmr2", RTMR_SIZE),
    ("rtmr3", RTMR_SIZE),
    ("report_data", REPORT_DATA_SIZE),
    ("tee_tcb_svn_2", TEE_TCB_SVN_SIZE),
    ("mr_service_td", MR_SERVICE_TD_SIZE),
)


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class QuoteHeader:
    """
    Quote header (48 bytes).

    Contains quote metadata including version, attestation key type,
    TEE type, and vendor information.
    """
    version: int  # 2 bytes
    attestation_key_type: int  # 2 bytes
    tee_type: TeeType  # 4 bytes - SGX (0x00) or TDX (0x81)
    reserved1: bytes  # 2 bytes
    reserved2: bytes  # 2 bytes
    qe_vendor_id: bytes  # 16 bytes - Intel: 939a7233-f79c-4ca9-940a-0db3957f0607
    user_data: bytes  # 20 bytes - Custom data from QE

    @property
    def qe_vendor_uuid(self) -> uuid.UUID:
        """The QE vendor ID as a UUID."""
        return uuid.UUID(bytes=self.qe_vendor_id)

    def __str__(self) -> str:
        return (
            f"QuoteHeader(version={self.version}, "
            f"ak_type={self.attestation_key_type}, "
            f"tee_type={self.tee_type.name}, "
            f"qe_vendor_id={self.qe_vendor_uuid})"
        )


@dataclass(frozen=True)
class TdQuoteBody:
    """
    TD Quote Body (648 bytes).

    Contains the TD's measurements and report data. Every field is
    an opaque byte string copied verbatim from the quote.
    """
    tee_tcb_svn: bytes  # 16 bytes - TEE TCB Security Version Number
    mr_seam: bytes  # 48 bytes - Measurement of SEAM module
    mr_signer_seam: bytes  # 48 bytes - Signer of SEAM module
    seam_attributes: bytes  # 8 bytes
    td_attributes: bytes  # 8 bytes
    xfam: bytes  # 8 bytes - Extended feature mask
    mr_td: bytes  # 48 bytes - Measurement of TD (MRTD)
    mr_config_id: bytes  # 48 bytes
    mr_owner: bytes  # 48 bytes
    mr_owner_config: bytes  # 48 bytes
    rtmr0: bytes  # 48 bytes
    rtmr1: bytes  # 48 bytes
    rtmr2: bytes  # 48 bytes
    rtmr3: bytes  # 48 bytes
    report_data: bytes  # 64 bytes
    tee_tcb_svn_2: bytes  # 16 bytes
    mr_service_td: bytes  # 48 bytes - Service TD measurement

    @property
    def rtmrs(self) -> List[bytes]:
        return [self.rtmr0, self.rtmr1, self.rtmr2, self.rtmr3]

    @property
    def attributes(self) -> TdAttributes:
        """Decoded TD attributes."""
        return decompose(self.td_attributes)

    def get_measurements(self) -> List[bytes]:
        """Return the 5 TDX measurements: [MRTD, RTMR0, RTMR1, RTMR2, RTMR3]."""
        return [self.mr_td] + self.rtmrs

    def __str__(self) -> str:
        rtmr_lines = "".join(
            f"  rtmr{i}={rtmr.hex()},\n" for i, rtmr in enumerate(self.rtmrs)
        )
        return (
            f"TdQuoteBody(\n"
            f"  mr_td={self.mr_td.hex()},\n"
            f"{rtmr_lines}"
            f"  mr_seam={self.mr_seam.hex()},\n"
            f"  report_data={self.report_data.hex()}\n"
            f")"
        )


@dataclass(frozen=True)
class QuoteBody:
    """Body type and declared size followed by the TD quote body."""
    body_type: int  # 2 bytes
    size: int  # 4 bytes - declared size, advisory
    td_quote_body: TdQuoteBody


@dataclass(frozen=True)
class Quote:
    """
    Decoded attestation quote.

    Holds the fixed 702-byte portion. Anything after it (certification
    data) is kept verbatim in extra_bytes and never interpreted.
    """
    header: QuoteHeader
    body: QuoteBody
    extra_bytes: bytes = b""

    def __str__(self) -> str:
        return (
            f"Quote(\n"
            f"  header={self.header},\n"
            f"  body_type={self.body.body_type}, size={self.body.size},\n"
            f"  td_quote_body={self.body.td_quote_body},\n"
            f"  extra_bytes={len(self.extra_bytes)}\n"
            f")"
        )

    def get_measurements(self) -> List[bytes]:
        """Return the 5 TDX measurements: [MRTD, RTMR0, RTMR1, RTMR2, RTMR3]."""
        return self.body.td_quote_body.get_measurements()

    def get_report_data(self) -> bytes:
        """Return the 64-byte report data."""
        return self.body.td_quote_body.report_data


# =============================================================================
# Parsing Functions
# =============================================================================

class _Cursor:
    """Forward-only reader over a byte buffer."""

    def __init__(self, data: bytes):
        self._data = data
        self.offset = 0

    def read(self, size: int) -> bytes:
        available = len(self._data) - self.offset
        if available < size:
            raise TruncatedInputError(self.offset, size, max(available, 0))
        chunk = bytes(self._data[self.offset:self.offset + size])
        self.offset += size
        return chunk

    def read_u16(self) -> int:
        return struct.unpack("<H", self.read(2))[0]

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read(4))[0]

    def remaining(self) -> bytes:
        return bytes(self._data[self.offset:])


def _parse_tee_type(value: int) -> TeeType:
    try:
        return TeeType(value)
    except ValueError:
        raise UnrecognizedTeeTypeError(value, HEADER_TEE_TYPE_START) from None


def _parse_header(cursor: _Cursor) -> QuoteHeader:
    """
    Parse the 48-byte quote header.

    Raises:
        TruncatedInputError: If the header is incomplete
        UnrecognizedTeeTypeError: If the TEE type is not SGX or TDX
    """
    version = cursor.read_u16()
    attestation_key_type = cursor.read_u16()
    tee_type = _parse_tee_type(cursor.read_u32())

    return QuoteHeader(
        version=version,
        attestation_key_type=attestation_key_type,
        tee_type=tee_type,
        reserved1=cursor.read(RESERVED_SIZE),
        reserved2=cursor.read(RESERVED_SIZE),
        qe_vendor_id=cursor.read(QE_VENDOR_ID_SIZE),
        user_data=cursor.read(USER_DATA_SIZE),
    )


def _parse_td_quote_body(cursor: _Cursor) -> TdQuoteBody:
    """
    Parse the 648-byte TD quote body.

    Raises:
        TruncatedInputError: If the body is incomplete
    """
    fields = {name: cursor.read(size) for name, size in TD_QUOTE_BODY_FIELDS}
    return TdQuoteBody(**fields)


def _parse_body(cursor: _Cursor, strict: bool) -> QuoteBody:
    body_type = cursor.read_u16()
    size = cursor.read_u32()

    td_quote_body = _parse_td_quote_body(cursor)
    consumed = cursor.offset - TD_QUOTE_BODY_START

    if size != consumed:
        if strict:
            raise BodySizeMismatchError(size, consumed, BODY_SIZE_START)
        logger.warning(
            "Declared body size %d differs from the %d bytes read, size field ignored",
            size, consumed,
        )

    return QuoteBody(
        body_type=body_type,
        size=size,
        td_quote_body=td_quote_body,
    )


def decode(data: bytes, strict: bool = False) -> Quote:
    """
    Decode an attestation quote from raw bytes.

    Fields are read strictly in wire order from offset 0. Integers are
    little-endian; every other field is copied verbatim.

    Args:
        data: Raw quote bytes
        strict: Reject quotes whose declared body size differs from the
            number of body bytes read

    Returns:
        Decoded Quote

    Raises:
        TruncatedInputError: If fewer than 702 bytes are available
        UnrecognizedTeeTypeError: If the TEE type is not SGX or TDX
        BodySizeMismatchError: In strict mode, if the declared size is wrong

    Example:
        >>> with open("quote.dat", "rb") as f:
        ...     quote = decode(f.read())
        >>> quote.body.td_quote_body.attributes.debug
        False
    """
    if len(data) < QUOTE_FIXED_SIZE:
        raise TruncatedInputError(0, QUOTE_FIXED_SIZE, len(data))

    cursor = _Cursor(data)
    header = _parse_header(cursor)
    body = _parse_body(cursor, strict)
    extra_bytes = cursor.remaining()

    logger.debug(
        "Decoded %s quote v%d: %d bytes fixed, %d trailing",
        header.tee_type.name, header.version, cursor.offset, len(extra_bytes),
    )

    return Quote(header=header, body=body, extra_bytes=extra_bytes)


parse_quote = decode
