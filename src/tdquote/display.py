"""
Human-readable rendering of a decoded quote.
"""

from typing import List

from .abi import INTEL_QE_VENDOR_ID, Quote
from .attributes import TdAttributes

# Display label and TdQuoteBody field, in print order
_BODY_LABELS = (
    ("TEE TCB SVN", "tee_tcb_svn"),
    ("MRSEAM", "mr_seam"),
    ("MRSIGNERSEAM", "mr_signer_seam"),
    ("Seam Attributes", "seam_attributes"),
    ("TD Attributes", "td_attributes"),
    ("XFAM", "xfam"),
    ("MRTD", "mr_td"),
    ("MRCONFIGID", "mr_config_id"),
    ("MROWNER", "mr_owner"),
    ("MROWNERCONFIG", "mr_owner_config"),
    ("RTMR0", "rtmr0"),
    ("RTMR1", "rtmr1"),
    ("RTMR2", "rtmr2"),
    ("RTMR3", "rtmr3"),
    ("Report Data", "report_data"),
    ("TEE TCB SVN 2", "tee_tcb_svn_2"),
    ("MRSERVICETD", "mr_service_td"),
)


def format_attributes(attributes: TdAttributes, indent: str = "    ") -> List[str]:
    """Render the attribute groups as nested, indented lines."""
    lines = []
    for group, fields in attributes.groups():
        lines.append(f"{indent}{group}:")
        for name, value in fields:
            lines.append(f"{indent}  {name}: {value}")
    return lines


def format_quote(quote: Quote) -> str:
    """Render a decoded quote as the text printed by the CLI."""
    header = quote.header
    body = quote.body
    td = body.td_quote_body
    vendor = " (Intel)" if header.qe_vendor_id == INTEL_QE_VENDOR_ID else ""

    lines = [
        "Quote Header:",
        f"  Version: {header.version}",
        f"  Attestation Key Type: {header.attestation_key_type}",
        f"  TEE Type: {header.tee_type.name}",
        f"  Reserved 1: {header.reserved1.hex()}",
        f"  Reserved 2: {header.reserved2.hex()}",
        f"  QE Vendor ID: {header.qe_vendor_uuid}{vendor}",
        f"  User Data: {header.user_data.hex()}",
        "Quote Body:",
        f"  TD Quote Body Type: {body.body_type}",
        f"  Size: {body.size}",
    ]
    for label, name in _BODY_LABELS:
        lines.append(f"  {label}: {getattr(td, name).hex()}")
        if name == "td_attributes":
            lines.extend(format_attributes(td.attributes))

    if quote.extra_bytes:
        lines.append(f"Trailing Data: {len(quote.extra_bytes)} bytes (not decoded)")

    return "\n".join(lines)
