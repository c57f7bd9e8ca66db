"""
Machine-readable serialization of a decoded quote.

Byte fields become lowercase hex strings; integers stay integers.
"""

import json
from dataclasses import fields
from typing import Any, Dict

from .abi import Quote
from .attributes import TdAttributes


def attributes_to_dict(attributes: TdAttributes) -> Dict[str, Any]:
    result: Dict[str, Any] = {"raw": attributes.raw.hex()}
    for group, values in attributes.groups():
        result[group] = {name: value for name, value in values}
    return result


def quote_to_dict(quote: Quote) -> Dict[str, Any]:
    """Convert a decoded quote to plain JSON-compatible types."""
    header = quote.header
    td = quote.body.td_quote_body

    td_dict = {f.name: getattr(td, f.name).hex() for f in fields(td)}
    td_dict["td_attributes_decoded"] = attributes_to_dict(td.attributes)

    return {
        "header": {
            "version": header.version,
            "attestation_key_type": header.attestation_key_type,
            "tee_type": header.tee_type.name,
            "reserved1": header.reserved1.hex(),
            "reserved2": header.reserved2.hex(),
            "qe_vendor_id": str(header.qe_vendor_uuid),
            "user_data": header.user_data.hex(),
        },
        "body": {
            "body_type": quote.body.body_type,
            "size": quote.body.size,
            "td_quote_body": td_dict,
        },
        "extra_bytes": len(quote.extra_bytes),
    }


def quote_to_json(quote: Quote, indent: int = 2) -> str:
    return json.dumps(quote_to_dict(quote), indent=indent)
