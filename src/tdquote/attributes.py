"""
TD attributes bit decomposition.

The 8-byte TD_ATTRIBUTES field of the TD quote body is a little-endian
64-bit word split into three groups:

    TUD   (bits 0-7)   debug and reserved bits
    SEC   (bits 8-31)  security feature bits
    OTHER (bits 32-63) other feature bits

Each named range is described by a single table entry so that the
display code never shifts bits itself. Bits 28 and 29 have no entry.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

TD_ATTRIBUTES_SIZE = 0x08  # 8 bytes

# =============================================================================
# Bit layout
# =============================================================================

GROUP_TUD = "TUD"
GROUP_SEC = "SEC"
GROUP_OTHER = "OTHER"

ATTRIBUTE_GROUPS = (GROUP_TUD, GROUP_SEC, GROUP_OTHER)


@dataclass(frozen=True)
class AttributeField:
    """A named bit range of the TD attributes word."""
    group: str
    name: str
    attr: str  # TdAttributes field holding the value
    bit: int  # absolute bit offset in the 64-bit word
    width: int

    @property
    def mask(self) -> int:
        return (1 << self.width) - 1

    def extract(self, word: int) -> Union[bool, int]:
        value = (word >> self.bit) & self.mask
        if self.width == 1:
            return bool(value)
        return value


TD_ATTRIBUTE_FIELDS = (
    AttributeField(GROUP_TUD, "DEBUG", "debug", 0, 1),
    AttributeField(GROUP_TUD, "RESERVED", "tud_reserved", 1, 7),
    AttributeField(GROUP_SEC, "RESERVED", "sec_reserved", 8, 19),
    AttributeField(GROUP_SEC, "SEPT_VE_DISABLE", "sept_ve_disable", 27, 1),
    AttributeField(GROUP_SEC, "PKS", "pks", 30, 1),
    AttributeField(GROUP_SEC, "KL", "kl", 31, 1),
    AttributeField(GROUP_OTHER, "RESERVED", "other_reserved", 32, 31),
    AttributeField(GROUP_OTHER, "PERFMON", "perfmon", 63, 1),
)


# =============================================================================
# Decoded view
# =============================================================================

@dataclass(frozen=True)
class TdAttributes:
    """
    Decoded view over the raw TD attributes.

    Reserved ranges are kept as integers so unexpected bits stay visible.
    """
    raw: bytes
    debug: bool
    tud_reserved: int
    sec_reserved: int
    sept_ve_disable: bool
    pks: bool
    kl: bool
    other_reserved: int
    perfmon: bool

    @property
    def value(self) -> int:
        """The attributes as a little-endian 64-bit integer."""
        return int.from_bytes(self.raw, "little")

    def groups(self) -> List[Tuple[str, List[Tuple[str, Union[bool, int]]]]]:
        """Return [(group, [(name, value), ...]), ...] in bit order."""
        result = []
        for group in ATTRIBUTE_GROUPS:
            fields = [
                (f.name, getattr(self, f.attr))
                for f in TD_ATTRIBUTE_FIELDS
                if f.group == group
            ]
            result.append((group, fields))
        return result

    def __str__(self) -> str:
        parts = []
        for group, fields in self.groups():
            inner = ", ".join(f"{name}={value}" for name, value in fields)
            parts.append(f"{group}({inner})")
        return f"TdAttributes({self.raw.hex()}: {' '.join(parts)})"


def decompose(attr: bytes) -> TdAttributes:
    """
    Decompose the 8-byte TD attributes into named flags.

    Every bit pattern decodes; only the length is checked.

    Args:
        attr: Raw TD_ATTRIBUTES bytes from the TD quote body

    Returns:
        Decoded TdAttributes

    Raises:
        ValueError: If attr is not exactly 8 bytes
    """
    if len(attr) != TD_ATTRIBUTES_SIZE:
        raise ValueError(
            f"TD attributes must be {TD_ATTRIBUTES_SIZE} bytes, got {len(attr)}"
        )

    word = int.from_bytes(attr, "little")
    values = {f.attr: f.extract(word) for f in TD_ATTRIBUTE_FIELDS}
    return TdAttributes(raw=bytes(attr), **values)
