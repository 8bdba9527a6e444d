from __future__ import annotations
import sys
from enum import Enum


class ByteOrder(str, Enum):
    """Byte order of a multi-byte primitive.

    Values are the strings ``int.from_bytes`` / ``int.to_bytes`` accept.
    """
    BIG_ENDIAN = "big"
    LITTLE_ENDIAN = "little"

    @classmethod
    def native(cls) -> "ByteOrder":
        return cls(sys.byteorder)


DEFAULT_BYTE_ORDER = ByteOrder.LITTLE_ENDIAN
