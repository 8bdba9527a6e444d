from __future__ import annotations

import logging
from typing import BinaryIO

from .codecs.byteorder import ByteOrder, DEFAULT_BYTE_ORDER
from .codecs import primitive as prim
from .codecs.primitive import Primitive, Value
from .errors import EndOfData

log = logging.getLogger(__name__)


class OrderedReader:
    """
    Sequential primitive decoding from a forward-only byte source.

    Multi-byte values are assembled one source byte at a time and composed by
    the codec in the reader's byte order. The source cannot seek, so bytes
    consumed before an EndOfData are gone.
    """

    def __init__(self, source: BinaryIO, byte_order: ByteOrder = DEFAULT_BYTE_ORDER):
        self._source = source
        self._byte_order = ByteOrder(byte_order)

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    def close(self) -> None:
        self._source.close()

    def __enter__(self) -> "OrderedReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def read(self, size: int = -1) -> bytes:
        """Raw passthrough to the source; order does not apply."""
        return self._source.read(size)

    def _next(self, consumed: int, needed: int) -> int:
        b = self._source.read(1)
        if not b:
            log.debug("source exhausted after %d of %d bytes", consumed, needed)
            raise EndOfData("source exhausted", context={"needed": needed, "consumed": consumed})
        return b[0]

    def _gather(self, n: int) -> bytes:
        out = bytearray()
        for i in range(n):
            out.append(self._next(i, n))
        return bytes(out)

    def skip(self, n: int) -> None:
        """Consume and discard ``n`` bytes."""
        if n < 0:
            raise ValueError("cannot skip backwards on a forward-only source")
        self._gather(n)

    def read_primitive(self, primitive: Primitive) -> Value:
        return prim.decode(primitive, self._gather(primitive.width), self._byte_order)

    def read_byte(self) -> int:            return self.read_primitive(prim.BYTE)
    def read_unsigned_byte(self) -> int:   return self.read_primitive(prim.UNSIGNED_BYTE)
    def read_char(self) -> str:            return self.read_primitive(prim.CHAR)
    def read_short(self) -> int:           return self.read_primitive(prim.SHORT)
    def read_unsigned_short(self) -> int:  return self.read_primitive(prim.UNSIGNED_SHORT)
    def read_int(self) -> int:             return self.read_primitive(prim.INT)
    def read_unsigned_int(self) -> int:    return self.read_primitive(prim.UNSIGNED_INT)
    def read_long(self) -> int:            return self.read_primitive(prim.LONG)
    def read_unsigned_long(self) -> int:   return self.read_primitive(prim.UNSIGNED_LONG)
    def read_float(self) -> float:         return self.read_primitive(prim.FLOAT)
    def read_double(self) -> float:        return self.read_primitive(prim.DOUBLE)
