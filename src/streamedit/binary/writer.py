from __future__ import annotations

import logging
from typing import BinaryIO, Union

from .codecs.byteorder import ByteOrder, DEFAULT_BYTE_ORDER
from .codecs import primitive as prim
from .codecs.primitive import Primitive, Value
from .errors import MediumFailure

log = logging.getLogger(__name__)


class OrderedWriter:
    """Sequential primitive encoding to a forward-only byte sink.

    Each primitive goes out as one contiguous block. A sink that accepts part
    of a block is handed the rest until it is all written. Flushing and
    closing are the sink's own.
    """

    def __init__(self, sink: BinaryIO, byte_order: ByteOrder = DEFAULT_BYTE_ORDER):
        self._sink = sink
        self._byte_order = ByteOrder(byte_order)

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    def flush(self) -> None:
        self._sink.flush()

    def close(self) -> None:
        self._sink.close()

    def __enter__(self) -> "OrderedWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def write(self, data: Union[bytes, bytearray, memoryview]) -> None:
        """Raw passthrough to the sink; order does not apply."""
        self._put(data)

    def _put(self, data: Union[bytes, bytearray, memoryview]) -> None:
        view = memoryview(data).cast("B")
        done = 0
        while done < len(view):
            written = self._sink.write(view[done:])
            if written is None:
                # buffered sinks return nothing and take the whole block
                return
            if written <= 0:
                log.debug("sink stalled after %d of %d bytes", done, len(view))
                raise MediumFailure("short write", context={"wanted": len(view), "written": done})
            done += written

    def write_primitive(self, primitive: Primitive, value: Value) -> None:
        self._put(prim.encode(primitive, value, self._byte_order))

    def write_byte(self, v: int) -> None:            self.write_primitive(prim.BYTE, v)
    def write_unsigned_byte(self, v: int) -> None:   self.write_primitive(prim.UNSIGNED_BYTE, v)
    def write_char(self, v: str) -> None:            self.write_primitive(prim.CHAR, v)
    def write_short(self, v: int) -> None:           self.write_primitive(prim.SHORT, v)
    def write_unsigned_short(self, v: int) -> None:  self.write_primitive(prim.UNSIGNED_SHORT, v)
    def write_int(self, v: int) -> None:             self.write_primitive(prim.INT, v)
    def write_unsigned_int(self, v: int) -> None:    self.write_primitive(prim.UNSIGNED_INT, v)
    def write_long(self, v: int) -> None:            self.write_primitive(prim.LONG, v)
    def write_unsigned_long(self, v: int) -> None:   self.write_primitive(prim.UNSIGNED_LONG, v)
    def write_float(self, v: float) -> None:         self.write_primitive(prim.FLOAT, v)
    def write_double(self, v: float) -> None:        self.write_primitive(prim.DOUBLE, v)
