from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from .codecs.byteorder import ByteOrder, DEFAULT_BYTE_ORDER
from .codecs import primitive as prim
from .codecs.primitive import Primitive, Value
from .errors import EndOfData, InvalidPosition, MediumFailure

log = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class RandomAccessBinaryEditor:
    """
    Unbuffered primitive reads and writes over a seekable binary medium.

    The editor owns ``medium`` until :meth:`close`. Every multi-byte read is
    all-or-nothing with respect to the position, and every ``peek_*`` leaves
    the position where it was, whether the read succeeds or not.
    """

    def __init__(self, medium: BinaryIO, byte_order: ByteOrder = DEFAULT_BYTE_ORDER):
        seekable = getattr(medium, "seekable", None)
        if seekable is None or not seekable():
            raise MediumFailure("medium is not seekable", context={"medium": type(medium).__name__})
        self._medium = medium
        self._byte_order = ByteOrder(byte_order)
        self._closed = False

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        byte_order: ByteOrder = DEFAULT_BYTE_ORDER,
        *,
        read_only: bool = False,
    ) -> "RandomAccessBinaryEditor":
        """Open ``path`` for editing, creating it when missing unless ``read_only``."""
        order = ByteOrder(byte_order)
        p = Path(path)
        if read_only:
            fh = p.open("rb", buffering=0)
        else:
            if not p.exists():
                p.touch()
            fh = p.open("r+b", buffering=0)
        log.debug("opened %s (%s, read_only=%s)", p, order.value, read_only)
        try:
            return cls(fh, order)
        except BaseException:
            fh.close()
            raise

    # ---- lifecycle ----

    @property
    def byte_order(self) -> ByteOrder:
        return self._byte_order

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        log.debug("closing %r", self._medium)
        self._medium.close()

    def flush(self) -> None:
        self._io().flush()

    def __enter__(self) -> "RandomAccessBinaryEditor":
        self._io()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"pos={self._medium.tell()}"
        return f"<{type(self).__name__} {self._byte_order.value}-endian {state}>"

    def _io(self) -> BinaryIO:
        if self._closed:
            raise MediumFailure("editor is closed")
        return self._medium

    # ---- position ----

    def tell(self) -> int:
        return self._io().tell()

    def seek(self, pos: int) -> None:
        if pos < 0:
            log.debug("rejected seek to %d", pos)
            raise InvalidPosition("cannot seek to a negative position", context={"pos": pos})
        self._io().seek(pos, io.SEEK_SET)

    def skip(self, n: int) -> None:
        self.seek(self.tell() + n)

    def length(self) -> int:
        """Current length of the medium in bytes."""
        medium = self._io()
        pos = medium.tell()
        try:
            return medium.seek(0, io.SEEK_END)
        finally:
            medium.seek(pos, io.SEEK_SET)

    def remaining(self) -> int:
        return self.length() - self.tell()

    def has_remaining(self) -> bool:
        return self.tell() < self.length()

    @contextmanager
    def preserving_position(self) -> Iterator[int]:
        """Yield the current position and restore it on every exit path."""
        pos = self.tell()
        try:
            yield pos
        finally:
            self._io().seek(pos, io.SEEK_SET)

    # ---- raw reads ----

    def _take(self, n: int) -> bytes:
        medium = self._io()
        start = medium.tell()
        data = medium.read(n)
        if data is None or len(data) < n:
            got = len(data or b"")
            medium.seek(start, io.SEEK_SET)
            log.debug("short read at %d: wanted %d, got %d", start, n, got)
            raise EndOfData("not enough bytes remaining", context={"pos": start, "needed": n, "available": got})
        return data

    def read(self) -> int:
        """Read the next byte as an unsigned value 0..255."""
        return self._take(1)[0]

    def read_into(self, buffer, offset: int = 0, length: Optional[int] = None) -> int:
        """
        Read up to ``length`` bytes into ``buffer[offset:offset + length]``.

        Returns the number of bytes transferred, which may be fewer than asked
        for near the end of the medium. Raises EndOfData only when nothing at
        all is available for a non-empty request. Use :meth:`read_fully` when
        a short transfer is an error.
        """
        view = memoryview(buffer).cast("B")
        if length is None:
            length = len(view) - offset
        if offset < 0 or length < 0 or offset + length > len(view):
            raise ValueError(f"offset={offset}, length={length} out of range for buffer of {len(view)}")
        if length == 0:
            return 0
        medium = self._io()
        start = medium.tell()
        data = medium.read(length)
        if not data:
            raise EndOfData("no bytes remaining", context={"pos": start, "needed": length, "available": 0})
        view[offset:offset + len(data)] = data
        return len(data)

    def read_fully(self, n: int) -> bytes:
        """Read exactly ``n`` bytes or raise EndOfData without moving."""
        if n < 0:
            raise ValueError("n must be non-negative")
        return self._take(n) if n else b""

    # ---- primitive reads ----

    def read_primitive(self, primitive: Primitive) -> Value:
        return prim.decode(primitive, self._take(primitive.width), self._byte_order)

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

    # ---- peeks (read, then restore position) ----

    def peek(self) -> int:
        with self.preserving_position():
            return self.read()

    def peek_primitive(self, primitive: Primitive) -> Value:
        with self.preserving_position():
            return self.read_primitive(primitive)

    def peek_byte(self) -> int:            return self.peek_primitive(prim.BYTE)
    def peek_unsigned_byte(self) -> int:   return self.peek_primitive(prim.UNSIGNED_BYTE)
    def peek_char(self) -> str:            return self.peek_primitive(prim.CHAR)
    def peek_short(self) -> int:           return self.peek_primitive(prim.SHORT)
    def peek_unsigned_short(self) -> int:  return self.peek_primitive(prim.UNSIGNED_SHORT)
    def peek_int(self) -> int:             return self.peek_primitive(prim.INT)
    def peek_unsigned_int(self) -> int:    return self.peek_primitive(prim.UNSIGNED_INT)
    def peek_long(self) -> int:            return self.peek_primitive(prim.LONG)
    def peek_unsigned_long(self) -> int:   return self.peek_primitive(prim.UNSIGNED_LONG)
    def peek_float(self) -> float:         return self.peek_primitive(prim.FLOAT)
    def peek_double(self) -> float:        return self.peek_primitive(prim.DOUBLE)

    # ---- writes ----

    def _put(self, data: BytesLike) -> None:
        medium = self._io()
        start = medium.tell()
        written = medium.write(data)
        # raw (unbuffered) files may accept fewer bytes than offered
        if written is not None and written < len(data):
            medium.seek(start, io.SEEK_SET)
            raise MediumFailure("short write", context={"pos": start, "wanted": len(data), "written": written})

    def write(self, data: Union[int, BytesLike], offset: int = 0, length: Optional[int] = None) -> None:
        """
        Write one byte (an int, -128..255) or ``data[offset:offset + length]``
        at the current position, extending the medium as needed.
        """
        if isinstance(data, int):
            if not -0x80 <= data <= 0xFF:
                raise OverflowError(f"byte value {data} out of range")
            self._put(bytes((data & 0xFF,)))
            return
        view = memoryview(data).cast("B")
        if length is None:
            length = len(view) - offset
        if offset < 0 or length < 0 or offset + length > len(view):
            raise ValueError(f"offset={offset}, length={length} out of range for data of {len(view)}")
        if length:
            self._put(view[offset:offset + length])

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
