from __future__ import annotations
import operator
import struct
from dataclasses import dataclass
from typing import Dict, Tuple, Union

from .byteorder import ByteOrder

Value = Union[int, float, str]
BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class Primitive:
    name: str
    width: int          # bytes on the medium
    signed: bool = False
    kind: str = "int"   # "int" | "float" | "char"


BYTE           = Primitive("byte",           1, signed=True)
UNSIGNED_BYTE  = Primitive("unsigned_byte",  1)
CHAR           = Primitive("char",           2, kind="char")   # one UTF-16 code unit
SHORT          = Primitive("short",          2, signed=True)
UNSIGNED_SHORT = Primitive("unsigned_short", 2)
INT            = Primitive("int",            4, signed=True)
UNSIGNED_INT   = Primitive("unsigned_int",   4)
LONG           = Primitive("long",           8, signed=True)
UNSIGNED_LONG  = Primitive("unsigned_long",  8)
FLOAT          = Primitive("float",          4, kind="float")
DOUBLE         = Primitive("double",         8, kind="float")

PRIMITIVES: Tuple[Primitive, ...] = (
    BYTE, UNSIGNED_BYTE, CHAR, SHORT, UNSIGNED_SHORT, INT, UNSIGNED_INT,
    LONG, UNSIGNED_LONG, FLOAT, DOUBLE,
)

_BY_NAME: Dict[str, Primitive] = {p.name: p for p in PRIMITIVES}


def primitive_named(name: str) -> Primitive:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(f"unknown primitive {name!r}; expected one of {sorted(_BY_NAME)}") from None


# ---- integers ----

def decode_int(data: BytesLike, order: ByteOrder, *, signed: bool = False) -> int:
    """Compose ``data`` into an integer, most significant byte first for
    big-endian, least significant first for little-endian."""
    return int.from_bytes(bytes(data), ByteOrder(order).value, signed=signed)


def encode_int(value: int, width: int, order: ByteOrder, *, signed: bool = False) -> bytes:
    """Inverse of :func:`decode_int`. Raises OverflowError if ``value`` does not fit."""
    return operator.index(value).to_bytes(width, ByteOrder(order).value, signed=signed)


# ---- IEEE-754 reinterpretation (bit pattern, not numeric conversion) ----

def int_bits_to_float(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits & 0xFFFFFFFF))[0]

def float_to_int_bits(value: float) -> int:
    return struct.unpack("<I", struct.pack("<f", value))[0]

def long_bits_to_double(bits: int) -> float:
    return struct.unpack("<d", struct.pack("<Q", bits & 0xFFFFFFFFFFFFFFFF))[0]

def double_to_long_bits(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


# ---- dispatch ----

def decode(primitive: Primitive, data: BytesLike, order: ByteOrder) -> Value:
    if len(data) != primitive.width:
        raise ValueError(f"{primitive.name} needs {primitive.width} bytes, got {len(data)}")
    if primitive.kind == "float":
        bits = decode_int(data, order)
        return int_bits_to_float(bits) if primitive.width == 4 else long_bits_to_double(bits)
    if primitive.kind == "char":
        return chr(decode_int(data, order))
    return decode_int(data, order, signed=primitive.signed)


def encode(primitive: Primitive, value: Value, order: ByteOrder) -> bytes:
    if primitive.kind == "float":
        bits = float_to_int_bits(value) if primitive.width == 4 else double_to_long_bits(value)
        return encode_int(bits, primitive.width, order)
    if primitive.kind == "char":
        return encode_int(ord(value), primitive.width, order)
    return encode_int(value, primitive.width, order, signed=primitive.signed)
