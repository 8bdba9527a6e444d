import math
import struct

import pytest

from streamedit.binary.codecs import primitive as prim
from streamedit.binary.codecs.byteorder import ByteOrder
from streamedit.binary.codecs.primitive import (
    decode, decode_int, encode, encode_int,
    float_to_int_bits, int_bits_to_float, double_to_long_bits, long_bits_to_double,
)

BE, LE = ByteOrder.BIG_ENDIAN, ByteOrder.LITTLE_ENDIAN


def test_endianness_of_two_bytes():
    assert decode_int(b"\x01\x02", BE) == 0x0102 == 258
    assert decode_int(b"\x01\x02", LE) == 0x0201 == 513
    assert decode(prim.SHORT, b"\x01\x02", BE) == 258
    assert decode(prim.SHORT, b"\x01\x02", LE) == 513


def test_byte_order_defaults_and_values():
    assert ByteOrder("big") is BE
    assert ByteOrder("little") is LE
    assert ByteOrder.native() in (BE, LE)


def test_unsigned_decodes_zero_extend():
    assert decode(prim.BYTE, b"\xff", BE) == -1
    assert decode(prim.UNSIGNED_BYTE, b"\xff", BE) == 255
    assert decode(prim.SHORT, b"\xff\xfe", LE) == -257
    assert decode(prim.UNSIGNED_SHORT, b"\xff\xfe", LE) == 0xFEFF
    assert decode(prim.UNSIGNED_INT, b"\xff\xff\xff\xff", BE) == 0xFFFFFFFF
    assert decode(prim.UNSIGNED_LONG, b"\x80" + b"\x00" * 7, BE) == 1 << 63


def test_encode_int_places_most_significant_byte_first_for_big_endian():
    assert encode(prim.INT, 0x11223344, BE) == b"\x11\x22\x33\x44"
    assert encode(prim.INT, 0x11223344, LE) == b"\x44\x33\x22\x11"
    assert encode(prim.LONG, -2, BE) == b"\xff" * 7 + b"\xfe"
    assert encode_int(0xABCD, 2, LE) == b"\xcd\xab"


BOUNDARIES = [
    (prim.BYTE, [-128, -1, 0, 127]),
    (prim.UNSIGNED_BYTE, [0, 1, 255]),
    (prim.SHORT, [-(1 << 15), -1, 0, (1 << 15) - 1]),
    (prim.UNSIGNED_SHORT, [0, 0xFFFF]),
    (prim.INT, [-(1 << 31), -1, 0, (1 << 31) - 1]),
    (prim.UNSIGNED_INT, [0, 0xFFFFFFFF]),
    (prim.LONG, [-(1 << 63), -1, 0, (1 << 63) - 1]),
    (prim.UNSIGNED_LONG, [0, (1 << 64) - 1]),
    (prim.CHAR, ["\x00", "A", "\u00e9", "\uffff"]),
]


@pytest.mark.parametrize("order", [BE, LE])
@pytest.mark.parametrize("p,values", BOUNDARIES, ids=[b[0].name for b in BOUNDARIES])
def test_boundary_values_round_trip(p, values, order):
    for v in values:
        data = encode(p, v, order)
        assert len(data) == p.width
        assert decode(p, data, order) == v


FLOAT_BITS = [0x00000000, 0x80000000, 0x3F800000, 0xBF800000, 0x7F7FFFFF,
              0x00000001, 0x7F800000, 0xFF800000, 0x7FC00000]
DOUBLE_BITS = [0x0, 0x8000000000000000, 0x3FF0000000000000, 0xBFF0000000000000,
               0x7FEFFFFFFFFFFFFF, 0x1, 0x7FF0000000000000, 0xFFF0000000000000,
               0x7FF8000000000000]


@pytest.mark.parametrize("order", [BE, LE])
def test_floating_round_trip_is_bit_exact(order):
    for bits in FLOAT_BITS:
        data = encode_int(bits, 4, order)
        v = decode(prim.FLOAT, data, order)
        assert encode(prim.FLOAT, v, order) == data
    for bits in DOUBLE_BITS:
        data = encode_int(bits, 8, order)
        v = decode(prim.DOUBLE, data, order)
        assert encode(prim.DOUBLE, v, order) == data


def test_floating_reuses_integer_bit_pattern():
    assert float_to_int_bits(3.14) == 0x4048F5C3
    assert encode(prim.FLOAT, 3.14, BE) == b"\x40\x48\xf5\xc3"
    assert encode(prim.FLOAT, 3.14, LE) == b"\xc3\xf5\x48\x40"
    assert double_to_long_bits(1.0) == 0x3FF0000000000000
    assert long_bits_to_double(0x3FF0000000000000) == 1.0
    assert math.isnan(int_bits_to_float(0x7FC00000))
    assert int_bits_to_float(0xFF800000) == -math.inf
    # -0.0 keeps its sign bit
    assert encode(prim.DOUBLE, -0.0, BE) == b"\x80" + b"\x00" * 7


def test_float_decode_matches_struct():
    data = struct.pack(">f", 1.5)
    assert decode(prim.FLOAT, data, BE) == 1.5
    data = struct.pack("<d", -2.25)
    assert decode(prim.DOUBLE, data, LE) == -2.25


def test_out_of_range_values_are_rejected():
    with pytest.raises(OverflowError):
        encode(prim.SHORT, 1 << 15, BE)
    with pytest.raises(OverflowError):
        encode(prim.UNSIGNED_BYTE, -1, LE)
    with pytest.raises(OverflowError):
        encode(prim.CHAR, "\U0001F600", BE)
    with pytest.raises(OverflowError):
        encode(prim.FLOAT, 1e40, BE)
    with pytest.raises(TypeError):
        encode(prim.INT, 1.5, BE)


def test_decode_requires_exact_width():
    with pytest.raises(ValueError):
        decode(prim.INT, b"\x00\x01", BE)
    with pytest.raises(ValueError):
        decode(prim.SHORT, b"\x00\x01\x02", LE)


def test_primitive_lookup_by_name():
    assert prim.primitive_named("unsigned_short") is prim.UNSIGNED_SHORT
    assert [p.width for p in prim.PRIMITIVES] == [1, 1, 2, 2, 2, 4, 4, 8, 8, 4, 8]
    with pytest.raises(KeyError):
        prim.primitive_named("quad")
