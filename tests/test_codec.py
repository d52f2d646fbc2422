"""Tests for the primitive ZCL value codec."""

import math
import struct

import pytest

from zigattr.exceptions import (
    CodecError,
    MalformedData,
    OutOfRange,
    Truncated,
    UnknownType,
)
from zigattr.zcl import DataType, DataTypeId, Interpretation, codec


def test_decode_uint16():
    assert codec.decode_hex(DataTypeId.uint16, "E803") == 1000


def test_decode_int16_negative():
    assert codec.decode_hex(DataTypeId.int16, "FFFF") == -1


def test_decode_int8_sign_extension():
    assert codec.decode(DataTypeId.int8, b"\xec") == -20
    assert codec.decode(DataTypeId.int8, b"\x80") == -128
    assert codec.decode(DataTypeId.uint8, b"\xec") == 236


def test_decode_single():
    value = codec.decode(DataTypeId.single, struct.pack("<f", 230.5))
    assert isinstance(value, float)
    assert value == pytest.approx(230.5, abs=1e-5)


def test_decode_double():
    assert codec.decode(0x3A, struct.pack("<d", -0.1)) == -0.1


@pytest.mark.parametrize(
    ("data", "result"),
    [(b"\x00", False), (b"\x01", True), (b"\x02", True), (b"\xff", True)],
)
def test_decode_bool(data, result):
    assert codec.decode(DataTypeId.bool_, data) is result


def test_decode_raw():
    assert codec.decode(DataTypeId.data16, b"\x01\x02\x03") == b"\x01\x02"
    assert codec.decode(DataTypeId.data8, b"\xff") == b"\xff"


def test_decode_ignores_trailing_bytes():
    assert codec.decode(DataTypeId.uint16, b"\xe8\x03\xaa\xbb") == 1000


def test_decode_accepts_plain_int_type():
    assert codec.decode(0x21, b"\xe8\x03") == 1000
    assert codec.decode(0x25, b"\x01\x00\x00\x00\x00\x01") == 2**40 + 1


@pytest.mark.parametrize(
    ("type_id", "data"),
    [
        (DataTypeId.uint8, b""),
        (DataTypeId.uint16, b"\x01"),
        (DataTypeId.uint48, b"\x01\x02\x03\x04\x05"),
        (DataTypeId.single, b"\x00\x00\x00"),
        (DataTypeId.data32, b"abc"),
    ],
)
def test_decode_truncated(type_id, data):
    with pytest.raises(Truncated) as exc:
        codec.decode(type_id, data)

    assert exc.value.needed == DataType.from_type_id(type_id).size
    assert exc.value.available == len(data)


@pytest.mark.parametrize("type_id", [0x00, 0x99, 0x41, 0x42, 0xFF])
def test_decode_unknown_type(type_id):
    with pytest.raises(UnknownType) as exc:
        codec.decode(type_id, b"\x00" * 16)

    assert exc.value.code == type_id
    assert f"0x{type_id:02X}" in str(exc.value)


def test_decode_hex_malformed():
    with pytest.raises(MalformedData):
        codec.decode_hex(DataTypeId.uint16, "E8G3")

    with pytest.raises(MalformedData):
        codec.decode_hex(DataTypeId.uint16, "E80")


def test_codec_errors_are_value_errors():
    assert issubclass(CodecError, ValueError)

    for cls in (UnknownType, Truncated, OutOfRange, MalformedData):
        assert issubclass(cls, CodecError)


def test_encode_little_endian():
    assert codec.encode(DataTypeId.uint16, 1000) == b"\xe8\x03"
    assert codec.encode(DataTypeId.int16, -1) == b"\xff\xff"
    assert codec.encode(DataTypeId.uint24, 0x123456) == b"\x56\x34\x12"
    assert codec.encode_hex(DataTypeId.uint16, 1000) == "E803"


def test_encode_bool():
    assert codec.encode(DataTypeId.bool_, True) == b"\x01"
    assert codec.encode(DataTypeId.bool_, False) == b"\x00"
    assert codec.encode(DataTypeId.bool_, 1) == b"\x01"

    with pytest.raises(OutOfRange):
        codec.encode(DataTypeId.bool_, 2)


def test_encode_float():
    assert codec.encode(DataTypeId.single, 230.5) == struct.pack("<f", 230.5)
    assert codec.encode(DataTypeId.single, 100) == struct.pack("<f", 100)
    assert codec.encode(DataTypeId.double, 0.1) == struct.pack("<d", 0.1)

    with pytest.raises(OutOfRange):
        codec.encode(DataTypeId.single, 1e39)

    with pytest.raises(OutOfRange):
        codec.encode(DataTypeId.single, "1.0")


def test_encode_raw():
    assert codec.encode(DataTypeId.data16, b"\x01\x02") == b"\x01\x02"

    with pytest.raises(OutOfRange):
        codec.encode(DataTypeId.data16, b"\x01")

    with pytest.raises(OutOfRange):
        codec.encode(DataTypeId.data8, 1)


@pytest.mark.parametrize(
    ("type_id", "value"),
    [
        (DataTypeId.uint8, 256),
        (DataTypeId.uint8, -1),
        (DataTypeId.int8, 128),
        (DataTypeId.int8, -129),
        (DataTypeId.uint16, 0x10000),
        (DataTypeId.int16, 0x8000),
        (DataTypeId.uint48, 2**48),
        (DataTypeId.enum8, 0x100),
        (DataTypeId.map16, -1),
    ],
)
def test_encode_out_of_range(type_id, value):
    with pytest.raises(OutOfRange) as exc:
        codec.encode(type_id, value)

    assert exc.value.value == value


def test_encode_integral_float():
    assert codec.encode(DataTypeId.uint16, 1000.0) == b"\xe8\x03"

    with pytest.raises(OutOfRange):
        codec.encode(DataTypeId.uint16, 10.5)

    with pytest.raises(OutOfRange):
        codec.encode(DataTypeId.uint16, "10")


def test_encode_unknown_type():
    with pytest.raises(UnknownType):
        codec.encode(0x99, 0)


def _boundary_values(data_type):
    if data_type.interpretation is Interpretation.BOOLEAN:
        return [False, True]

    if data_type.interpretation is Interpretation.RAW:
        return [b"\x00" * data_type.size, bytes(range(data_type.size))]

    if data_type.interpretation is Interpretation.FLOAT:
        return [0.0, -1.5, 230.5, float("inf")]

    if data_type.interpretation is Interpretation.DOUBLE:
        return [0.0, -0.1, 1e300, float("-inf")]

    python_type = data_type.python_type
    return [python_type.min_value, python_type.max_value, 1]


@pytest.mark.parametrize("data_type", list(DataType), ids=lambda d: d.name)
def test_round_trip(data_type):
    for value in _boundary_values(data_type):
        data = codec.encode(data_type.type_id, value)
        assert len(data) == data_type.size

        decoded = codec.decode(data_type.type_id, data)
        assert decoded == value
        assert codec.encode(data_type.type_id, decoded) == data


def test_round_trip_nan():
    data = codec.encode(DataTypeId.single, float("nan"))
    assert math.isnan(codec.decode(DataTypeId.single, data))
