import struct

import pytest

from zigattr.exceptions import UnknownType
import zigattr.types as t
from zigattr.zcl import foundation
from zigattr.zcl.foundation import DataType, DataTypeId, Interpretation


def test_typevalue_sizes():
    expected = {
        DataTypeId.data8: 1,
        DataTypeId.data16: 2,
        DataTypeId.data24: 3,
        DataTypeId.data32: 4,
        DataTypeId.data48: 6,
        DataTypeId.data64: 8,
        DataTypeId.bool_: 1,
        DataTypeId.map8: 1,
        DataTypeId.map16: 2,
        DataTypeId.uint8: 1,
        DataTypeId.uint16: 2,
        DataTypeId.uint24: 3,
        DataTypeId.uint32: 4,
        DataTypeId.uint48: 6,
        DataTypeId.uint64: 8,
        DataTypeId.int8: 1,
        DataTypeId.int16: 2,
        DataTypeId.int24: 3,
        DataTypeId.int32: 4,
        DataTypeId.int48: 6,
        DataTypeId.int64: 8,
        DataTypeId.enum8: 1,
        DataTypeId.enum16: 2,
        DataTypeId.single: 4,
        DataTypeId.double: 8,
        DataTypeId.clusterId: 2,
        DataTypeId.attribId: 2,
    }

    assert {d.type_id: d.size for d in DataType} == expected


def test_wire_codes():
    assert DataTypeId.bool_ == 0x10
    assert DataTypeId.uint8 == 0x20
    assert DataTypeId.uint16 == 0x21
    assert DataTypeId.uint32 == 0x23
    assert DataTypeId.uint48 == 0x25
    assert DataTypeId.int8 == 0x28
    assert DataTypeId.int16 == 0x29
    assert DataTypeId.single == 0x39


@pytest.mark.parametrize(
    ("type_id", "interpretation"),
    [
        (0x08, Interpretation.RAW),
        (0x10, Interpretation.BOOLEAN),
        (0x18, Interpretation.UNSIGNED),
        (0x20, Interpretation.UNSIGNED),
        (0x29, Interpretation.SIGNED),
        (0x30, Interpretation.UNSIGNED),
        (0x39, Interpretation.FLOAT),
        (0x3A, Interpretation.DOUBLE),
        (0xE9, Interpretation.UNSIGNED),
    ],
)
def test_interpretation(type_id, interpretation):
    assert DataType.from_type_id(type_id).interpretation is interpretation


def test_unknown_type_id():
    undefined = DataTypeId(0x99)
    assert undefined.name == "undefined_0x99"

    with pytest.raises(UnknownType):
        DataType.from_type_id(undefined)

    # Length-prefixed strings have no fixed width
    with pytest.raises(UnknownType):
        DataType.from_type_id(DataTypeId.octstr)


def _record(attribute, type_id, payload):
    return t.AttributeId(attribute).serialize() + bytes([type_id]) + payload


def test_parse_attribute_reports():
    data = (
        _record(0x050B, 0x29, b"\xd8\x59")
        + _record(0x0605, 0x21, b"\x64\x00")
        + _record(0x0000, 0x10, b"\x01")
        + _record(0x020B, 0x39, struct.pack("<f", 2300))
    )

    reports = foundation.parse_attribute_reports(data)

    assert reports == [
        (0x050B, DataTypeId.int16, 23000),
        (0x0605, DataTypeId.uint16, 100),
        (0x0000, DataTypeId.bool_, True),
        (0x020B, DataTypeId.single, 2300.0),
    ]
    assert reports[0].attribute == 0x050B
    assert reports[0].type_id is DataTypeId.int16


def test_parse_attribute_reports_strings():
    data = (
        _record(0x00F7, 0x41, b"\x03\x64\x10\x01")
        + _record(0x0005, 0x42, b"\x05TRVZB")
        + _record(0x0021, 0x20, b"\xc8")
    )

    reports = foundation.parse_attribute_reports(data)

    assert reports == [
        (0x00F7, DataTypeId.octstr, b"\x64\x10\x01"),
        (0x0005, DataTypeId.string, "TRVZB"),
        (0x0021, DataTypeId.uint8, 200),
    ]


def test_parse_attribute_reports_raw_strings():
    payload = b"\x06\x64\x10\x01\x05\x21\x00"
    data = _record(0xFF01, 0x42, payload) + _record(0x0005, 0x42, b"\x02ab")

    reports = foundation.parse_attribute_reports(data, raw_attributes={0xFF01})

    assert reports == [
        (0xFF01, DataTypeId.string, payload[1:]),
        (0x0005, DataTypeId.string, "ab"),
    ]
    assert isinstance(reports[0].value, bytes)

    # Decoded as text the stream is cut at its first NUL byte
    assert foundation.parse_attribute_reports(data)[0].value == "d\x10\x01\x05!"


def test_parse_attribute_reports_stops_on_unknown_type():
    data = (
        _record(0x0000, 0x20, b"\x01")
        + _record(0x0001, 0x99, b"\x01\x02")
        + _record(0x0002, 0x20, b"\x03")
    )

    assert foundation.parse_attribute_reports(data) == [
        (0x0000, DataTypeId.uint8, 1)
    ]


def test_parse_attribute_reports_truncated():
    data = _record(0x0000, 0x20, b"\x01") + _record(0x0001, 0x23, b"\x01\x02")

    assert foundation.parse_attribute_reports(data) == [
        (0x0000, DataTypeId.uint8, 1)
    ]

    data = _record(0x00F7, 0x41, b"\x05\x64\x10")
    assert foundation.parse_attribute_reports(data) == []


def test_parse_attribute_reports_short_tail():
    data = _record(0x0000, 0x20, b"\x01") + b"\x01\x00"

    assert foundation.parse_attribute_reports(data) == [
        (0x0000, DataTypeId.uint8, 1)
    ]
    assert foundation.parse_attribute_reports(b"") == []


def test_attribute_report_repr():
    report = foundation.AttributeReport(t.AttributeId(0x050B), DataTypeId.int16, 1)
    assert repr(report).startswith("AttributeReport(attribute=0x050B")
