"""Primitive ZCL value codec.

Every fixed-width ZCL type is little-endian on the wire. Decoding consumes
exactly the width of the type and ignores trailing bytes; encoding produces
exactly that many bytes or fails with `OutOfRange`.
"""

from __future__ import annotations

import numbers
import typing

from zigattr.exceptions import MalformedData, OutOfRange, Truncated
import zigattr.types as t
from zigattr.zcl.foundation import DataType, DataTypeId, Interpretation

ScalarValue = typing.Union[bool, int, float, bytes]


def decode(type_id: DataTypeId | int, data: bytes) -> ScalarValue:
    """Decode the leading value of `data` as `type_id`."""
    data_type = DataType.from_type_id(type_id)

    if len(data) < data_type.size:
        raise Truncated(data_type.size, len(data))

    value, _ = data_type.python_type.deserialize(bytes(data))

    if data_type.interpretation is Interpretation.BOOLEAN:
        return value != 0

    return value


def encode(type_id: DataTypeId | int, value: ScalarValue) -> bytes:
    """Encode `value` as the fixed-width wire form of `type_id`."""
    data_type = DataType.from_type_id(type_id)
    interpretation = data_type.interpretation

    if interpretation is Interpretation.BOOLEAN:
        if isinstance(value, bool) or value in (0, 1):
            return t.Bool(int(value)).serialize()
        raise OutOfRange(value, data_type.type_id, "not a boolean")

    if interpretation is Interpretation.RAW:
        if not isinstance(value, (bytes, bytearray)):
            raise OutOfRange(value, data_type.type_id, "not bytes")
        if len(value) != data_type.size:
            raise OutOfRange(
                value, data_type.type_id, f"expected {data_type.size} bytes"
            )
        return data_type.python_type(value).serialize()

    if interpretation in (Interpretation.FLOAT, Interpretation.DOUBLE):
        if not isinstance(value, numbers.Real):
            raise OutOfRange(value, data_type.type_id, "not a number")
        try:
            return data_type.python_type(value).serialize()
        except ValueError as exc:
            raise OutOfRange(value, data_type.type_id, str(exc)) from exc

    if not isinstance(value, numbers.Integral):
        if isinstance(value, numbers.Real) and float(value).is_integer():
            value = int(value)
        else:
            raise OutOfRange(value, data_type.type_id, "not an integer")

    try:
        return data_type.python_type(int(value)).serialize()
    except ValueError as exc:
        raise OutOfRange(value, data_type.type_id, str(exc)) from exc


def decode_hex(type_id: DataTypeId | int, raw_hex: str) -> ScalarValue:
    """Decode a hex string holding the wire bytes of a value."""
    try:
        data = t.hex_string_to_bytes(raw_hex)
    except ValueError as exc:
        raise MalformedData(f"Invalid hex string {raw_hex!r}") from exc

    return decode(type_id, data)


def encode_hex(type_id: DataTypeId | int, value: ScalarValue) -> str:
    return t.bytes_to_hex_string(encode(type_id, value))
