"""Vendor tag-type-value streams.

Aqara devices pack several readings into one attribute as a flat sequence of
`tag(1) type(1) value(width)` records. The width of each value is implied by
its ZCL type code. There is no length prefix and no terminator.
"""

from __future__ import annotations

import enum
import typing

from zigattr.exceptions import MalformedData, OutOfRange, Truncated, UnknownType
import zigattr.types as t
from zigattr.zcl import codec
from zigattr.zcl.foundation import DataType, DataTypeId


class UnknownTypePolicy(enum.Enum):
    """What the parser does with a record whose type code has no known width."""

    ABORT = "abort"
    SKIP = "skip"


class TlvRecord(typing.NamedTuple):
    tag: int
    type_id: DataTypeId
    value: codec.ScalarValue

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"tag=0x{self.tag:02X}, type_id={self.type_id!r}, value={self.value!r}"
            f")"
        )


def parse(
    data: bytes,
    *,
    policy: UnknownTypePolicy = UnknownTypePolicy.ABORT,
    skip_width: int = 1,
) -> list[TlvRecord]:
    """Parse a TLV stream into records, in stream order.

    Never raises on malformed input. A truncated record ends the stream. A record
    with an unknown type code either ends the stream or, with
    `UnknownTypePolicy.SKIP`, has `skip_width` value bytes skipped.
    """
    data = bytes(data)
    records = []
    offset = 0

    while len(data) - offset >= 2:
        tag = data[offset]
        type_id = DataTypeId(data[offset + 1])
        offset += 2

        try:
            width = DataType.from_type_id(type_id).size
        except UnknownType:
            if policy is UnknownTypePolicy.ABORT or len(data) - offset < skip_width:
                break

            offset += skip_width
            continue

        try:
            value = codec.decode(type_id, data[offset : offset + width])
        except Truncated:
            break

        records.append(TlvRecord(tag, type_id, value))
        offset += width

    return records


def parse_hex(raw_hex: str, **kwargs: typing.Any) -> list[TlvRecord]:
    try:
        data = t.hex_string_to_bytes(raw_hex)
    except ValueError as exc:
        raise MalformedData(f"Invalid hex string {raw_hex!r}") from exc

    return parse(data, **kwargs)


def build(
    records: typing.Iterable[tuple[int, DataTypeId | int, codec.ScalarValue]],
) -> bytes:
    """Pack `(tag, type, value)` triples into a TLV stream, in input order."""
    chunks = []

    for tag, type_id, value in records:
        if not 0 <= tag <= 0xFF:
            raise OutOfRange(tag, type_id, "tag is not a single byte")

        data_type = DataType.from_type_id(type_id)
        chunks.append(bytes([tag, data_type.type_id]))
        chunks.append(codec.encode(data_type.type_id, value))

    return b"".join(chunks)
