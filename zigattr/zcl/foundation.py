from __future__ import annotations

import dataclasses
import enum
import functools
import typing

from typing_extensions import Self

from zigattr.exceptions import UnknownType
import zigattr.types as t


class Interpretation(enum.Enum):
    """How the bytes of a fixed-width value are read."""

    BOOLEAN = "boolean"
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    FLOAT = "ieee754-float"
    DOUBLE = "ieee754-double"
    RAW = "raw-bytes"


class DataTypeId(t.enum8):
    data8 = 0x08
    data16 = 0x09
    data24 = 0x0A
    data32 = 0x0B
    data48 = 0x0D
    data64 = 0x0F
    bool_ = 0x10
    map8 = 0x18
    map16 = 0x19
    uint8 = 0x20
    uint16 = 0x21
    uint24 = 0x22
    uint32 = 0x23
    uint48 = 0x25
    uint64 = 0x27
    int8 = 0x28
    int16 = 0x29
    int24 = 0x2A
    int32 = 0x2B
    int48 = 0x2D
    int64 = 0x2F
    enum8 = 0x30
    enum16 = 0x31
    single = 0x39
    double = 0x3A
    octstr = 0x41
    string = 0x42
    clusterId = 0xE8  # noqa: N815
    attribId = 0xE9  # noqa: N815


@dataclasses.dataclass(frozen=True)
class DataTypeInfo:
    type_id: DataTypeId
    python_type: type
    interpretation: Interpretation
    description: str

    @property
    def size(self) -> int:
        return self.python_type._size


class DataType(DataTypeInfo, enum.Enum):
    data8 = (DataTypeId.data8, t.data8, Interpretation.RAW, "General 8-bit data")
    data16 = (DataTypeId.data16, t.data16, Interpretation.RAW, "General 16-bit data")
    data24 = (DataTypeId.data24, t.data24, Interpretation.RAW, "General 24-bit data")
    data32 = (DataTypeId.data32, t.data32, Interpretation.RAW, "General 32-bit data")
    data48 = (DataTypeId.data48, t.data48, Interpretation.RAW, "General 48-bit data")
    data64 = (DataTypeId.data64, t.data64, Interpretation.RAW, "General 64-bit data")
    bool_ = (DataTypeId.bool_, t.Bool, Interpretation.BOOLEAN, "Boolean")
    map8 = (DataTypeId.map8, t.uint8_t, Interpretation.UNSIGNED, "8-bit bitmap")
    map16 = (DataTypeId.map16, t.uint16_t, Interpretation.UNSIGNED, "16-bit bitmap")
    uint8 = (
        DataTypeId.uint8,
        t.uint8_t,
        Interpretation.UNSIGNED,
        "Unsigned 8-bit integer",
    )
    uint16 = (
        DataTypeId.uint16,
        t.uint16_t,
        Interpretation.UNSIGNED,
        "Unsigned 16-bit integer",
    )
    uint24 = (
        DataTypeId.uint24,
        t.uint24_t,
        Interpretation.UNSIGNED,
        "Unsigned 24-bit integer",
    )
    uint32 = (
        DataTypeId.uint32,
        t.uint32_t,
        Interpretation.UNSIGNED,
        "Unsigned 32-bit integer",
    )
    uint48 = (
        DataTypeId.uint48,
        t.uint48_t,
        Interpretation.UNSIGNED,
        "Unsigned 48-bit integer",
    )
    uint64 = (
        DataTypeId.uint64,
        t.uint64_t,
        Interpretation.UNSIGNED,
        "Unsigned 64-bit integer",
    )
    int8 = (DataTypeId.int8, t.int8s, Interpretation.SIGNED, "Signed 8-bit integer")
    int16 = (
        DataTypeId.int16,
        t.int16s,
        Interpretation.SIGNED,
        "Signed 16-bit integer",
    )
    int24 = (
        DataTypeId.int24,
        t.int24s,
        Interpretation.SIGNED,
        "Signed 24-bit integer",
    )
    int32 = (
        DataTypeId.int32,
        t.int32s,
        Interpretation.SIGNED,
        "Signed 32-bit integer",
    )
    int48 = (
        DataTypeId.int48,
        t.int48s,
        Interpretation.SIGNED,
        "Signed 48-bit integer",
    )
    int64 = (
        DataTypeId.int64,
        t.int64s,
        Interpretation.SIGNED,
        "Signed 64-bit integer",
    )
    enum8 = (
        DataTypeId.enum8,
        t.uint8_t,
        Interpretation.UNSIGNED,
        "8-bit enumeration",
    )
    enum16 = (
        DataTypeId.enum16,
        t.uint16_t,
        Interpretation.UNSIGNED,
        "16-bit enumeration",
    )
    single = (DataTypeId.single, t.Single, Interpretation.FLOAT, "Single precision")
    double = (DataTypeId.double, t.Double, Interpretation.DOUBLE, "Double precision")
    clusterId = (  # noqa: N815
        DataTypeId.clusterId,
        t.ClusterId,
        Interpretation.UNSIGNED,
        "Cluster ID",
    )
    attribId = (  # noqa: N815
        DataTypeId.attribId,
        t.AttributeId,
        Interpretation.UNSIGNED,
        "Attribute ID",
    )

    @classmethod
    @functools.cache
    def _data_type_index(cls: type[Self]) -> dict[DataTypeId, Self]:  # noqa: N805
        return {d.type_id: d for d in cls}

    @classmethod
    def from_type_id(cls: type[Self], type_id: DataTypeId | int) -> Self:
        """Look up the fixed-width type for a wire type code.

        Raises `UnknownType` for codes without a fixed width, including the
        length-prefixed string types.
        """
        try:
            return cls._data_type_index()[DataTypeId(type_id)]
        except (KeyError, ValueError) as exc:
            raise UnknownType(type_id) from exc


# Length-prefixed types, understood only inside attribute reports
VARIABLE_LENGTH_TYPES: dict[DataTypeId, type] = {
    DataTypeId.octstr: t.LVBytes,
    DataTypeId.string: t.CharacterString,
}


class AttributeReport(typing.NamedTuple):
    """One `attrId type value` record of a report attributes payload."""

    attribute: t.AttributeId
    type_id: DataTypeId
    value: typing.Any

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"attribute={self.attribute!r}, type_id={self.type_id!r},"
            f" value={self.value!r}"
            f")"
        )


def parse_attribute_reports(
    data: bytes, *, raw_attributes: typing.Container[int] = ()
) -> list[AttributeReport]:
    """Parse a report attributes payload into its records.

    Parsing stops at the first record with an unknown type or a truncated value;
    the records read before it are returned. String values of `raw_attributes`
    are kept as raw bytes, for attributes that carry binary data in a string.
    """
    # Imported here, the primitive codec depends on this module
    from zigattr.zcl import codec

    reports = []

    while len(data) >= 3:
        (attribute, raw_type), data = t.deserialize(data, [t.AttributeId, t.uint8_t])
        type_id = DataTypeId(raw_type)

        if type_id in VARIABLE_LENGTH_TYPES:
            python_type = VARIABLE_LENGTH_TYPES[type_id]
            if attribute in raw_attributes:
                python_type = t.LVBytes

            try:
                value, data = python_type.deserialize(data)
            except ValueError:
                break
        else:
            try:
                size = DataType.from_type_id(type_id).size
                value = codec.decode(type_id, data)
            except (UnknownType, ValueError):
                break

            data = data[size:]

        reports.append(AttributeReport(attribute, type_id, value))

    return reports
