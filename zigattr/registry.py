"""Per-device attribute registries.

A registry maps ZCL attributes and TLV tags to semantic readings. It is built
once per device and is read-only afterwards; the only mutable state is the
`DivisorTable` passed into each call.
"""

from __future__ import annotations

import collections.abc
import decimal
import math
import numbers
import typing

import attrs

from zigattr import tlv
from zigattr.exceptions import RegistryError
import zigattr.types as t
from zigattr.zcl import codec
from zigattr.zcl.foundation import DataType, DataTypeId, Interpretation

# Fallbacks used until a device announces its own divisors and multipliers
DEFAULT_DIVISORS: dict[str, float] = {
    "power_divisor": 10,
    "power_multiplier": 1,
    "voltage_divisor": 10,
    "voltage_multiplier": 1,
    "current_divisor": 1000,
    "current_multiplier": 1,
    "energy_divisor": 1000,
    "energy_multiplier": 1,
}

UNIT_PRECISION: dict[str, int] = {
    "°C": 1,
    "°F": 1,
    "V": 1,
    "W": 1,
    "%": 1,
    "A": 3,
    "kWh": 3,
    "m": 2,
}


@attrs.frozen
class AttributeKey(t.BaseDataclassMixin):
    cluster: int = attrs.field(converter=t.ClusterId)
    attribute: int = attrs.field(converter=t.AttributeId)
    manufacturer_code: int | None = attrs.field(
        default=None, converter=attrs.converters.optional(t.ManufacturerCode)
    )

    def __str__(self) -> str:
        key = f"0x{self.cluster:04X}/0x{self.attribute:04X}"
        if self.manufacturer_code is not None:
            key += f" (manufacturer 0x{self.manufacturer_code:04X})"
        return key


@attrs.frozen
class TlvKey:
    tag: int = attrs.field(converter=t.uint8_t)

    def __str__(self) -> str:
        return f"tag 0x{self.tag:02X}"


RegistryKey = typing.Union[AttributeKey, TlvKey]


class ScaleRule:
    """Base class of the scaling rules applied to raw numeric values."""

    def factor(self, divisors: DivisorTable) -> float:
        raise NotImplementedError

    def to_value(self, raw, divisors: DivisorTable):
        return raw / self.factor(divisors)

    def to_raw(self, value, divisors: DivisorTable):
        return value * self.factor(divisors)


@attrs.frozen
class NoScale(ScaleRule):
    def factor(self, divisors: DivisorTable) -> float:
        return 1

    def to_value(self, raw, divisors: DivisorTable):
        return raw

    def to_raw(self, value, divisors: DivisorTable):
        return value


@attrs.frozen
class DivideBy(ScaleRule):
    divisor: float = attrs.field(validator=attrs.validators.gt(0))

    def factor(self, divisors: DivisorTable) -> float:
        return self.divisor


@attrs.frozen
class DivideByRuntime(ScaleRule):
    """Divide by a divisor the device announces, scaled by an optional multiplier."""

    slot: str
    multiplier_slot: str | None = None

    def factor(self, divisors: DivisorTable) -> float:
        multiplier = 1
        if self.multiplier_slot is not None:
            multiplier = divisors[self.multiplier_slot]

        return divisors[self.slot] / multiplier


@attrs.frozen
class Complement(ScaleRule):
    """Count down from `span`, e.g. a closed percentage reported as open."""

    span: float = 100

    def factor(self, divisors: DivisorTable) -> float:
        return 1

    def to_value(self, raw, divisors: DivisorTable):
        return self.span - raw

    def to_raw(self, value, divisors: DivisorTable):
        return self.span - value


NO_SCALE = NoScale()


class DivisorTable:
    """Runtime divisors and multipliers of a single device.

    A slot that was never announced, or was announced as zero, reads as its
    default.
    """

    def __init__(self, defaults: typing.Mapping[str, float] | None = None) -> None:
        if defaults is None:
            defaults = DEFAULT_DIVISORS

        self._defaults: dict[str, float] = dict(defaults)
        self._values: dict[str, float] = {}

    def __getitem__(self, slot: str) -> float:
        value = self._values.get(slot)

        if not value:
            return self._defaults.get(slot, 1)

        return value

    def __contains__(self, slot: object) -> bool:
        return slot in self._values

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_dict()!r})"

    def update(self, slot: str, value: float) -> None:
        self._values[slot] = value

    def reset(self) -> None:
        self._values.clear()

    def as_dict(self) -> dict[str, float]:
        return {slot: self[slot] for slot in self._defaults.keys() | self._values}


def _freeze_values(values):
    if values is None:
        return None
    return dict(values)


@attrs.frozen(kw_only=True)
class RegistryEntry:
    key: RegistryKey
    event_name: str
    unit: str | None = None
    scale: ScaleRule = NO_SCALE
    type_id: DataTypeId | None = attrs.field(
        default=None, converter=attrs.converters.optional(DataTypeId)
    )
    values: typing.Mapping[typing.Any, str] | None = attrs.field(
        default=None, converter=_freeze_values, hash=False
    )
    bitmask: int | None = None
    announces: str | None = None
    precision: int | None = None
    limits: tuple[float, float] | None = None
    writable: bool = False

    @property
    def is_divisor(self) -> bool:
        return self.announces is not None


@attrs.frozen
class DomainEvent:
    name: str
    value: typing.Any
    unit: str | None = None


@attrs.frozen
class WriteRequest:
    key: RegistryKey
    type_id: DataTypeId
    payload: bytes

    def __str__(self) -> str:
        return f"{self.key} type={self.type_id!r} payload={self.payload.hex()}"


def normalize(
    raw: codec.ScalarValue, rule: ScaleRule, divisors: DivisorTable
) -> codec.ScalarValue:
    """Convert a raw reading into a physical quantity."""
    return rule.to_value(raw, divisors)


# Wide enough for the integer digits of any double
_DECIMAL_CONTEXT = decimal.Context(prec=400)


def round_half_up(value, places: int):
    """Round to `places` decimals, ties away from zero.

    Returns an `int` for zero places.
    """
    if isinstance(value, int):
        return int(value)

    if not math.isfinite(value):
        return value

    rounded = decimal.Decimal(str(value)).quantize(
        decimal.Decimal(1).scaleb(-places),
        rounding=decimal.ROUND_HALF_UP,
        context=_DECIMAL_CONTEXT,
    )

    if places <= 0:
        return int(rounded)

    return float(rounded)


def _round(value, places: int | None):
    if places is None or isinstance(value, (bool, bytes)):
        return value
    return round_half_up(value, places)


class AttributeRegistry(collections.abc.Mapping):
    """Lookup table from attribute keys and TLV tags to registry entries."""

    def __init__(
        self,
        entries: typing.Iterable[RegistryEntry] = (),
        *,
        tlv_attributes: typing.Iterable[AttributeKey] = (),
        precision: typing.Mapping[str, int] | None = None,
    ) -> None:
        self._entries: dict[RegistryKey, RegistryEntry] = {}
        self._by_name: dict[str, RegistryEntry] = {}
        self.tlv_attributes: frozenset[AttributeKey] = frozenset(tlv_attributes)
        self.precision: dict[str, int] = dict(UNIT_PRECISION)

        if precision is not None:
            self.precision.update(precision)

        for entry in entries:
            self.add(entry)

    def add(self, entry: RegistryEntry) -> None:
        if entry.key in self._entries:
            raise RegistryError(f"Duplicate registry key {entry.key}")

        if entry.writable:
            if entry.type_id is None:
                raise RegistryError(f"Writable entry {entry.event_name!r} has no type")
            if entry.event_name in self._by_name:
                raise RegistryError(f"Duplicate writable event {entry.event_name!r}")
            self._by_name[entry.event_name] = entry

        self._entries[entry.key] = entry

    def __getitem__(self, key: RegistryKey) -> RegistryEntry:
        return self._entries[key]

    def __iter__(self) -> typing.Iterator[RegistryKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, key: RegistryKey) -> RegistryEntry | None:
        """Find the entry of `key`, falling back to its manufacturer-agnostic form."""
        entry = self._entries.get(key)

        if (
            entry is None
            and isinstance(key, AttributeKey)
            and key.manufacturer_code is not None
        ):
            entry = self._entries.get(key.replace(manufacturer_code=None))

        return entry

    def is_tlv_attribute(self, key: AttributeKey) -> bool:
        return (
            key in self.tlv_attributes
            or key.replace(manufacturer_code=None) in self.tlv_attributes
        )

    def resolve(
        self,
        key: RegistryKey,
        raw: codec.ScalarValue,
        divisors: DivisorTable,
        *,
        offsets: typing.Mapping[str, float] | None = None,
        precision: typing.Mapping[str, int] | None = None,
    ) -> DomainEvent | None:
        """Turn a decoded value into a domain event.

        Returns `None` for unknown keys and for keys that announce a divisor or
        multiplier; the latter update `divisors` in place.
        """
        entry = self.lookup(key)

        if entry is None:
            return None

        if entry.announces is not None:
            divisors.update(entry.announces, raw)
            return None

        if entry.bitmask is not None:
            raw = raw & entry.bitmask

        # Boolean entries treat any nonzero value as true, whatever type it came in
        if entry.type_id is DataTypeId.bool_ and not isinstance(raw, bool):
            raw = bool(raw)

        if entry.values is not None:
            value = entry.values.get(raw, f"unknown ({raw})")
            return DomainEvent(entry.event_name, value, entry.unit)

        value = normalize(raw, entry.scale, divisors)

        if offsets and entry.event_name in offsets:
            value = value + offsets[entry.event_name]

        if entry.limits is not None:
            low, high = entry.limits
            value = min(high, max(low, value))

        places = entry.precision
        if places is None:
            places = (precision or self.precision).get(entry.unit)

        return DomainEvent(entry.event_name, _round(value, places), entry.unit)

    def _writable(self, name: str) -> RegistryEntry:
        try:
            return self._by_name[name]
        except KeyError:
            raise RegistryError(f"{name!r} is not a writable attribute") from None

    def _to_raw(
        self, entry: RegistryEntry, value: typing.Any, divisors: DivisorTable
    ) -> codec.ScalarValue:
        if entry.values is not None:
            for raw, display in entry.values.items():
                if display == value:
                    return raw

            if value not in entry.values:
                raise RegistryError(
                    f"{value!r} is not a valid value for {entry.event_name!r}"
                )
            return value

        interpretation = DataType.from_type_id(entry.type_id).interpretation

        if interpretation in (Interpretation.BOOLEAN, Interpretation.RAW):
            return value

        if not isinstance(value, numbers.Real) or isinstance(value, bool):
            raise RegistryError(f"{value!r} is not a number for {entry.event_name!r}")

        if entry.limits is not None:
            low, high = entry.limits
            value = min(high, max(low, value))

        if isinstance(entry.scale, NoScale):
            return value

        raw = entry.scale.to_raw(value, divisors)

        if interpretation in (Interpretation.FLOAT, Interpretation.DOUBLE):
            return raw

        return round_half_up(raw, 0)

    def encode_write(
        self, name: str, value: typing.Any, divisors: DivisorTable
    ) -> WriteRequest:
        """Encode a desired value of the writable reading `name`."""
        entry = self._writable(name)
        raw = self._to_raw(entry, value, divisors)

        return WriteRequest(entry.key, entry.type_id, codec.encode(entry.type_id, raw))

    def encode_tlv(
        self, values: typing.Mapping[str, typing.Any], divisors: DivisorTable
    ) -> bytes:
        """Pack desired values of writable TLV readings into one TLV stream."""
        records = []

        for name, value in values.items():
            entry = self._writable(name)

            if not isinstance(entry.key, TlvKey):
                raise RegistryError(f"{name!r} is not carried in a TLV stream")

            records.append(
                (entry.key.tag, entry.type_id, self._to_raw(entry, value, divisors))
            )

        return tlv.build(records)
