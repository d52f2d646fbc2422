"""Sunricher devices."""

from __future__ import annotations

from zigattr import const
from zigattr.devices import PROFILES, common
from zigattr.registry import AttributeKey, AttributeRegistry, DivideBy, RegistryEntry
from zigattr.zcl.foundation import DataTypeId

# Current summation is reported in watt seconds
DIMMER_CONFIG = {"divisors": {"energy_divisor": 3600000}}

POWER_ON_BEHAVIOR = {0: "off", 1: "on", 2: "previous"}

# Level 254 is fully on
LEVEL_SCALE = DivideBy(2.54)


def _level(attribute: int, event_name: str, writable: bool = False):
    return RegistryEntry(
        key=AttributeKey(const.CLUSTER_LEVEL_CONTROL, attribute),
        event_name=event_name,
        unit="%",
        scale=LEVEL_SCALE,
        type_id=DataTypeId.uint8,
        precision=0,
        limits=(0, 100),
        writable=writable,
    )


@PROFILES.register(
    "Sunricher",
    "HK-SL-DIM-EU-A",
    "HK-SL-DIM-US-A",
    "HK-SL-DIM-AU-R-A",
    config=DIMMER_CONFIG,
)
def dimmer() -> AttributeRegistry:
    """Sunricher in-wall dimmer with power monitoring."""
    entries = [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_ON_OFF, 0x4003),
            event_name="powerOnBehavior",
            type_id=DataTypeId.enum8,
            values=POWER_ON_BEHAVIOR,
            writable=True,
        ),
        _level(0x0000, "level"),
        _level(0x0011, "onLevel", writable=True),
    ]

    return AttributeRegistry(
        common.on_off()
        + entries
        + common.metering()
        + common.electrical_measurement()
    )
