"""Tuya devices."""

from __future__ import annotations

from zigattr import const
from zigattr.devices import PROFILES, common
from zigattr.registry import AttributeKey, AttributeRegistry, Complement, RegistryEntry
from zigattr.zcl.foundation import DataTypeId

POWER_ON_BEHAVIOR = {0: "off", 1: "on", 2: "restore"}


@PROFILES.register(
    "_TZ3000_qlai3277", "TS0001", config={"divisors": {"energy_divisor": 100}}
)
def switch_1gang_power() -> AttributeRegistry:
    """Tuya 1-gang switch with power monitoring."""
    entries = [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_ON_OFF, 0x8002),
            event_name="powerOnBehavior",
            type_id=DataTypeId.enum8,
            values=POWER_ON_BEHAVIOR,
            writable=True,
        ),
    ]

    return AttributeRegistry(
        common.on_off()
        + entries
        + common.metering()
        + common.electrical_measurement()
    )


@PROFILES.register("_TZ3000_yruungrl", "TS130F")
@PROFILES.register("_TZ3000_vd43bbfq", "TS130F")
@PROFILES.register("_TZ3000_1dd0d5yi", "TS130F")
@PROFILES.register("_TZ3000_fccpjz5z", "TS130F")
@PROFILES.register("_TZ3000_zirycpws", "TS130F")
def curtain_ts130f() -> AttributeRegistry:
    """Tuya TS130F curtain motor.

    The motor reports how far it is closed; the position is how far it is open.
    """
    return AttributeRegistry(
        [
            RegistryEntry(
                key=AttributeKey(const.CLUSTER_WINDOW_COVERING, 0x0008),
                event_name="position",
                unit="%",
                scale=Complement(100),
                type_id=DataTypeId.uint8,
                limits=(0, 100),
            ),
        ]
    )
