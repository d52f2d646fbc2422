"""Aqara (Lumi) devices."""

from __future__ import annotations

from zigattr import const
from zigattr.devices import PROFILES, common
from zigattr.registry import (
    AttributeKey,
    AttributeRegistry,
    DivideBy,
    RegistryEntry,
    TlvKey,
)
from zigattr.zcl.foundation import DataTypeId

LUMI_CONFIG = {"manufacturer_code": const.MANUFACTURER_CODE_LUMI}

POWER_ON_BEHAVIOR = {0: "off", 1: "on", 2: "previous", 3: "inverted"}
LOCK_VALUES = {0: "unlocked", 1: "locked"}
PRESENCE_VALUES = {False: "not present", True: "present"}
ROOM_ACTIVITY = {
    0: "idle",
    1: "enter",
    2: "leave",
    3: "approach",
    4: "away",
    5: "large movement",
    6: "small movement",
}
SENSITIVITY = {1: "low", 2: "medium", 3: "high"}
ACTIVITY_STATE = {0: "unknown", 2: "idle", 3: "large movement", 4: "small movement"}
# Triple presses are reported as pushes
BUTTON_ACTIONS = {
    0: "held",
    1: "pushed",
    2: "doubleTapped",
    3: "pushed",
    255: "released",
}


def lumi_key(attribute: int) -> AttributeKey:
    return AttributeKey(
        const.CLUSTER_LUMI, attribute, const.MANUFACTURER_CODE_LUMI
    )


def tlv_attributes() -> list[AttributeKey]:
    return [
        lumi_key(const.ATTR_LUMI_TLV),
        lumi_key(const.ATTR_LUMI_TLV_LEGACY),
        AttributeKey(const.CLUSTER_BASIC, const.ATTR_BASIC_XIAOMI_TLV),
    ]


def _common_tlv() -> list[RegistryEntry]:
    return [
        RegistryEntry(
            key=TlvKey(0x03),
            event_name="deviceTemperature",
            unit="°C",
            type_id=DataTypeId.int8,
        ),
        RegistryEntry(
            key=TlvKey(0x05),
            event_name="powerOutageCount",
            type_id=DataTypeId.uint16,
        ),
    ]


def _plug_tlv() -> list[RegistryEntry]:
    return _common_tlv() + [
        RegistryEntry(
            key=TlvKey(0x64),
            event_name="switch",
            type_id=DataTypeId.bool_,
            values=common.ON_OFF_VALUES,
        ),
        RegistryEntry(
            key=TlvKey(0x95),
            event_name="energy",
            unit="kWh",
            type_id=DataTypeId.single,
        ),
        RegistryEntry(
            key=TlvKey(0x96),
            event_name="voltage",
            unit="V",
            scale=DivideBy(10),
            type_id=DataTypeId.single,
        ),
        RegistryEntry(
            key=TlvKey(0x97),
            event_name="amperage",
            unit="A",
            scale=DivideBy(1000),
            type_id=DataTypeId.single,
        ),
        RegistryEntry(
            key=TlvKey(0x98),
            event_name="power",
            unit="W",
            type_id=DataTypeId.single,
        ),
    ]


def _overload_protection() -> RegistryEntry:
    return RegistryEntry(
        key=lumi_key(0x020B),
        event_name="overloadProtection",
        unit="W",
        type_id=DataTypeId.single,
        precision=0,
        limits=(100, 2300),
        writable=True,
    )


def _power_outage_count() -> RegistryEntry:
    return RegistryEntry(
        key=lumi_key(0x0002),
        event_name="powerOutageCount",
        type_id=DataTypeId.uint16,
    )


@PROFILES.register("LUMI", "lumi.plug.maeu01", config=LUMI_CONFIG)
def smart_plug_eu() -> AttributeRegistry:
    """Aqara Smart Plug EU."""
    lumi = [
        _power_outage_count(),
        RegistryEntry(
            key=lumi_key(0x0200),
            event_name="buttonLock",
            type_id=DataTypeId.bool_,
            values=common.ON_OFF_VALUES,
            writable=True,
        ),
        RegistryEntry(
            key=lumi_key(0x0201),
            event_name="powerOutageMemory",
            type_id=DataTypeId.bool_,
            values=common.ON_OFF_VALUES,
            writable=True,
        ),
        RegistryEntry(
            key=lumi_key(0x0203),
            event_name="ledDisabled",
            type_id=DataTypeId.bool_,
            values=common.ON_OFF_VALUES,
            writable=True,
        ),
        _overload_protection(),
    ]

    return AttributeRegistry(
        common.on_off()
        + common.device_temperature()
        + common.metering()
        + common.electrical_measurement()
        + lumi
        + _plug_tlv(),
        tlv_attributes=tlv_attributes(),
    )


@PROFILES.register("Aqara", "lumi.plug.aeu001", config=LUMI_CONFIG)
def wall_outlet_h2_eu() -> AttributeRegistry:
    """Aqara Wall Outlet H2 EU."""
    lumi = [
        _power_outage_count(),
        RegistryEntry(
            key=lumi_key(0x0200),
            event_name="buttonLock",
            type_id=DataTypeId.uint8,
            values=LOCK_VALUES,
            writable=True,
        ),
        RegistryEntry(
            key=lumi_key(0x0201),
            event_name="powerOnBehavior",
            type_id=DataTypeId.uint8,
            values=POWER_ON_BEHAVIOR,
            writable=True,
        ),
        RegistryEntry(
            key=lumi_key(0x0202),
            event_name="chargingProtection",
            type_id=DataTypeId.uint8,
            values={0: "off", 1: "on"},
            writable=True,
        ),
        RegistryEntry(
            key=lumi_key(0x0203),
            event_name="ledIndicator",
            type_id=DataTypeId.uint8,
            values={0: "off", 1: "on"},
            writable=True,
        ),
        _overload_protection(),
        RegistryEntry(
            key=lumi_key(0x0266),
            event_name="chargingLimit",
            unit="W",
            scale=DivideBy(10),
            type_id=DataTypeId.uint16,
            writable=True,
        ),
    ]

    return AttributeRegistry(
        common.on_off()
        + common.temperature_measurement()
        + common.metering()
        + common.electrical_measurement()
        + lumi
        + _plug_tlv(),
        tlv_attributes=tlv_attributes(),
    )


@PROFILES.register("aqara", "lumi.sensor_occupy.agl1", config=LUMI_CONFIG)
@PROFILES.register("Aqara", "lumi.sensor_occupy.agl1", config=LUMI_CONFIG)
def presence_fp1e() -> AttributeRegistry:
    """Aqara FP1E presence sensor."""
    entries = [
        RegistryEntry(
            key=lumi_key(0x0142),
            event_name="presence",
            type_id=DataTypeId.bool_,
            values=PRESENCE_VALUES,
        ),
        RegistryEntry(
            key=lumi_key(0x0143),
            event_name="roomActivity",
            type_id=DataTypeId.uint8,
            values=ROOM_ACTIVITY,
        ),
        RegistryEntry(
            key=lumi_key(0x010C),
            event_name="motionSensitivity",
            type_id=DataTypeId.uint8,
            values=SENSITIVITY,
            writable=True,
        ),
        RegistryEntry(
            key=lumi_key(0x015B),
            event_name="detectionRange",
            unit="m",
            scale=DivideBy(100),
            type_id=DataTypeId.uint16,
            writable=True,
        ),
        RegistryEntry(
            key=lumi_key(0x015F),
            event_name="targetDistance",
            unit="m",
            scale=DivideBy(100),
            type_id=DataTypeId.uint16,
        ),
        RegistryEntry(
            key=lumi_key(0x0160),
            event_name="activityState",
            type_id=DataTypeId.uint8,
            values=ACTIVITY_STATE,
        ),
        # Reported alongside presence, meaning unknown
        RegistryEntry(
            key=TlvKey(0x65),
            event_name="detectionEvent",
            type_id=DataTypeId.uint8,
        ),
        RegistryEntry(
            key=TlvKey(0x66),
            event_name="presence",
            type_id=DataTypeId.bool_,
            values=PRESENCE_VALUES,
        ),
    ]

    return AttributeRegistry(
        entries + _common_tlv(), tlv_attributes=tlv_attributes()
    )


@PROFILES.register("Aqara", "lumi.sensor_ht.agl001", config=LUMI_CONFIG)
def climate_sensor_w100() -> AttributeRegistry:
    """Aqara Climate Sensor W100."""
    entries = [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_HUMIDITY_MEASUREMENT, 0x0000),
            event_name="humidity",
            unit="%",
            scale=DivideBy(100),
            type_id=DataTypeId.uint16,
            limits=(0, 100),
        ),
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_POWER_CONFIGURATION, 0x0020),
            event_name="batteryVoltage",
            unit="V",
            scale=DivideBy(10),
            type_id=DataTypeId.uint8,
        ),
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_POWER_CONFIGURATION, 0x0021),
            event_name="battery",
            unit="%",
            type_id=DataTypeId.uint8,
            limits=(0, 100),
        ),
        RegistryEntry(
            key=TlvKey(0x01),
            event_name="batteryVoltage",
            unit="V",
            scale=DivideBy(1000),
            type_id=DataTypeId.uint16,
            precision=2,
        ),
        RegistryEntry(
            key=TlvKey(0x66),
            event_name="externalTemperature",
            unit="°C",
            scale=DivideBy(100),
            type_id=DataTypeId.int16,
        ),
        RegistryEntry(
            key=TlvKey(0x67),
            event_name="externalHumidity",
            unit="%",
            scale=DivideBy(100),
            type_id=DataTypeId.uint16,
        ),
        RegistryEntry(
            key=TlvKey(0x69),
            event_name="battery",
            unit="%",
            type_id=DataTypeId.uint8,
        ),
    ]

    return AttributeRegistry(
        common.temperature_measurement() + entries + _common_tlv(),
        tlv_attributes=tlv_attributes(),
    )


@PROFILES.register("LUMI", "lumi.switch.l1aeu1", config=LUMI_CONFIG)
def h1_eu_single_switch() -> AttributeRegistry:
    """Aqara H1 EU single rocker wall switch, no neutral."""
    return AttributeRegistry(common.on_off())


@PROFILES.register("LUMI", "lumi.remote.b28ac1", config=LUMI_CONFIG)
def h1_double_rocker_remote() -> AttributeRegistry:
    """Aqara H1 double rocker wireless remote.

    Each rocker reports on its own endpoint; the action is the multistate
    present value.
    """
    entries = [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_MULTISTATE_INPUT, 0x0055),
            event_name="action",
            type_id=DataTypeId.uint16,
            values=BUTTON_ACTIONS,
        ),
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_POWER_CONFIGURATION, 0x0021),
            event_name="battery",
            unit="%",
            scale=DivideBy(2),
            type_id=DataTypeId.uint8,
            precision=0,
            limits=(0, 100),
        ),
    ]

    return AttributeRegistry(entries)
