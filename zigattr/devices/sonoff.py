"""Sonoff devices."""

from __future__ import annotations

from zigattr import const
from zigattr.devices import PROFILES, common
from zigattr.registry import AttributeKey, AttributeRegistry, DivideBy, RegistryEntry
from zigattr.zcl.foundation import DataTypeId

SONOFF_CONFIG = {"manufacturer_code": const.MANUFACTURER_CODE_SONOFF}

SYSTEM_MODES = {0x00: "off", 0x01: "auto", 0x04: "heat"}
OPERATING_STATES = {0x00: "idle", 0x01: "heating"}
SENSOR_TYPES = {0: "internal", 1: "external", 2: "external_2", 3: "external_3"}

TEMPERATURE_LIMITS = (4.0, 35.0)
CALIBRATION_LIMITS = (-12.0, 12.0)
ACCURACY_LIMITS = (-1.0, -0.2)


def thermostat_key(attribute: int) -> AttributeKey:
    return AttributeKey(const.CLUSTER_THERMOSTAT, attribute)


def sonoff_key(attribute: int) -> AttributeKey:
    return AttributeKey(
        const.CLUSTER_SONOFF, attribute, const.MANUFACTURER_CODE_SONOFF
    )


def _setpoint(key: AttributeKey, event_name: str, writable: bool = True):
    return RegistryEntry(
        key=key,
        event_name=event_name,
        unit="°C",
        scale=DivideBy(100),
        type_id=DataTypeId.int16,
        limits=TEMPERATURE_LIMITS,
        writable=writable,
    )


@PROFILES.register("SONOFF", "TRVZB", config=SONOFF_CONFIG)
@PROFILES.register("Sonoff", "TRVZB", config=SONOFF_CONFIG)
@PROFILES.register("sonoff", "TRVZB", config=SONOFF_CONFIG)
def trvzb() -> AttributeRegistry:
    """SONOFF TRVZB thermostatic radiator valve."""
    thermostat = [
        RegistryEntry(
            key=thermostat_key(0x0000),
            event_name="temperature",
            unit="°C",
            scale=DivideBy(100),
            type_id=DataTypeId.int16,
        ),
        RegistryEntry(
            key=thermostat_key(0x0010),
            event_name="temperatureCalibration",
            unit="°C",
            scale=DivideBy(10),
            type_id=DataTypeId.int8,
            limits=CALIBRATION_LIMITS,
            writable=True,
        ),
        _setpoint(thermostat_key(0x0012), "heatingSetpoint"),
        _setpoint(thermostat_key(0x0015), "minHeatingSetpoint"),
        _setpoint(thermostat_key(0x0016), "maxHeatingSetpoint"),
        RegistryEntry(
            key=thermostat_key(0x001C),
            event_name="thermostatMode",
            type_id=DataTypeId.enum8,
            values=SYSTEM_MODES,
            writable=True,
        ),
        RegistryEntry(
            key=thermostat_key(0x0029),
            event_name="thermostatOperatingState",
            type_id=DataTypeId.map16,
            values=OPERATING_STATES,
            bitmask=0x01,
        ),
    ]

    custom = [
        RegistryEntry(
            key=sonoff_key(0x0000),
            event_name="childLock",
            type_id=DataTypeId.bool_,
            values=common.ON_OFF_VALUES,
            writable=True,
        ),
        RegistryEntry(
            key=sonoff_key(0x6000),
            event_name="windowDetection",
            type_id=DataTypeId.bool_,
            values=common.ON_OFF_VALUES,
            writable=True,
        ),
        RegistryEntry(
            key=sonoff_key(0x6001),
            event_name="windowOpen",
            type_id=DataTypeId.bool_,
            values={False: "closed", True: "open"},
        ),
        _setpoint(sonoff_key(0x6002), "frostProtection"),
        RegistryEntry(
            key=sonoff_key(0x6003),
            event_name="idleSteps",
            type_id=DataTypeId.uint16,
        ),
        RegistryEntry(
            key=sonoff_key(0x6004),
            event_name="closingSteps",
            type_id=DataTypeId.uint16,
        ),
        RegistryEntry(
            key=sonoff_key(0x600B),
            event_name="valvePosition",
            unit="%",
            type_id=DataTypeId.uint8,
            limits=(0, 100),
            writable=True,
        ),
        RegistryEntry(
            key=sonoff_key(0x600C),
            event_name="valveClosingDegree",
            unit="%",
            type_id=DataTypeId.uint8,
            limits=(0, 100),
            writable=True,
        ),
        RegistryEntry(
            key=sonoff_key(0x600D),
            event_name="externalTemperature",
            unit="°C",
            scale=DivideBy(100),
            type_id=DataTypeId.int16,
            writable=True,
        ),
        RegistryEntry(
            key=sonoff_key(0x600E),
            event_name="externalSensor",
            type_id=DataTypeId.uint8,
            values=SENSOR_TYPES,
            writable=True,
        ),
        RegistryEntry(
            key=sonoff_key(0x600F),
            event_name="temperatureAccuracy",
            unit="°C",
            scale=DivideBy(10),
            type_id=DataTypeId.int8,
            limits=ACCURACY_LIMITS,
            writable=True,
        ),
    ]

    power = [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_POWER_CONFIGURATION, 0x0020),
            event_name="batteryVoltage",
            unit="V",
            scale=DivideBy(10),
            type_id=DataTypeId.uint8,
        ),
        # Reported in half percent steps
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

    return AttributeRegistry(thermostat + custom + power)


@PROFILES.register("eWeLink", "SNZB-04P", config=SONOFF_CONFIG)
def snzb04p() -> AttributeRegistry:
    """SONOFF SNZB-04P contact sensor."""
    entries = [
        # Alarm 1 of the zone status
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_IAS_ZONE, 0x0002),
            event_name="contact",
            type_id=DataTypeId.map16,
            values={0: "closed", 1: "open"},
            bitmask=0x0001,
        ),
        RegistryEntry(
            key=sonoff_key(0x2000),
            event_name="tamper",
            type_id=DataTypeId.bool_,
            values={False: "clear", True: "detected"},
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
            scale=DivideBy(2),
            type_id=DataTypeId.uint8,
            precision=0,
            limits=(0, 100),
        ),
    ]

    return AttributeRegistry(entries)
