"""Registry entries of standard ZCL clusters shared by several devices."""

from __future__ import annotations

from zigattr import const
from zigattr.registry import (
    AttributeKey,
    DivideBy,
    DivideByRuntime,
    RegistryEntry,
)
from zigattr.zcl.foundation import DataTypeId

ON_OFF_VALUES = {False: "off", True: "on"}


def on_off() -> list[RegistryEntry]:
    return [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_ON_OFF, 0x0000),
            event_name="switch",
            type_id=DataTypeId.bool_,
            values=ON_OFF_VALUES,
        ),
    ]


def device_temperature() -> list[RegistryEntry]:
    return [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_DEVICE_TEMPERATURE, 0x0000),
            event_name="temperature",
            unit="°C",
            type_id=DataTypeId.int16,
        ),
    ]


def temperature_measurement(event_name: str = "temperature") -> list[RegistryEntry]:
    return [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_TEMPERATURE_MEASUREMENT, 0x0000),
            event_name=event_name,
            unit="°C",
            scale=DivideBy(100),
            type_id=DataTypeId.int16,
        ),
    ]


def metering() -> list[RegistryEntry]:
    """Current summation delivered, scaled by the announced multiplier and divisor."""
    return [
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_METERING, 0x0000),
            event_name="energy",
            unit="kWh",
            scale=DivideByRuntime("energy_divisor", "energy_multiplier"),
            type_id=DataTypeId.uint48,
        ),
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_METERING, 0x0301),
            event_name="energyMultiplier",
            type_id=DataTypeId.uint24,
            announces="energy_multiplier",
        ),
        RegistryEntry(
            key=AttributeKey(const.CLUSTER_METERING, 0x0302),
            event_name="energyDivisor",
            type_id=DataTypeId.uint24,
            announces="energy_divisor",
        ),
    ]


def electrical_measurement() -> list[RegistryEntry]:
    """RMS voltage, RMS current and active power, with their announced scaling.

    The divisor and multiplier attributes update the device's divisor table
    and produce no event of their own.
    """
    cluster = const.CLUSTER_ELECTRICAL_MEASUREMENT

    entries = [
        RegistryEntry(
            key=AttributeKey(cluster, 0x0505),
            event_name="voltage",
            unit="V",
            scale=DivideByRuntime("voltage_divisor", "voltage_multiplier"),
            type_id=DataTypeId.uint16,
        ),
        RegistryEntry(
            key=AttributeKey(cluster, 0x0508),
            event_name="amperage",
            unit="A",
            scale=DivideByRuntime("current_divisor", "current_multiplier"),
            type_id=DataTypeId.uint16,
        ),
        RegistryEntry(
            key=AttributeKey(cluster, 0x050B),
            event_name="power",
            unit="W",
            scale=DivideByRuntime("power_divisor", "power_multiplier"),
            type_id=DataTypeId.int16,
        ),
    ]

    for attribute, slot in (
        (0x0600, "voltage_multiplier"),
        (0x0601, "voltage_divisor"),
        (0x0602, "current_multiplier"),
        (0x0603, "current_divisor"),
        (0x0604, "power_multiplier"),
        (0x0605, "power_divisor"),
    ):
        entries.append(
            RegistryEntry(
                key=AttributeKey(cluster, attribute),
                event_name=slot,
                type_id=DataTypeId.uint16,
                announces=slot,
            )
        )

    return entries
