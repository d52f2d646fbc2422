"""Cluster ids, manufacturer codes and attribute ids shared by device tables."""

from __future__ import annotations

# Manufacturer-specific clusters start here
MANUFACTURER_SPECIFIC_CLUSTER_MIN = 0xFC00

CLUSTER_BASIC = 0x0000
CLUSTER_POWER_CONFIGURATION = 0x0001
CLUSTER_DEVICE_TEMPERATURE = 0x0002
CLUSTER_ON_OFF = 0x0006
CLUSTER_LEVEL_CONTROL = 0x0008
CLUSTER_MULTISTATE_INPUT = 0x0012
CLUSTER_WINDOW_COVERING = 0x0102
CLUSTER_THERMOSTAT = 0x0201
CLUSTER_TEMPERATURE_MEASUREMENT = 0x0402
CLUSTER_HUMIDITY_MEASUREMENT = 0x0405
CLUSTER_IAS_ZONE = 0x0500
CLUSTER_METERING = 0x0702
CLUSTER_ELECTRICAL_MEASUREMENT = 0x0B04
CLUSTER_SONOFF = 0xFC11
CLUSTER_LUMI = 0xFCC0

MANUFACTURER_CODE_LUMI = 0x115F
MANUFACTURER_CODE_SONOFF = 0x1286

# Attributes whose payload is a tag-type-value stream
ATTR_LUMI_TLV = 0x00F7
ATTR_LUMI_TLV_LEGACY = 0x00DF
ATTR_BASIC_XIAOMI_TLV = 0xFF01
