"""Config schemas and validation."""

from __future__ import annotations

import voluptuous as vol

from zigattr.config.defaults import (
    CONF_DIVISORS_DEFAULT,
    CONF_NAME_DEFAULT,
    CONF_OFFSETS_DEFAULT,
    CONF_PRECISION_DEFAULT,
    CONF_UNKNOWN_TYPE_POLICY_DEFAULT,
    CONF_UNKNOWN_TYPE_SKIP_WIDTH_DEFAULT,
)
from zigattr.config.validators import cv_hex, cv_merge, cv_policy

CONF_NAME = "name"
CONF_UNKNOWN_TYPE_POLICY = "unknown_type_policy"
CONF_UNKNOWN_TYPE_SKIP_WIDTH = "unknown_type_skip_width"
CONF_MANUFACTURER_CODE = "manufacturer_code"
CONF_DIVISORS = "divisors"
CONF_OFFSETS = "offsets"
CONF_PRECISION = "precision"

SCHEMA_DIVISORS = vol.All(
    {str: vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))},
    cv_merge(CONF_DIVISORS_DEFAULT),
)
SCHEMA_OFFSETS = vol.Schema({str: vol.Coerce(float)})
SCHEMA_PRECISION = vol.All(
    {str: vol.All(int, vol.Range(min=0, max=6))},
    cv_merge(CONF_PRECISION_DEFAULT),
)

CODEC_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=CONF_NAME_DEFAULT): str,
        vol.Optional(
            CONF_UNKNOWN_TYPE_POLICY, default=CONF_UNKNOWN_TYPE_POLICY_DEFAULT
        ): cv_policy,
        vol.Optional(
            CONF_UNKNOWN_TYPE_SKIP_WIDTH, default=CONF_UNKNOWN_TYPE_SKIP_WIDTH_DEFAULT
        ): vol.All(int, vol.Range(min=1, max=8)),
        vol.Optional(CONF_MANUFACTURER_CODE): vol.All(
            cv_hex, vol.Range(min=0, max=0xFFFF)
        ),
        vol.Optional(CONF_DIVISORS, default=CONF_DIVISORS_DEFAULT): SCHEMA_DIVISORS,
        vol.Optional(CONF_OFFSETS, default=CONF_OFFSETS_DEFAULT): SCHEMA_OFFSETS,
        vol.Optional(CONF_PRECISION, default=CONF_PRECISION_DEFAULT): SCHEMA_PRECISION,
    },
    extra=vol.PREVENT_EXTRA,
)
