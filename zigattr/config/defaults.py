from __future__ import annotations

from zigattr.registry import DEFAULT_DIVISORS, UNIT_PRECISION
from zigattr.tlv import UnknownTypePolicy

CONF_NAME_DEFAULT = "device"
CONF_UNKNOWN_TYPE_POLICY_DEFAULT = UnknownTypePolicy.ABORT.value
CONF_UNKNOWN_TYPE_SKIP_WIDTH_DEFAULT = 1
CONF_DIVISORS_DEFAULT = dict(DEFAULT_DIVISORS)
CONF_OFFSETS_DEFAULT: dict[str, float] = {}
CONF_PRECISION_DEFAULT = dict(UNIT_PRECISION)
