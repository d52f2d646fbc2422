from __future__ import annotations

import typing

import voluptuous as vol

from zigattr.tlv import UnknownTypePolicy


def cv_hex(value: int | str) -> int:
    """Convert string with possible hex number into int."""
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise vol.Invalid(f"{value} is not a valid hex number")

    try:
        if value.lower().startswith("0x"):
            value = int(value, base=16)
        else:
            value = int(value)
    except ValueError as err:
        raise vol.Invalid(f"Could not convert '{value}' to number") from err

    return value


def cv_policy(value: str | UnknownTypePolicy) -> UnknownTypePolicy:
    """Validate an unknown type policy name."""
    if isinstance(value, UnknownTypePolicy):
        return value

    try:
        return UnknownTypePolicy(str(value).lower().strip())
    except ValueError as err:
        choices = ", ".join(p.value for p in UnknownTypePolicy)
        raise vol.Invalid(
            f"Invalid unknown type policy {value!r}, expected one of: {choices}"
        ) from err


def cv_merge(defaults: dict) -> typing.Callable[[dict], dict]:
    """Merge a validated mapping over its defaults."""

    def merge(value: dict) -> dict:
        return {**defaults, **value}

    return merge
