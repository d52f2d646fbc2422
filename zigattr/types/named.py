from __future__ import annotations

import dataclasses
import typing

import attrs

from . import basic

if typing.TYPE_CHECKING:
    from typing_extensions import Self


class BaseDataclassMixin:
    def replace(self, **kwargs: typing.Any) -> Self:
        if dataclasses.is_dataclass(self):
            assert not isinstance(self, type)  # `is_dataclass` works on types as well
            return dataclasses.replace(self, **kwargs)
        else:
            return attrs.evolve(self, **kwargs)


def hex_string_to_bytes(hex_string: str) -> bytes:
    """Parses a hex string with optional colon delimiters and whitespace into bytes."""

    # Strips out whitespace and colons
    cleaned = "".join(hex_string.replace(":", "").split()).upper()
    if cleaned.startswith("0X"):
        cleaned = cleaned[2:]

    return bytes.fromhex(cleaned)


def bytes_to_hex_string(data: bytes) -> str:
    return data.hex().upper()


class Bool(basic.enum8):
    false = 0
    true = 1


class ClusterId(basic.uint16_t, repr="hex"):
    pass


class AttributeId(basic.uint16_t, repr="hex"):
    pass


class ManufacturerCode(basic.uint16_t, repr="hex"):
    pass
