from __future__ import annotations

import typing


class ZigattrException(Exception):
    """Base exception class"""


class CodecError(ZigattrException, ValueError):
    """A value could not be decoded or encoded"""


class UnknownType(CodecError):
    """A type code has no known width or interpretation"""

    def __init__(self, code: int) -> None:
        super().__init__(f"Unknown data type 0x{int(code):02X}")
        self.code = int(code)


class Truncated(CodecError):
    """Fewer bytes remain than the declared width requires"""

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(f"Data is too short: need {needed} bytes, got {available}")
        self.needed = needed
        self.available = available


class OutOfRange(CodecError):
    """A value does not fit the declared type"""

    def __init__(self, value: typing.Any, type_id: typing.Any, reason: str = "") -> None:
        message = f"{value!r} cannot be encoded as {type_id!r}"
        if reason:
            message = f"{message}: {reason}"

        super().__init__(message)
        self.value = value
        self.type_id = type_id


class MalformedData(CodecError):
    """Raw input is not a valid hex string"""


class RegistryError(ZigattrException):
    """An attribute registry is inconsistent or was asked for something it lacks"""
