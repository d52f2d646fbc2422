from __future__ import annotations

import enum
import struct
import typing

from typing_extensions import Self

CALLABLE_T = typing.TypeVar("CALLABLE_T", bound=typing.Callable)

NOT_SET = object()


class FixedIntType(int):
    _signed = None
    _bits = None
    _size = None
    _byteorder = "little"

    min_value: int
    max_value: int

    def __new__(cls, *args, **kwargs):
        if cls._signed is None or cls._bits is None:
            raise TypeError(f"{cls} is abstract and cannot be created")

        n = super().__new__(cls, *args, **kwargs)

        # We use `n + 0` to convert `n` into an integer without calling `int()`
        if not cls.min_value <= n + 0 <= cls.max_value:
            raise ValueError(
                f"{int(n)} is not an {'un' if not cls._signed else ''}signed"
                f" {cls._bits} bit integer"
            )

        return n

    def _hex_repr(self):
        return f"0x{{:0{self._bits // 4}X}}".format(int(self))

    def __init_subclass__(cls, signed=NOT_SET, bits=NOT_SET, repr=NOT_SET) -> None:
        super().__init_subclass__()

        if signed is not NOT_SET:
            cls._signed = signed

        if bits is not NOT_SET:
            if bits % 8 != 0:
                raise TypeError(f"Integer type with {bits} bits is not byte aligned")

            cls._bits = bits
            cls._size = bits // 8

        if cls._bits is not None and cls._signed is not None:
            if cls._signed:
                cls.min_value = -(2 ** (cls._bits - 1))
                cls.max_value = 2 ** (cls._bits - 1) - 1
            else:
                cls.min_value = 0
                cls.max_value = 2**cls._bits - 1

        if repr == "hex":
            cls.__str__ = cls.__repr__ = cls._hex_repr
        elif not repr:
            cls.__str__ = super().__str__
            cls.__repr__ = super().__repr__
        elif repr is not NOT_SET:
            raise ValueError(f"Invalid repr value {repr!r}. Must be hex")

        # XXX: The enum module sabotages pickling using the same logic.
        if "__reduce_ex__" not in cls.__dict__:
            cls.__reduce_ex__ = cls.__reduce_ex__

    def serialize(self) -> bytes:
        return self.to_bytes(self._size, self._byteorder, signed=self._signed)

    @classmethod
    def deserialize(cls, data: bytes) -> tuple[Self, bytes]:
        if len(data) < cls._size:
            raise ValueError(f"Data is too short to contain {cls._size} bytes")

        # Two's complement recovery happens in `from_bytes` for every signed width
        r = cls.from_bytes(data[: cls._size], cls._byteorder, signed=cls._signed)
        return r, data[cls._size :]


class uint_t(FixedIntType, signed=False):
    pass


class int_t(FixedIntType, signed=True):
    pass


class int8s(int_t, bits=8):
    pass


class int16s(int_t, bits=16):
    pass


class int24s(int_t, bits=24):
    pass


class int32s(int_t, bits=32):
    pass


class int48s(int_t, bits=48):
    pass


class int64s(int_t, bits=64):
    pass


class uint8_t(uint_t, bits=8):
    pass


class uint16_t(uint_t, bits=16):
    pass


class uint24_t(uint_t, bits=24):
    pass


class uint32_t(uint_t, bits=32):
    pass


class uint48_t(uint_t, bits=48):
    pass


class uint64_t(uint_t, bits=64):
    pass


class _IntEnumMeta(enum.EnumMeta):
    def __call__(cls, value, *args, **kwargs):
        if isinstance(value, str):
            if value.startswith("0x"):
                value = int(value, base=16)
            elif value.isnumeric():
                value = int(value)
            elif value.startswith(cls.__name__ + "."):
                value = cls[value[len(cls.__name__) + 1 :]].value
            else:
                value = cls[value].value
        return super().__call__(value, *args, **kwargs)


def enum_factory(int_type: CALLABLE_T, undefined: str = "undefined") -> CALLABLE_T:
    """Enum factory."""

    class _NewEnum(int_type, enum.Enum, metaclass=_IntEnumMeta):
        @classmethod
        def _missing_(cls, value):
            new = cls._member_type_.__new__(cls, value)
            new._name_ = f"{undefined}_{new._hex_repr().lower()}"
            new._value_ = value
            return new

        def __format__(self, format_spec: str) -> str:
            if format_spec:
                # Allow formatting the integer enum value
                return self._member_type_.__format__(self, format_spec)
            else:
                # Otherwise, format it as its string representation
                return object.__format__(repr(self), format_spec)

    return _NewEnum


class enum8(enum_factory(uint8_t)):  # noqa: N801
    pass


class enum16(enum_factory(uint16_t)):  # noqa: N801
    pass


class BaseFloat(float):
    _format = None
    _size = None

    def __init_subclass__(cls, fmt: str) -> None:
        super().__init_subclass__()
        cls._format = fmt
        cls._size = struct.calcsize(fmt)

    def serialize(self) -> bytes:
        try:
            return struct.pack(self._format, self)
        except (OverflowError, struct.error) as exc:
            raise ValueError(
                f"{float(self)!r} does not fit in {self._size * 8} bit float"
            ) from exc

    @classmethod
    def deserialize(cls, data: bytes) -> tuple[Self, bytes]:
        if len(data) < cls._size:
            raise ValueError(f"Data is too short to contain {cls._size} bytes")

        (value,) = struct.unpack(cls._format, data[: cls._size])
        return cls(value), data[cls._size :]


class Single(BaseFloat, fmt="<f"):
    pass


class Double(BaseFloat, fmt="<d"):
    pass


class FixedBytes(bytes):
    """Opaque block of raw bytes with a fixed length."""

    _length = None

    def __init_subclass__(cls, length: int) -> None:
        super().__init_subclass__()
        cls._length = length
        cls._size = length

    def serialize(self) -> bytes:
        if len(self) != self._length:
            raise ValueError(
                f"Invalid length for {self!r}: expected {self._length}, got {len(self)}"
            )
        return bytes(self)

    @classmethod
    def deserialize(cls, data: bytes) -> tuple[Self, bytes]:
        if len(data) < cls._length:
            raise ValueError(f"Data is too short to contain {cls._length} bytes")

        return cls(data[: cls._length]), data[cls._length :]


class data8(FixedBytes, length=1):  # noqa: N801
    """General data, Discrete, 8 bit."""


class data16(FixedBytes, length=2):  # noqa: N801
    """General data, Discrete, 16 bit."""


class data24(FixedBytes, length=3):  # noqa: N801
    """General data, Discrete, 24 bit."""


class data32(FixedBytes, length=4):  # noqa: N801
    """General data, Discrete, 32 bit."""


class data48(FixedBytes, length=6):  # noqa: N801
    """General data, Discrete, 48 bit."""


class data64(FixedBytes, length=8):  # noqa: N801
    """General data, Discrete, 64 bit."""


class LVBytes(bytes):
    _prefix_length = 1

    def serialize(self):
        if len(self) >= pow(256, self._prefix_length) - 1:
            raise ValueError("OctetString is too long")
        return len(self).to_bytes(self._prefix_length, "little", signed=False) + self

    @classmethod
    def deserialize(cls, data):
        if len(data) < cls._prefix_length:
            raise ValueError("Data is too short")

        num_bytes = int.from_bytes(data[: cls._prefix_length], "little")

        if len(data) < cls._prefix_length + num_bytes:
            raise ValueError("Data is too short")

        s = data[cls._prefix_length : cls._prefix_length + num_bytes]

        return cls(s), data[cls._prefix_length + num_bytes :]


class CharacterString(str):
    _prefix_length = 1

    def serialize(self) -> bytes:
        raw = self.encode("utf8")
        if len(raw) >= pow(256, self._prefix_length) - 1:
            raise ValueError("String is too long")

        return len(raw).to_bytes(self._prefix_length, "little", signed=False) + raw

    @classmethod
    def deserialize(cls, data: bytes) -> tuple[Self, bytes]:
        if len(data) < cls._prefix_length:
            raise ValueError("Data is too short")

        length = int.from_bytes(data[: cls._prefix_length], "little")

        if len(data) < cls._prefix_length + length:
            raise ValueError("Data is too short")

        raw = data[cls._prefix_length : cls._prefix_length + length]
        text = raw.split(b"\x00")[0].decode("utf8", errors="replace")

        return cls(text), data[cls._prefix_length + length :]
