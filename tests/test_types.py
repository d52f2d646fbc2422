import itertools
import math
import struct

import pytest

import zigattr.types as t


def test_abstract_ints():
    assert issubclass(t.uint8_t, t.uint_t)
    assert not issubclass(t.uint8_t, t.int_t)
    assert t.int_t._signed is True
    assert t.uint_t._signed is False
    assert t.int_t._byteorder == "little"

    with pytest.raises(TypeError):
        t.int_t(0)

    with pytest.raises(TypeError):
        t.FixedIntType(0)


def test_unaligned_int_rejected():
    with pytest.raises(TypeError):

        class uint7_t(t.uint_t, bits=7):  # noqa: N801
            pass


def test_int_out_of_bounds():
    assert t.uint8_t._size == 1
    assert t.uint8_t._bits == 8

    t.uint8_t(0)

    with pytest.raises(ValueError):
        t.uint8_t(-1)

    with pytest.raises(ValueError):
        t.uint8_t(0xFF + 1)

    with pytest.raises(ValueError):
        t.int8s(128)


def test_int_too_short():
    with pytest.raises(ValueError):
        t.uint8_t.deserialize(b"")

    with pytest.raises(ValueError):
        t.uint16_t.deserialize(b"\x00")

    with pytest.raises(ValueError):
        t.uint48_t.deserialize(b"\x00" * 5)


@pytest.mark.parametrize(
    ("cls", "size"),
    [
        (t.uint8_t, 1),
        (t.uint16_t, 2),
        (t.uint24_t, 3),
        (t.uint32_t, 4),
        (t.uint48_t, 6),
        (t.uint64_t, 8),
        (t.int8s, 1),
        (t.int16s, 2),
        (t.int24s, 3),
        (t.int32s, 4),
        (t.int48s, 6),
        (t.int64s, 8),
    ],
)
def test_int_limits(cls, size):
    assert cls._size == size

    if cls._signed:
        assert cls.min_value == -(2 ** (size * 8 - 1))
        assert cls.max_value == 2 ** (size * 8 - 1) - 1
    else:
        assert cls.min_value == 0
        assert cls.max_value == 2 ** (size * 8) - 1

    for value in (cls.min_value, cls.max_value):
        data = cls(value).serialize()
        assert len(data) == size
        assert cls.deserialize(data + b"extra") == (value, b"extra")


def test_ints_signed():
    assert t.int8s.deserialize(b"\xec") == (-20, b"")
    assert t.int16s.deserialize(b"\xff\xff") == (-1, b"")
    assert t.int24s.deserialize(b"\x00\x00\x80") == (-(2**23), b"")
    assert t.int48s.deserialize(b"\xfe\xff\xff\xff\xff\xff") == (-2, b"")

    assert t.int16s(-1).serialize() == b"\xff\xff"
    assert t.int24s(-2).serialize() == b"\xfe\xff\xff"


def test_ints_little_endian():
    assert t.uint16_t.deserialize(b"\xe8\x03") == (1000, b"")
    assert t.uint24_t(0x123456).serialize() == b"\x56\x34\x12"
    assert t.uint48_t(0x0102030405).serialize() == b"\x05\x04\x03\x02\x01\x00"


def test_int_repr():
    assert repr(t.uint16_t(1000)) == "1000"
    assert repr(t.ClusterId(0x0B04)) == "0x0B04"
    assert str(t.AttributeId(0x00F7)) == "0x00F7"
    assert repr(t.ManufacturerCode(0x115F)) == "0x115F"


def compare_with_nan(v1, v2):
    if not math.isnan(v1) ^ math.isnan(v2):
        return True

    return v1 == v2


@pytest.mark.parametrize(
    "value",
    [
        1.25,
        0,
        -1.25,
        230.5,
        float("nan"),
        float("+inf"),
        float("-inf"),
    ],
)
def test_single_and_double_with_struct(value):
    # Float and double must match the behavior of the built-in struct module
    assert t.Single(value).serialize() == struct.pack("<f", value)
    v1, r1 = t.Single.deserialize(struct.pack("<f", value))
    assert compare_with_nan(v1, t.Single(value))
    assert r1 == b""

    assert t.Double(value).serialize() == struct.pack("<d", value)
    v2, r2 = t.Double.deserialize(struct.pack("<d", value))
    assert compare_with_nan(v2, t.Double(value))
    assert r2 == b""


def test_float_parsing_errors():
    with pytest.raises(ValueError):
        t.Double.deserialize(b"\x00\x00\x00\x00\x00\x00\x00")

    with pytest.raises(ValueError):
        t.Single.deserialize(b"\x00\x00\x00")


def test_single_overflow():
    with pytest.raises(ValueError):
        t.Single(1e39).serialize()

    # Doubles take it
    t.Double(1e39).serialize()


def test_fixed_bytes():
    assert t.data8._size == 1
    assert t.data48._size == 6

    d, r = t.data16.deserialize(b"\x01\x02\x03")
    assert d == b"\x01\x02"
    assert r == b"\x03"

    assert t.data24(b"abc").serialize() == b"abc"

    with pytest.raises(ValueError):
        t.data24(b"ab").serialize()

    with pytest.raises(ValueError):
        t.data32.deserialize(b"abc")


def test_lvbytes():
    d, r = t.LVBytes.deserialize(b"\x0412345")
    assert r == b"5"
    assert d == b"1234"

    assert t.LVBytes.serialize(d) == b"\x041234"


def test_lvbytes_too_short():
    with pytest.raises(ValueError):
        t.LVBytes.deserialize(b"")

    with pytest.raises(ValueError):
        t.LVBytes.deserialize(b"\x04123")


def test_lvbytes_too_long():
    to_serialize = b"".join(itertools.repeat(b"\xbe", 255))
    with pytest.raises(ValueError):
        t.LVBytes(to_serialize).serialize()


def test_lvbytes_0_len():
    to_deserialize = b"\x00abcdef"
    r, rest = t.LVBytes.deserialize(to_deserialize)
    assert r == b""
    assert rest == b"abcdef"
    assert t.LVBytes(b"").serialize() == b"\00"


def test_character_string():
    assert t.CharacterString() == ""

    d, r = t.CharacterString.deserialize(b"\x0412345")
    assert r == b"5"
    assert d == "1234"

    assert t.CharacterString.serialize(d) == b"\x041234"

    # test null char stripping
    d, _ = t.CharacterString.deserialize(b"\x05abc\x00ef")
    assert d == "abc"


def test_character_string_decode_failure():
    d, _ = t.CharacterString.deserialize(b"\x04\xf9123\xff\xff45")
    assert d == "�123"


def test_char_string_too_short():
    with pytest.raises(ValueError):
        t.CharacterString.deserialize(b"")

    with pytest.raises(ValueError):
        t.CharacterString.deserialize(b"\x04123")


def test_enum_undef():
    class TestEnum(t.enum8):
        Member = 0x00

    assert TestEnum(0x00) is TestEnum.Member
    assert TestEnum("Member") is TestEnum.Member
    assert TestEnum("0x00") is TestEnum.Member

    undefined = TestEnum(0xAB)
    assert undefined == 0xAB
    assert undefined.name == "undefined_0xab"
    assert undefined.serialize() == b"\xab"
    assert TestEnum.deserialize(b"\xab\x01") == (undefined, b"\x01")


def test_enum_formatting():
    class TestEnum(t.enum16):
        Member = 0x1234

    assert f"{TestEnum.Member}" == "<TestEnum.Member: 4660>"
    assert f"{TestEnum.Member:04X}" == "1234"
    assert TestEnum.Member.serialize() == b"\x34\x12"


def test_bool():
    assert t.Bool.deserialize(b"\x01") == (t.Bool.true, b"")
    assert t.Bool.deserialize(b"\x00\x02") == (t.Bool.false, b"\x02")
    assert t.Bool(1).serialize() == b"\x01"


@pytest.mark.parametrize(
    ("value", "result"),
    [
        ("E803", b"\xe8\x03"),
        ("e8:03", b"\xe8\x03"),
        ("0xE803", b"\xe8\x03"),
        (" E8 03 ", b"\xe8\x03"),
        ("", b""),
    ],
)
def test_hex_string_to_bytes(value, result):
    assert t.hex_string_to_bytes(value) == result


def test_hex_string_to_bytes_invalid():
    with pytest.raises(ValueError):
        t.hex_string_to_bytes("E80")

    with pytest.raises(ValueError):
        t.hex_string_to_bytes("ZZ")


def test_bytes_to_hex_string():
    assert t.bytes_to_hex_string(b"\xe8\x03") == "E803"


def test_deserialize_schema():
    values, rest = t.deserialize(b"\x0b\x05\x29\xff", [t.AttributeId, t.uint8_t])
    assert values == [0x050B, 0x29]
    assert rest == b"\xff"

    assert t.serialize(values, [t.AttributeId, t.uint8_t]) == b"\x0b\x05\x29"
