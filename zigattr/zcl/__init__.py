from __future__ import annotations

from zigattr.zcl import foundation
from zigattr.zcl.codec import ScalarValue, decode, decode_hex, encode, encode_hex
from zigattr.zcl.foundation import DataType, DataTypeId, Interpretation

__all__ = [
    "DataType",
    "DataTypeId",
    "Interpretation",
    "ScalarValue",
    "decode",
    "decode_hex",
    "encode",
    "encode_hex",
    "foundation",
]
