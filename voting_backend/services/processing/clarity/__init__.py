"""Clarity value codec.

Decodes and encodes the binary value format used by Stacks read-only
contract calls, and renders values in the Clarity repr format.
"""

from .codec import (
    UINT_MAX,
    decode,
    decode_count,
    encode,
    encode_uint,
    hex_to_bytes,
    to_hex,
    to_python,
    unwrap,
)
from .exceptions import ClarityDecodeError, ClarityEncodeError, ClarityError
from .rendering import extract_repr_field, extract_repr_fields, is_empty_repr, to_repr
from .values import (
    BoolValue,
    BufferValue,
    ClarityType,
    ClarityValue,
    ContractPrincipalValue,
    IntValue,
    ListValue,
    NoneValue,
    PrincipalValue,
    ResponseErrValue,
    ResponseOkValue,
    SomeValue,
    StandardPrincipalValue,
    StringASCIIValue,
    StringUTF8Value,
    TupleValue,
    UIntValue,
)

__all__ = [
    "UINT_MAX",
    "decode",
    "decode_count",
    "encode",
    "encode_uint",
    "hex_to_bytes",
    "to_hex",
    "to_python",
    "unwrap",
    "to_repr",
    "extract_repr_field",
    "extract_repr_fields",
    "is_empty_repr",
    "ClarityError",
    "ClarityDecodeError",
    "ClarityEncodeError",
    "ClarityType",
    "ClarityValue",
    "PrincipalValue",
    "BoolValue",
    "BufferValue",
    "ContractPrincipalValue",
    "IntValue",
    "ListValue",
    "NoneValue",
    "ResponseErrValue",
    "ResponseOkValue",
    "SomeValue",
    "StandardPrincipalValue",
    "StringASCIIValue",
    "StringUTF8Value",
    "TupleValue",
    "UIntValue",
]
