"""Binary serialization of Clarity values.

This is a recursive-descent decoder for the consensus wire format used by
read-only contract calls. Decoding never guesses: an unknown type prefix,
truncated input or trailing bytes raise ``ClarityDecodeError``.
"""

import string
from typing import Any, Union

from .exceptions import ClarityDecodeError, ClarityEncodeError
from .values import (
    BoolValue,
    BufferValue,
    ClarityType,
    ClarityValue,
    ContractPrincipalValue,
    IntValue,
    ListValue,
    NoneValue,
    ResponseErrValue,
    ResponseOkValue,
    SomeValue,
    StandardPrincipalValue,
    StringASCIIValue,
    StringUTF8Value,
    TupleValue,
    UIntValue,
)

INT_BYTES = 16
UINT_MAX = 2**128 - 1
INT_MIN = -(2**127)
INT_MAX = 2**127 - 1
MAX_DEPTH = 32
PRINCIPAL_VERSION_LIMIT = 32

# (ok u<n>) as returned by a read-only counter function
COUNT_RESULT_PREFIX = "0x0701"


class _Reader:
    """Cursor over the bytes being decoded."""

    def __init__(self, data: bytes, raw: str):
        self.data = data
        self.raw = raw
        self.offset = 0

    def read(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ClarityDecodeError(
                f"Unexpected end of input: needed {size} bytes",
                raw_data=self.raw,
                offset=self.offset,
            )
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        return int.from_bytes(self.read(4), "big")

    def fail(self, message: str) -> ClarityDecodeError:
        return ClarityDecodeError(message, raw_data=self.raw, offset=self.offset)


def hex_to_bytes(text: str) -> bytes:
    """Convert ``0x``-prefixed (or bare) hex text to bytes."""
    cleaned = text.strip()
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    if not cleaned:
        raise ClarityDecodeError("Empty hex string", raw_data=text)
    if len(cleaned) % 2 or not all(c in string.hexdigits for c in cleaned):
        raise ClarityDecodeError("Invalid hex string", raw_data=text)
    return bytes.fromhex(cleaned)


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def decode(data: Union[bytes, str]) -> ClarityValue:
    """Decode one serialized Clarity value.

    Args:
        data: Raw bytes or hex text, with or without the ``0x`` prefix

    Returns:
        ClarityValue: The decoded value

    Raises:
        ClarityDecodeError: If the input is not exactly one valid value
    """
    if isinstance(data, str):
        raw = data
        data = hex_to_bytes(data)
    else:
        raw = to_hex(data)

    reader = _Reader(data, raw)
    value = _decode_value(reader, depth=0)
    if reader.offset != len(data):
        raise reader.fail(f"{len(data) - reader.offset} trailing bytes after value")
    return value


def _decode_value(reader: _Reader, depth: int) -> ClarityValue:
    if depth > MAX_DEPTH:
        raise reader.fail(f"Value nesting exceeds {MAX_DEPTH}")

    prefix = reader.read_u8()
    try:
        type_id = ClarityType(prefix)
    except ValueError:
        raise ClarityDecodeError(
            f"Unknown Clarity type prefix 0x{prefix:02x}",
            raw_data=reader.raw,
            offset=reader.offset - 1,
        ) from None

    if type_id == ClarityType.INT:
        return IntValue(int.from_bytes(reader.read(INT_BYTES), "big", signed=True))
    if type_id == ClarityType.UINT:
        return UIntValue(int.from_bytes(reader.read(INT_BYTES), "big"))
    if type_id == ClarityType.BUFFER:
        return BufferValue(reader.read(reader.read_u32()))
    if type_id == ClarityType.BOOL_TRUE:
        return BoolValue(True)
    if type_id == ClarityType.BOOL_FALSE:
        return BoolValue(False)
    if type_id == ClarityType.PRINCIPAL_STANDARD:
        version = _read_version(reader)
        return StandardPrincipalValue(version=version, hash160=reader.read(20))
    if type_id == ClarityType.PRINCIPAL_CONTRACT:
        version = _read_version(reader)
        hash160 = reader.read(20)
        name = _read_name(reader)
        return ContractPrincipalValue(
            version=version, hash160=hash160, contract_name=name
        )
    if type_id == ClarityType.RESPONSE_OK:
        return ResponseOkValue(_decode_value(reader, depth + 1))
    if type_id == ClarityType.RESPONSE_ERR:
        return ResponseErrValue(_decode_value(reader, depth + 1))
    if type_id == ClarityType.OPTIONAL_NONE:
        return NoneValue()
    if type_id == ClarityType.OPTIONAL_SOME:
        return SomeValue(_decode_value(reader, depth + 1))
    if type_id == ClarityType.LIST:
        length = reader.read_u32()
        return ListValue(
            tuple(_decode_value(reader, depth + 1) for _ in range(length))
        )
    if type_id == ClarityType.TUPLE:
        length = reader.read_u32()
        data = {}
        for _ in range(length):
            name = _read_name(reader)
            if name in data:
                raise reader.fail(f"Duplicate tuple field {name!r}")
            data[name] = _decode_value(reader, depth + 1)
        return TupleValue(data)
    if type_id == ClarityType.STRING_ASCII:
        raw = reader.read(reader.read_u32())
        try:
            return StringASCIIValue(raw.decode("ascii"))
        except UnicodeDecodeError:
            raise reader.fail("string-ascii contains non-ASCII bytes") from None
    # ClarityType.STRING_UTF8 is the only remaining member
    raw = reader.read(reader.read_u32())
    try:
        return StringUTF8Value(raw.decode("utf-8"))
    except UnicodeDecodeError:
        raise reader.fail("string-utf8 is not valid UTF-8") from None


def _read_version(reader: _Reader) -> int:
    # Principal versions are a single c32 digit
    version = reader.read_u8()
    if version >= PRINCIPAL_VERSION_LIMIT:
        raise ClarityDecodeError(
            f"Invalid principal version {version}",
            raw_data=reader.raw,
            offset=reader.offset - 1,
        )
    return version


def _read_name(reader: _Reader) -> str:
    raw = reader.read(reader.read_u8())
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError:
        raise reader.fail("Clarity name contains non-ASCII bytes") from None


def encode_uint(value: int) -> bytes:
    """Serialize ``value`` as a Clarity uint: ``0x01`` + 16-byte big-endian."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"uint must be an int, got {type(value).__name__}")
    if not 0 <= value <= UINT_MAX:
        raise ValueError(f"uint out of range: {value}")
    return bytes([ClarityType.UINT]) + value.to_bytes(INT_BYTES, "big")


def encode(value: ClarityValue) -> bytes:
    """Serialize a Clarity value to its wire encoding."""
    type_id = getattr(value, "type_id", None)
    if not isinstance(type_id, ClarityType):
        raise ClarityEncodeError(f"Cannot encode {type(value).__name__}")
    prefix = bytes([type_id])

    if isinstance(value, UIntValue):
        return encode_uint(value.value)
    if isinstance(value, IntValue):
        if not INT_MIN <= value.value <= INT_MAX:
            raise ClarityEncodeError(f"int out of range: {value.value}")
        return prefix + value.value.to_bytes(INT_BYTES, "big", signed=True)
    if isinstance(value, BufferValue):
        return prefix + _length(value.value) + value.value
    if isinstance(value, BoolValue):
        return prefix
    if isinstance(value, StandardPrincipalValue):
        return prefix + bytes([value.version]) + value.hash160
    if isinstance(value, ContractPrincipalValue):
        return (
            prefix
            + bytes([value.version])
            + value.hash160
            + _name(value.contract_name)
        )
    if isinstance(value, (ResponseOkValue, ResponseErrValue, SomeValue)):
        return prefix + encode(value.value)
    if isinstance(value, NoneValue):
        return prefix
    if isinstance(value, ListValue):
        return prefix + _length(value.items) + b"".join(encode(v) for v in value.items)
    if isinstance(value, TupleValue):
        # Fields are serialized in sorted name order
        body = b"".join(
            _name(name) + encode(value.data[name]) for name in sorted(value.data)
        )
        return prefix + _length(value.data) + body
    if isinstance(value, StringASCIIValue):
        raw = value.value.encode("ascii")
        return prefix + _length(raw) + raw
    if isinstance(value, StringUTF8Value):
        raw = value.value.encode("utf-8")
        return prefix + _length(raw) + raw

    raise ClarityEncodeError(f"Cannot encode {type(value).__name__}")


def _length(sized: Any) -> bytes:
    return len(sized).to_bytes(4, "big")


def _name(name: str) -> bytes:
    raw = name.encode("ascii")
    if len(raw) > 128:
        raise ClarityEncodeError(f"Clarity name too long: {name!r}")
    return bytes([len(raw)]) + raw


def unwrap(value: ClarityValue, include_err: bool = True) -> ClarityValue:
    """Strip response and optional wrappers until a concrete value remains.

    ``none`` is returned as-is so callers can tell an empty slot apart.
    With ``include_err=False`` an ``(err ...)`` is kept too.
    """
    wrappers = (ResponseOkValue, SomeValue)
    if include_err:
        wrappers = wrappers + (ResponseErrValue,)

    while isinstance(value, wrappers):
        value = value.value
    return value


def decode_count(result_hex: str) -> int:
    """Decode the scalar result of a read-only counter call.

    A result starting with ``0x0701`` (ok + uint) is parsed leniently: the
    remaining hex digits are read as a big-endian integer whatever their
    width. Any other result must decode fully to an (optionally wrapped) uint.

    Raises:
        ClarityDecodeError: If the result is not valid hex or not a uint
    """
    if not isinstance(result_hex, str):
        raise ClarityDecodeError(
            f"Count result must be a hex string, got {type(result_hex).__name__}"
        )

    text = result_hex.strip()
    if text.lower().startswith(COUNT_RESULT_PREFIX):
        digits = text[len(COUNT_RESULT_PREFIX) :]
        if (
            not digits
            or len(digits) > INT_BYTES * 2
            or not all(c in string.hexdigits for c in digits)
        ):
            raise ClarityDecodeError("Invalid uint hex in count result", raw_data=text)
        return int(digits, 16)

    value = unwrap(decode(text), include_err=False)
    if not isinstance(value, UIntValue):
        raise ClarityDecodeError(
            f"Count result is {type(value).__name__}, expected a uint",
            raw_data=text,
        )
    return value.value


def to_python(value: ClarityValue) -> Any:
    """Convert a Clarity value to plain JSON-compatible Python data."""
    if isinstance(value, (IntValue, UIntValue, BoolValue)):
        return value.value
    if isinstance(value, (StringASCIIValue, StringUTF8Value)):
        return value.value
    if isinstance(value, BufferValue):
        return to_hex(value.value)
    if isinstance(value, (StandardPrincipalValue, ContractPrincipalValue)):
        return value.address
    if isinstance(value, ResponseOkValue):
        return {"ok": to_python(value.value)}
    if isinstance(value, ResponseErrValue):
        return {"err": to_python(value.value)}
    if isinstance(value, NoneValue):
        return None
    if isinstance(value, SomeValue):
        return to_python(value.value)
    if isinstance(value, ListValue):
        return [to_python(item) for item in value.items]
    if isinstance(value, TupleValue):
        return {name: to_python(item) for name, item in value.data.items()}
    raise TypeError(f"Not a Clarity value: {type(value).__name__}")
