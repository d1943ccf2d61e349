"""Tests for the Clarity binary codec."""

import pytest

from voting_backend.services.processing.clarity import (
    BoolValue,
    BufferValue,
    ClarityDecodeError,
    ClarityEncodeError,
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
    decode,
    decode_count,
    encode,
    encode_uint,
    to_hex,
    to_python,
    unwrap,
)

ADDRESS = "SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7"


def test_encode_uint_layout() -> None:
    """A uint is the 0x01 prefix followed by 16 big-endian bytes."""
    assert to_hex(encode_uint(0)) == "0x01" + "00" * 16
    assert to_hex(encode_uint(5)) == "0x01" + "00" * 15 + "05"
    assert to_hex(encode_uint(2**128 - 1)) == "0x01" + "ff" * 16


@pytest.mark.parametrize("value", [0, 1, 255, 2**64, 2**128 - 1])
def test_encode_uint_decodes_back(value: int) -> None:
    assert decode(encode_uint(value)) == UIntValue(value)


@pytest.mark.parametrize("value", [-1, 2**128, True, "5", 1.0])
def test_encode_uint_rejects_invalid(value) -> None:
    with pytest.raises(ValueError):
        encode_uint(value)


def test_decode_response_wrappers() -> None:
    assert decode("0x0703") == ResponseOkValue(BoolValue(True))
    assert decode("0x0804") == ResponseErrValue(BoolValue(False))
    assert decode("0x09") == NoneValue()
    assert decode("0a" + encode_uint(7).hex()) == SomeValue(UIntValue(7))


def test_decode_signed_int() -> None:
    assert decode("0x00" + "ff" * 16) == IntValue(-1)


def test_decode_strings_and_buffer() -> None:
    assert decode("0x0d00000002" + b"hi".hex()) == StringASCIIValue("hi")
    snowman = "☃".encode("utf-8")
    assert decode(f"0x0e{len(snowman):08x}{snowman.hex()}") == StringUTF8Value("☃")
    assert decode("0x0200000003abcdef") == BufferValue(bytes.fromhex("abcdef"))


def test_decode_list() -> None:
    data = "0x0b00000002" + encode_uint(1).hex() + encode_uint(2).hex()
    assert decode(data) == ListValue((UIntValue(1), UIntValue(2)))


def test_encode_tuple_uses_sorted_field_order() -> None:
    value = TupleValue({"b": BoolValue(True), "a": BoolValue(False)})
    expected = "0x0c00000002" + "0161" + "04" + "0162" + "03"
    assert to_hex(encode(value)) == expected


def test_principals_survive_encoding() -> None:
    standard = StandardPrincipalValue.from_address(ADDRESS)
    contract = ContractPrincipalValue.from_address(f"{ADDRESS}.vote")

    assert decode(encode(standard)).address == ADDRESS
    assert decode(encode(contract)).address == f"{ADDRESS}.vote"


def test_decode_accepts_hex_without_prefix() -> None:
    assert decode("03") == BoolValue(True)


def test_decode_invalid_hex() -> None:
    with pytest.raises(ClarityDecodeError):
        decode("0xzz")
    with pytest.raises(ClarityDecodeError):
        decode("0x031")
    with pytest.raises(ClarityDecodeError):
        decode("")


def test_decode_unknown_prefix() -> None:
    with pytest.raises(ClarityDecodeError) as exc_info:
        decode("0x0f")
    assert "0x0f" in str(exc_info.value)
    assert exc_info.value.offset == 0


def test_decode_truncated_input() -> None:
    with pytest.raises(ClarityDecodeError):
        decode("0x0100")


def test_decode_trailing_bytes() -> None:
    with pytest.raises(ClarityDecodeError) as exc_info:
        decode("0x0304")
    assert "trailing" in str(exc_info.value)


def test_decode_nesting_limit() -> None:
    with pytest.raises(ClarityDecodeError):
        decode("0x" + "0a" * 40 + "09")


def test_decode_invalid_ascii_string() -> None:
    with pytest.raises(ClarityDecodeError):
        decode("0x0d00000001ff")


def test_encode_rejects_non_clarity_value() -> None:
    with pytest.raises(ClarityEncodeError):
        encode("not a value")


def test_unwrap() -> None:
    wrapped = ResponseOkValue(SomeValue(UIntValue(3)))
    assert unwrap(wrapped) == UIntValue(3)
    assert unwrap(ResponseOkValue(NoneValue())) == NoneValue()

    err = ResponseErrValue(UIntValue(1))
    assert unwrap(err) == UIntValue(1)
    assert unwrap(err, include_err=False) == err


def test_decode_count_lenient_prefix() -> None:
    """The (ok uint) prefix is stripped whatever the width of the rest."""
    assert decode_count("0x0701000000000000000000000000000005") == 5
    assert decode_count("0x0701" + "00" * 15 + "2a") == 42
    assert decode_count("0x070100") == 0


def test_decode_count_full_decode() -> None:
    assert decode_count(to_hex(encode_uint(9))) == 9


def test_decode_count_rejects_non_uint() -> None:
    with pytest.raises(ClarityDecodeError):
        decode_count("0x0703")
    with pytest.raises(ClarityDecodeError):
        decode_count("0x0701zz")
    with pytest.raises(ClarityDecodeError):
        decode_count(None)


def test_to_python() -> None:
    value = ResponseOkValue(
        TupleValue(
            {
                "votes": ListValue((UIntValue(1), IntValue(-2))),
                "owner": StandardPrincipalValue.from_address(ADDRESS),
                "memo": SomeValue(BufferValue(b"\x01")),
                "empty": NoneValue(),
            }
        )
    )
    assert to_python(value) == {
        "ok": {"votes": [1, -2], "owner": ADDRESS, "memo": "0x01", "empty": None}
    }


@pytest.mark.parametrize("prefix", ["05", "06"])
def test_decode_rejects_out_of_range_principal_version(prefix: str) -> None:
    """Principal versions above the c32 range fail at decode time."""
    data = "0x" + prefix + "40" + "01" * 20
    if prefix == "06":
        data += "04" + b"vote".hex()

    with pytest.raises(ClarityDecodeError, match="principal version 64"):
        decode(data)


def test_decode_accepts_highest_principal_version() -> None:
    value = decode("0x05" + "1f" + "01" * 20)
    assert value == StandardPrincipalValue(version=31, hash160=b"\x01" * 20)
