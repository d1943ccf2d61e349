"""Tests for decoding get-poll results."""

import pytest

from voting_backend.services.processing.clarity import (
    ClarityDecodeError,
    ContractPrincipalValue,
    IntValue,
    NoneValue,
    ResponseErrValue,
    ResponseOkValue,
    SomeValue,
    StandardPrincipalValue,
    StringASCIIValue,
    TupleValue,
    UIntValue,
    encode,
    to_hex,
)
from voting_backend.services.voting import Poll, PollDecodeError, decode_poll

CREATOR = "SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7"


def wrap(value) -> str:
    return to_hex(encode(ResponseOkValue(value)))


def test_decode_full_poll(poll_hex) -> None:
    result = poll_hex(3, title="Vote A", yes_votes=10, no_votes=3, is_active=False)

    assert decode_poll(3, result) == Poll(
        poll_id=3,
        creator=CREATOR,
        title="Vote A",
        description="A poll",
        yes_votes=10,
        no_votes=3,
        end_block=1000,
        is_active=False,
    )


def test_poll_json_uses_camel_case(poll_hex) -> None:
    poll = decode_poll(0, poll_hex(0, yes_votes=2))

    assert poll.to_dict() == {
        "pollId": 0,
        "creator": CREATOR,
        "title": "Poll 0",
        "description": "A poll",
        "yesVotes": 2,
        "noVotes": 0,
        "endBlock": 1000,
        "isActive": True,
    }


def test_decode_empty_slot() -> None:
    assert decode_poll(1, wrap(NoneValue())) is None
    assert decode_poll(1, to_hex(encode(NoneValue()))) is None


def test_missing_fields_keep_zero_values() -> None:
    result = wrap(SomeValue(TupleValue({"title": StringASCIIValue("Only a title")})))

    assert decode_poll(4, result) == Poll(poll_id=4, title="Only a title")


def test_contract_principal_creator() -> None:
    creator = ContractPrincipalValue.from_address(f"{CREATOR}.dao")
    result = wrap(SomeValue(TupleValue({"creator": creator})))

    assert decode_poll(0, result).creator == f"{CREATOR}.dao"


def test_wrong_field_type_is_rejected() -> None:
    result = wrap(SomeValue(TupleValue({"yes-votes": IntValue(10)})))

    with pytest.raises(PollDecodeError, match="yes-votes"):
        decode_poll(2, result)


def test_err_result_is_rejected() -> None:
    with pytest.raises(PollDecodeError):
        decode_poll(2, to_hex(encode(ResponseErrValue(UIntValue(404)))))


def test_non_tuple_is_rejected() -> None:
    with pytest.raises(PollDecodeError):
        decode_poll(2, wrap(SomeValue(UIntValue(1))))


def test_invalid_hex_is_decode_error() -> None:
    with pytest.raises(ClarityDecodeError):
        decode_poll(2, "0xnothex")


def test_creator_with_invalid_version_is_a_decode_error() -> None:
    creator = StandardPrincipalValue(version=0x40, hash160=bytes(20))
    result = wrap(SomeValue(TupleValue({"creator": creator})))

    with pytest.raises(ClarityDecodeError):
        decode_poll(4, result)
