from typing import Callable, Dict, Union
from unittest.mock import AsyncMock

import pytest

from voting_backend.config import AggregationConfig, ContractConfig
from voting_backend.services.integrations.hiro import ReadOnlyCallResult
from voting_backend.services.processing.clarity import (
    BoolValue,
    NoneValue,
    ResponseOkValue,
    SomeValue,
    StandardPrincipalValue,
    StringUTF8Value,
    TupleValue,
    UIntValue,
    encode,
    encode_uint,
    hex_to_bytes,
    to_hex,
)

CREATOR = "SP2J6ZY48GV1EZ5V2V5RB9MP66SW86PYKKNRV9EJ7"

# Read-only call outcome per poll id: a hex result, or an exception to raise
PollResponse = Union[str, ReadOnlyCallResult, Exception]


def poll_result_hex(poll_id: int, **fields) -> str:
    """Serialize ``(ok (some (tuple ...)))`` as returned by ``get-poll``."""
    data = {
        "creator": StandardPrincipalValue.from_address(CREATOR),
        "title": StringUTF8Value(fields.pop("title", f"Poll {poll_id}")),
        "description": StringUTF8Value("A poll"),
        "yes-votes": UIntValue(fields.pop("yes_votes", 0)),
        "no-votes": UIntValue(fields.pop("no_votes", 0)),
        "end-block": UIntValue(fields.pop("end_block", 1000)),
        "is-active": BoolValue(fields.pop("is_active", True)),
    }
    return to_hex(encode(ResponseOkValue(SomeValue(TupleValue(data)))))


EMPTY_POLL_HEX = to_hex(encode(ResponseOkValue(NoneValue())))


def count_result_hex(count: int) -> str:
    return to_hex(encode(ResponseOkValue(UIntValue(count))))


def make_node_api(count: Union[int, Exception], polls: Dict[int, PollResponse]):
    """Build a mocked node client serving a poll count and poll records.

    ``node_api.calls`` lists the ids of every ``get-poll`` lookup, in order.
    """
    node_api = AsyncMock()
    node_api.calls = []

    async def call_read_only(address, name, function, arguments, sender):
        if function == "get-poll-count":
            if isinstance(count, Exception):
                raise count
            return ReadOnlyCallResult(okay=True, result=count_result_hex(count))

        poll_id = int.from_bytes(hex_to_bytes(arguments[0])[1:], "big")
        assert arguments[0] == to_hex(encode_uint(poll_id))
        node_api.calls.append(poll_id)
        response = polls.get(poll_id, EMPTY_POLL_HEX)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, ReadOnlyCallResult):
            return response
        return ReadOnlyCallResult(okay=True, result=response)

    node_api.call_read_only.side_effect = call_read_only
    return node_api


@pytest.fixture
def contract() -> ContractConfig:
    return ContractConfig(
        address="ST33Y8RCP74098JCSPW5QHHCD6QN4H3XS9E4PVW1G",
        name="Blackadam-vote-contract",
        poll_count_function="get-poll-count",
        poll_function="get-poll",
        default_sender="ST33Y8RCP74098JCSPW5QHHCD6QN4H3XS9E4PVW1G",
    )


@pytest.fixture
def aggregation_settings() -> AggregationConfig:
    return AggregationConfig(pacing_delay_seconds=0, lookup_timeout_seconds=1)


@pytest.fixture
def node_api_factory() -> Callable:
    return make_node_api


@pytest.fixture
def poll_hex() -> Callable:
    return poll_result_hex
