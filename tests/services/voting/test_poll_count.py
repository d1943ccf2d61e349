"""Tests for PollCountResolver."""

import pytest

from voting_backend.services.integrations.hiro import (
    HiroApiConnectionError,
    HiroApiError,
    ReadOnlyCallResult,
)
from voting_backend.services.voting import PollCountError, PollCountResolver


@pytest.mark.asyncio
async def test_resolve_count(node_api_factory, contract) -> None:
    node_api = node_api_factory(5, {})
    resolver = PollCountResolver(node_api, contract)

    assert await resolver.resolve_count("ST1SENDER") == 5

    node_api.call_read_only.assert_awaited_once_with(
        contract.address,
        contract.name,
        "get-poll-count",
        [],
        "ST1SENDER",
    )


@pytest.mark.asyncio
async def test_missing_sender_uses_default(node_api_factory, contract) -> None:
    node_api = node_api_factory(0, {})

    assert await PollCountResolver(node_api, contract).resolve_count(None) == 0

    assert node_api.call_read_only.await_args.args[4] == contract.default_sender


@pytest.mark.asyncio
async def test_lenient_count_result(node_api_factory, contract) -> None:
    node_api = node_api_factory(0, {})
    node_api.call_read_only.side_effect = None
    node_api.call_read_only.return_value = ReadOnlyCallResult(
        okay=True, result="0x0701000000000000000000000000000005"
    )

    assert await PollCountResolver(node_api, contract).resolve_count() == 5


@pytest.mark.asyncio
async def test_upstream_http_error(node_api_factory, contract) -> None:
    error = HiroApiError("HTTP 503", status_code=503, response_body="unavailable")
    resolver = PollCountResolver(node_api_factory(error, {}), contract)

    with pytest.raises(PollCountError) as exc_info:
        await resolver.resolve_count()

    assert exc_info.value.status_code == 503
    assert exc_info.value.details == "unavailable"


@pytest.mark.asyncio
async def test_network_failure(node_api_factory, contract) -> None:
    error = HiroApiConnectionError("connection refused")
    node_api = node_api_factory(error, {})

    with pytest.raises(PollCountError) as exc_info:
        await PollCountResolver(node_api, contract).resolve_count()

    assert exc_info.value.status_code is None
    assert node_api.call_read_only.await_count == 1


@pytest.mark.asyncio
async def test_not_okay(node_api_factory, contract) -> None:
    node_api = node_api_factory(0, {})
    node_api.call_read_only.side_effect = None
    node_api.call_read_only.return_value = ReadOnlyCallResult(
        okay=False, cause="NoSuchContract"
    )

    with pytest.raises(PollCountError) as exc_info:
        await PollCountResolver(node_api, contract).resolve_count()

    assert exc_info.value.details == "NoSuchContract"


@pytest.mark.asyncio
async def test_undecodable_result(node_api_factory, contract) -> None:
    node_api = node_api_factory(0, {})
    node_api.call_read_only.side_effect = None
    node_api.call_read_only.return_value = ReadOnlyCallResult(okay=True, result="0x0703")

    with pytest.raises(PollCountError):
        await PollCountResolver(node_api, contract).resolve_count()
