"""Aggregation of every poll record stored in the voting contract."""

import asyncio
from typing import List, Optional

from voting_backend.config import AggregationConfig, ContractConfig
from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.hiro import HiroApiError, StacksNodeApi
from voting_backend.services.processing.clarity import (
    ClarityDecodeError,
    encode_uint,
    to_hex,
)

from .decoder import decode_poll
from .exceptions import PollFetchError
from .models import AggregationMode, AggregationResult, Poll, PollEntry, PollLookupError
from .poll_count import PollCountResolver

logger = configure_logger(__name__)

# Errors that only affect the single lookup they occur in
LOOKUP_ERRORS = (HiroApiError, ClarityDecodeError, PollFetchError)


class PollAggregator:
    """Fetches and decodes every poll, bounded by the contract's poll count.

    Individual lookups may fail without failing the aggregation. Only the
    initial count resolution is fatal (``PollCountError``).
    """

    def __init__(
        self,
        node_api: StacksNodeApi,
        contract: ContractConfig,
        settings: AggregationConfig,
        count_resolver: Optional[PollCountResolver] = None,
    ):
        self.node_api = node_api
        self.contract = contract
        self.settings = settings
        self.count_resolver = count_resolver or PollCountResolver(node_api, contract)

    async def aggregate(
        self,
        sender: Optional[str] = None,
        mode: AggregationMode = AggregationMode.BULK,
    ) -> AggregationResult:
        """Fetch all polls.

        Args:
            sender: Principal to evaluate the calls as
            mode: BULK (concurrent, ascending ids, error entries) or
                INCREMENTAL (paced, descending ids, failures skipped)

        Returns:
            AggregationResult: The count and the ordered poll entries

        Raises:
            PollCountError: If the poll count cannot be resolved
        """
        sender = sender or self.contract.default_sender
        count = await self.count_resolver.resolve_count(sender)
        if count == 0:
            return AggregationResult(count=0, mode=mode)

        if mode == AggregationMode.BULK:
            polls = await self._aggregate_bulk(count, sender)
        else:
            polls = await self._aggregate_incremental(count, sender)

        logger.info(
            f"Fetched {len(polls)} polls",
            extra={"count": count, "mode": mode.value},
        )
        return AggregationResult(count=count, mode=mode, polls=polls)

    async def get_poll(self, poll_id: int, sender: Optional[str] = None) -> Optional[Poll]:
        """Fetch a single poll.

        Returns:
            Optional[Poll]: The poll, or None when no poll has this id

        Raises:
            HiroApiError: If the node request fails
            ClarityDecodeError: If the record does not decode
            PollFetchError: If the node reports the call as not okay
        """
        result = await self.node_api.call_read_only(
            self.contract.address,
            self.contract.name,
            self.contract.poll_function,
            [to_hex(encode_uint(poll_id))],
            sender or self.contract.default_sender,
        )
        if not result.okay or result.result is None:
            raise PollFetchError(poll_id, details=result.cause)
        return decode_poll(poll_id, result.result)

    async def _aggregate_bulk(self, count: int, sender: str) -> List[PollEntry]:
        entries = await asyncio.gather(
            *(self._bulk_lookup(poll_id, sender) for poll_id in range(count))
        )
        return [entry for entry in entries if entry is not None]

    async def _bulk_lookup(self, poll_id: int, sender: str) -> Optional[PollEntry]:
        timeout = self.settings.lookup_timeout_seconds
        try:
            poll = await asyncio.wait_for(self.get_poll(poll_id, sender), timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Poll lookup timed out", extra={"poll_id": poll_id, "timeout": timeout}
            )
            return PollLookupError(
                poll_id=poll_id, error=f"Lookup timed out after {timeout}s"
            )
        except LOOKUP_ERRORS as e:
            logger.warning(
                "Poll lookup failed", extra={"poll_id": poll_id, "error": str(e)}
            )
            return PollLookupError(poll_id=poll_id, error=str(e))

        if poll is None:
            logger.debug("No poll at id", extra={"poll_id": poll_id})
        return poll

    async def _aggregate_incremental(self, count: int, sender: str) -> List[PollEntry]:
        polls: List[PollEntry] = []
        for poll_id in range(count):
            if poll_id:
                # Pace requests to bound the load on the node
                await asyncio.sleep(self.settings.pacing_delay_seconds)
            try:
                poll = await self.get_poll(poll_id, sender)
            except LOOKUP_ERRORS as e:
                logger.warning(
                    f"Error fetching poll {poll_id}, skipping",
                    extra={"poll_id": poll_id, "error": str(e)},
                )
                continue

            if poll is None:
                logger.debug("No poll at id", extra={"poll_id": poll_id})
                continue
            polls.append(poll)

        # Newest first
        polls.reverse()
        return polls
