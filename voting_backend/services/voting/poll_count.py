"""Resolution of the current number of polls."""

from typing import Optional

from voting_backend.config import ContractConfig
from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.hiro import HiroApiError, StacksNodeApi
from voting_backend.services.processing.clarity import ClarityDecodeError, decode_count

from .exceptions import PollCountError

logger = configure_logger(__name__)


class PollCountResolver:
    """Reads the poll counter of the voting contract with one read-only call."""

    def __init__(self, node_api: StacksNodeApi, contract: ContractConfig):
        self.node_api = node_api
        self.contract = contract

    async def resolve_count(self, sender: Optional[str] = None) -> int:
        """Return the number of polls created so far.

        Args:
            sender: Principal to evaluate the call as; the configured
                default sender when omitted

        Returns:
            int: The poll count

        Raises:
            PollCountError: If the node fails or the result does not decode.
                No retry is attempted.
        """
        try:
            result = await self.node_api.call_read_only(
                self.contract.address,
                self.contract.name,
                self.contract.poll_count_function,
                [],
                sender or self.contract.default_sender,
            )
        except HiroApiError as e:
            raise PollCountError(
                "Failed to get poll count",
                details=e.response_body or e.message,
                status_code=e.status_code,
            ) from e

        if not result.okay or result.result is None:
            raise PollCountError(
                "Failed to get poll count",
                details=result.cause or "read-only call returned no result",
            )

        try:
            count = decode_count(result.result)
        except ClarityDecodeError as e:
            raise PollCountError("Failed to decode poll count", details=str(e)) from e

        logger.info("Poll count resolved", extra={"count": count})
        return count
