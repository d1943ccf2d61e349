"""Stacks node client for read-only contract calls."""

from typing import List, Optional

import httpx

from voting_backend.config import Config
from voting_backend.lib.logger import configure_logger

from .base import BaseHiroApi
from .models import ReadOnlyCallResult
from .utils import HiroApiError

logger = configure_logger(__name__)


class StacksNodeApi(BaseHiroApi):
    """Client for the ``/v2`` RPC endpoints of a Stacks node."""

    ENDPOINTS = {
        "call_read": "/v2/contracts/call-read",
    }

    @classmethod
    def from_config(
        cls, config: Config, client: Optional[httpx.AsyncClient] = None
    ) -> "StacksNodeApi":
        return cls(
            base_url=config.api.hiro_api_url,
            api_key=config.api.hiro_api_key,
            timeout=config.api.request_timeout_seconds,
            client=client,
        )

    async def call_read_only(
        self,
        contract_address: str,
        contract_name: str,
        function_name: str,
        arguments: List[str],
        sender: str,
    ) -> ReadOnlyCallResult:
        """Evaluate a read-only contract function.

        Args:
            contract_address: Deployer address of the contract
            contract_name: Name of the contract
            function_name: Read-only function to call
            arguments: Hex-serialized Clarity arguments
            sender: Principal the call is evaluated as

        Returns:
            ReadOnlyCallResult: ``okay`` plus the hex result or failure cause
        """
        logger.debug(
            "Calling read-only function",
            extra={
                "contract": f"{contract_address}.{contract_name}",
                "function": function_name,
                "argument_count": len(arguments),
            },
        )
        data = await self._amake_request(
            "POST",
            f"{self.ENDPOINTS['call_read']}/{contract_address}/{contract_name}/{function_name}",
            json={"sender": sender, "arguments": arguments},
        )
        if not isinstance(data, dict):
            raise HiroApiError(
                f"Unexpected call-read response of type {type(data).__name__}",
                endpoint=self.ENDPOINTS["call_read"],
            )
        return ReadOnlyCallResult.from_dict(data)
