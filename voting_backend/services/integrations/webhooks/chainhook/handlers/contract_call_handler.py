"""Handler for contract call events."""

from voting_backend.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.models import (
    ChainEvent,
    ContractCallPayload,
    EventKind,
)


class ContractCallHandler(ChainhookEventHandler):
    """Handler for calls to public contract functions (create-poll, vote, ...)."""

    kinds = frozenset([EventKind.CONTRACT_CALL])

    async def handle_event(self, event: ChainEvent) -> None:
        payload: ContractCallPayload = event.payload
        self.logger.info(
            f"Contract call: {payload.contract_identifier}.{payload.function_name}",
            extra={
                **self.extract_event_data(event),
                "contract": payload.contract_identifier,
                "function": payload.function_name,
                "arg_count": len(payload.args),
            },
        )
