"""Handlers for fungible and non-fungible token events."""

from voting_backend.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.models import (
    FUNGIBLE_TOKEN_KINDS,
    NON_FUNGIBLE_TOKEN_KINDS,
    ChainEvent,
    FungibleTokenPayload,
    NonFungibleTokenPayload,
)
from voting_backend.services.processing.clarity import (
    ClarityDecodeError,
    decode,
    to_repr,
)


class FungibleTokenEventHandler(ChainhookEventHandler):
    """Handler for FT mint, transfer and burn events."""

    kinds = FUNGIBLE_TOKEN_KINDS

    async def handle_event(self, event: ChainEvent) -> None:
        payload: FungibleTokenPayload = event.payload
        self.logger.info(
            f"FT event: {event.raw_type}",
            extra={
                **self.extract_event_data(event),
                "asset": payload.asset_identifier,
                "amount": payload.amount,
                "from": payload.sender,
                "to": payload.recipient,
            },
        )


class NonFungibleTokenEventHandler(ChainhookEventHandler):
    """Handler for NFT mint, transfer and burn events."""

    kinds = NON_FUNGIBLE_TOKEN_KINDS

    async def handle_event(self, event: ChainEvent) -> None:
        payload: NonFungibleTokenPayload = event.payload
        self.logger.info(
            f"NFT event: {event.raw_type}",
            extra={
                **self.extract_event_data(event),
                "asset": payload.asset_identifier,
                "token_id": self._render_token_id(payload.value),
                "from": payload.sender,
                "to": payload.recipient,
            },
        )

    def _render_token_id(self, value) -> str:
        # Token ids are usually a hex-serialized Clarity value
        hex_value = value.get("hex") if isinstance(value, dict) else value
        if isinstance(hex_value, str) and hex_value.startswith("0x"):
            try:
                return to_repr(decode(hex_value))
            except ClarityDecodeError as e:
                self.logger.debug(f"Token id is not a Clarity value: {e}")
        return str(value)
