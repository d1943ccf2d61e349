"""Chainhook webhook parser implementation."""

from typing import Any, Dict, List, Optional, Set, Tuple

from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.webhooks.base import WebhookParser
from voting_backend.services.integrations.webhooks.chainhook.models import (
    FUNGIBLE_TOKEN_KINDS,
    NON_FUNGIBLE_TOKEN_KINDS,
    BlockIdentifier,
    ChainEvent,
    ChainHookInfo,
    ContractCallPayload,
    EventKind,
    EventPayload,
    FungibleTokenPayload,
    NonFungibleTokenPayload,
    PrintLogPayload,
    RejectedEvent,
    TransactionIdentifier,
    WebhookBatch,
    classify_event_kind,
)
from voting_backend.services.processing.clarity import (
    ClarityDecodeError,
    ClarityValue,
    decode,
)

BASE_EVENT_FIELDS = frozenset(["type", "transaction_identifier", "block_identifier"])


class ChainhookValidationError(ValueError):
    """Raised when a chainhook event does not have the required shape."""

    pass


class ChainhookParser(WebhookParser):
    """Validating parser for chainhook webhook payloads.

    Payload-level problems never raise: a body that is not an object or has
    no ``apply`` list yields an empty batch. Individual events that fail
    validation are recorded in ``WebhookBatch.rejected``.
    """

    def __init__(self):
        super().__init__()
        self.logger = configure_logger(self.__class__.__name__)

    def parse(self, raw_data: Any) -> WebhookBatch:
        """Parse chainhook webhook data.

        Args:
            raw_data: The decoded JSON body

        Returns:
            WebhookBatch: Classified events in delivery order
        """
        if not isinstance(raw_data, dict):
            self.logger.warning(
                "Chainhook payload is not an object",
                extra={"payload_type": type(raw_data).__name__},
            )
            return WebhookBatch(chainhook=ChainHookInfo())

        chainhook = raw_data.get("chainhook")
        uuid = chainhook.get("uuid", "") if isinstance(chainhook, dict) else ""
        batch = WebhookBatch(chainhook=ChainHookInfo(uuid=str(uuid or "")))

        raw_apply = raw_data.get("apply")
        if isinstance(raw_apply, list):
            batch.apply_count = len(raw_apply)
            batch.apply, batch.rejected = self._parse_events(raw_apply, "apply")

        raw_undo = raw_data.get("undo")
        if isinstance(raw_undo, list):
            batch.undo, _ = self._parse_events(raw_undo, "undo")

        self.logger.debug(
            "Parsed chainhook payload",
            extra={
                "chainhook_uuid": batch.chainhook.uuid,
                "apply_count": batch.apply_count,
                "undo_count": len(batch.undo),
                "rejected_count": len(batch.rejected),
            },
        )
        return batch

    def _parse_events(
        self, raw_events: List[Any], section: str
    ) -> Tuple[List[ChainEvent], List[RejectedEvent]]:
        events = []
        rejected = []
        for position, raw_event in enumerate(raw_events):
            raw_type = raw_event.get("type") if isinstance(raw_event, dict) else None
            kind = classify_event_kind(raw_type)
            try:
                events.append(self.parse_event(raw_event))
            except ChainhookValidationError as e:
                self.logger.warning(
                    "Rejected malformed chainhook event",
                    extra={
                        "section": section,
                        "position": position,
                        "kind": kind.value,
                        "raw_type": raw_type,
                        "error": str(e),
                    },
                )
                rejected.append(
                    RejectedEvent(position=position, reason=str(e), kind=kind)
                )
        return events, rejected

    def parse_event(self, raw_event: Any) -> ChainEvent:
        """Validate one raw event and build its typed representation.

        Raises:
            ChainhookValidationError: If a required field is missing or invalid
        """
        if not isinstance(raw_event, dict):
            raise ChainhookValidationError("event must be an object")

        raw_type = raw_event.get("type", "")
        if not isinstance(raw_type, str):
            raise ChainhookValidationError("type must be a string")

        tx_hash = _nested(raw_event, "transaction_identifier", "hash")
        if not isinstance(tx_hash, str) or not tx_hash:
            raise ChainhookValidationError("transaction_identifier.hash is required")

        block_index = _nested(raw_event, "block_identifier", "index")
        if (
            isinstance(block_index, bool)
            or not isinstance(block_index, int)
            or block_index < 0
        ):
            raise ChainhookValidationError(
                "block_identifier.index must be a non-negative integer"
            )
        block_hash = _nested(raw_event, "block_identifier", "hash")

        kind = classify_event_kind(raw_type)
        payload, consumed = self._parse_payload(kind, raw_event)

        return ChainEvent(
            kind=kind,
            raw_type=raw_type,
            transaction_identifier=TransactionIdentifier(hash=tx_hash),
            block_identifier=BlockIdentifier(
                index=block_index,
                hash=block_hash if isinstance(block_hash, str) else None,
            ),
            payload=payload,
            extra={
                key: value
                for key, value in raw_event.items()
                if key not in BASE_EVENT_FIELDS and key not in consumed
            },
        )

    def _parse_payload(
        self, kind: EventKind, raw_event: Dict[str, Any]
    ) -> Tuple[Optional[EventPayload], Set[str]]:
        if kind == EventKind.CONTRACT_CALL:
            call = raw_event.get("contract_call")
            if not isinstance(call, dict):
                raise ChainhookValidationError("contract_call must be an object")
            args = call.get("args", [])
            return (
                ContractCallPayload(
                    contract_identifier=_required_str(
                        call, "contract_identifier", "contract_call."
                    ),
                    function_name=_required_str(call, "function_name", "contract_call."),
                    args=args if isinstance(args, list) else [args],
                ),
                {"contract_call"},
            )

        if kind in FUNGIBLE_TOKEN_KINDS:
            return (
                FungibleTokenPayload(
                    asset_identifier=_required_str(raw_event, "asset_identifier"),
                    amount=_parse_amount(raw_event.get("amount")),
                    sender=_optional_str(raw_event, "sender"),
                    recipient=_optional_str(raw_event, "recipient"),
                ),
                {"asset_identifier", "amount", "sender", "recipient"},
            )

        if kind in NON_FUNGIBLE_TOKEN_KINDS:
            return (
                NonFungibleTokenPayload(
                    asset_identifier=_required_str(raw_event, "asset_identifier"),
                    value=raw_event.get("value"),
                    sender=_optional_str(raw_event, "sender"),
                    recipient=_optional_str(raw_event, "recipient"),
                ),
                {"asset_identifier", "value", "sender", "recipient"},
            )

        if kind == EventKind.PRINT_LOG:
            value = raw_event.get("value")
            return (
                PrintLogPayload(
                    contract_identifier=_required_str(raw_event, "contract_identifier"),
                    value=value,
                    decoded=self._decode_print_value(value),
                ),
                {"contract_identifier", "value"},
            )

        return None, set()

    def _decode_print_value(self, value: Any) -> Optional[ClarityValue]:
        """Decode a print value carried as serialized hex, if it is one."""
        hex_value = value.get("hex") if isinstance(value, dict) else value
        if not isinstance(hex_value, str) or not hex_value.startswith("0x"):
            return None
        try:
            return decode(hex_value)
        except ClarityDecodeError as e:
            self.logger.debug(f"Print value is not a Clarity value: {e}")
            return None


def _nested(data: Dict[str, Any], outer: str, inner: str) -> Any:
    section = data.get(outer)
    return section.get(inner) if isinstance(section, dict) else None


def _required_str(data: Dict[str, Any], key: str, prefix: str = "") -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ChainhookValidationError(f"{prefix}{key} is required")
    return value


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ChainhookValidationError(f"{key} must be a string")
    return value


def _parse_amount(value: Any) -> int:
    # Amounts arrive as decimal strings to survive JSON number limits
    if isinstance(value, bool):
        raise ChainhookValidationError("amount must be a non-negative integer")
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    if isinstance(value, int) and value >= 0:
        return value
    raise ChainhookValidationError("amount must be a non-negative integer")
