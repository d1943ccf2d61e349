"""Chainhook webhook data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from voting_backend.services.processing.clarity import ClarityValue


class EventKind(str, Enum):
    """Kinds of chain events delivered by chainhook."""

    CONTRACT_CALL = "ContractCall"
    FT_MINT = "FungibleTokenMint"
    FT_TRANSFER = "FungibleTokenTransfer"
    FT_BURN = "FungibleTokenBurn"
    NFT_MINT = "NonFungibleTokenMint"
    NFT_TRANSFER = "NonFungibleTokenTransfer"
    NFT_BURN = "NonFungibleTokenBurn"
    PRINT_LOG = "PrintLog"
    UNKNOWN = "Unknown"


# Exact tag strings of the chainhook event `type` field
EVENT_KIND_TAGS: Dict[str, EventKind] = {
    "contract_call": EventKind.CONTRACT_CALL,
    "ft_mint_event": EventKind.FT_MINT,
    "ft_transfer_event": EventKind.FT_TRANSFER,
    "ft_burn_event": EventKind.FT_BURN,
    "nft_mint_event": EventKind.NFT_MINT,
    "nft_transfer_event": EventKind.NFT_TRANSFER,
    "nft_burn_event": EventKind.NFT_BURN,
    "print_event": EventKind.PRINT_LOG,
}

FUNGIBLE_TOKEN_KINDS = frozenset(
    [EventKind.FT_MINT, EventKind.FT_TRANSFER, EventKind.FT_BURN]
)
NON_FUNGIBLE_TOKEN_KINDS = frozenset(
    [EventKind.NFT_MINT, EventKind.NFT_TRANSFER, EventKind.NFT_BURN]
)


def classify_event_kind(raw_tag: Any) -> EventKind:
    """Map a chainhook event tag onto an EventKind by exact match."""
    if not isinstance(raw_tag, str):
        return EventKind.UNKNOWN
    return EVENT_KIND_TAGS.get(raw_tag, EventKind.UNKNOWN)


@dataclass
class TransactionIdentifier:
    """Transaction identifier with hash."""

    hash: str


@dataclass
class BlockIdentifier:
    """Block identifier with index and optional hash."""

    index: int
    hash: Optional[str] = None


@dataclass
class ContractCallPayload:
    contract_identifier: str
    function_name: str
    args: List[Any] = field(default_factory=list)


@dataclass
class FungibleTokenPayload:
    asset_identifier: str
    amount: int
    sender: Optional[str] = None
    recipient: Optional[str] = None


@dataclass
class NonFungibleTokenPayload:
    asset_identifier: str
    value: Any = None
    sender: Optional[str] = None
    recipient: Optional[str] = None


@dataclass
class PrintLogPayload:
    """Contract log. ``decoded`` is set when ``value`` carried serialized hex."""

    contract_identifier: str
    value: Any = None
    decoded: Optional[ClarityValue] = None


EventPayload = Union[
    ContractCallPayload,
    FungibleTokenPayload,
    NonFungibleTokenPayload,
    PrintLogPayload,
]


@dataclass
class ChainEvent:
    """A single classified chain event from a chainhook batch."""

    kind: EventKind
    raw_type: str
    transaction_identifier: TransactionIdentifier
    block_identifier: BlockIdentifier
    payload: Optional[EventPayload] = None
    # Input fields the parser did not consume
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def transaction_id(self) -> str:
        return self.transaction_identifier.hash

    @property
    def block_height(self) -> int:
        return self.block_identifier.index


@dataclass
class RejectedEvent:
    """An entry of the batch that failed validation."""

    position: int
    reason: str
    # Classified from the raw tag, which is read before validation
    kind: EventKind = EventKind.UNKNOWN


@dataclass
class ChainHookInfo:
    """Information about the chainhook itself."""

    uuid: str = ""


@dataclass
class WebhookBatch:
    """Top-level data structure for a chainhook delivery."""

    chainhook: ChainHookInfo
    apply: List[ChainEvent] = field(default_factory=list)
    undo: List[ChainEvent] = field(default_factory=list)
    rejected: List[RejectedEvent] = field(default_factory=list)
    # Length of the raw `apply` sequence, valid or not
    apply_count: int = 0


class DispatchStatus(str, Enum):
    HANDLED = "handled"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclass
class DispatchOutcome:
    """Result of routing one event to its handler."""

    transaction_id: str
    kind: EventKind
    status: DispatchStatus
    handler: Optional[str] = None
    error: Optional[str] = None
