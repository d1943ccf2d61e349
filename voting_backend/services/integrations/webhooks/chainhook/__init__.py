"""Chainhook webhook module.

This module provides components for parsing and dispatching Chainhook webhook payloads.
"""

from voting_backend.services.integrations.webhooks.chainhook.handler import (
    ChainhookHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.handlers import (
    ChainhookEventHandler,
    ContractCallHandler,
    FungibleTokenEventHandler,
    NonFungibleTokenEventHandler,
    PrintEventHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.models import (
    ChainEvent,
    DispatchOutcome,
    DispatchStatus,
    EventKind,
    WebhookBatch,
)
from voting_backend.services.integrations.webhooks.chainhook.parser import (
    ChainhookParser,
    ChainhookValidationError,
)
from voting_backend.services.integrations.webhooks.chainhook.service import (
    ChainhookService,
)

__all__ = [
    "ChainhookService",
    "ChainhookParser",
    "ChainhookValidationError",
    "ChainhookHandler",
    "ChainEvent",
    "DispatchOutcome",
    "DispatchStatus",
    "EventKind",
    "WebhookBatch",
    "ChainhookEventHandler",
    "ContractCallHandler",
    "FungibleTokenEventHandler",
    "NonFungibleTokenEventHandler",
    "PrintEventHandler",
]
