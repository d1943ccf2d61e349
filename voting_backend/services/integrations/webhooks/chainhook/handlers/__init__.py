"""Chainhook webhook handlers module.

This module contains specialized handlers for different kinds of chainhook events.
"""

from typing import List

from voting_backend.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.handlers.contract_call_handler import (
    ContractCallHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.handlers.print_event_handler import (
    PrintEventHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.handlers.token_event_handler import (
    FungibleTokenEventHandler,
    NonFungibleTokenEventHandler,
)


def default_handlers() -> List[ChainhookEventHandler]:
    """Build one instance of every built-in handler."""
    return [
        ContractCallHandler(),
        FungibleTokenEventHandler(),
        NonFungibleTokenEventHandler(),
        PrintEventHandler(),
    ]


__all__ = [
    "ChainhookEventHandler",
    "ContractCallHandler",
    "FungibleTokenEventHandler",
    "NonFungibleTokenEventHandler",
    "PrintEventHandler",
    "default_handlers",
]
