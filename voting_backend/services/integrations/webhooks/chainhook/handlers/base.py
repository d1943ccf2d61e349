"""Base class for Chainhook event handlers."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, FrozenSet

from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.webhooks.chainhook.models import (
    ChainEvent,
    EventKind,
)


class ChainhookEventHandler(ABC):
    """Base class for specialized Chainhook event handlers.

    Each handler declares the event kinds it owns in ``kinds``. The
    dispatcher routes every event to the single handler owning its kind.

    Handlers are shared by concurrent webhook deliveries, so they must not
    keep per-batch state on the instance.
    """

    kinds: ClassVar[FrozenSet[EventKind]] = frozenset()

    def __init__(self):
        """Initialize the handler with a logger."""
        self.logger = configure_logger(self.__class__.__name__)

    def can_handle_event(self, event: ChainEvent) -> bool:
        """Check if this handler owns the kind of the given event."""
        return event.kind in self.kinds

    @abstractmethod
    async def handle_event(self, event: ChainEvent) -> None:
        """Handle a single event.

        Args:
            event: The classified event to handle
        """
        pass

    def extract_event_data(self, event: ChainEvent) -> Dict[str, Any]:
        """Extract the fields shared by every event kind.

        Args:
            event: The event to extract data from

        Returns:
            Dict[str, Any]: Common event data suitable for log extras
        """
        return {
            "tx_id": event.transaction_id,
            "block_height": event.block_height,
            "event_type": event.raw_type,
        }
