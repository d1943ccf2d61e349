"""Chainhook event dispatcher."""

from typing import Any, Dict, List, Optional, Sequence

from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.webhooks.base import WebhookHandler
from voting_backend.services.integrations.webhooks.chainhook.handlers import (
    ChainhookEventHandler,
    default_handlers,
)
from voting_backend.services.integrations.webhooks.chainhook.models import (
    ChainEvent,
    DispatchOutcome,
    DispatchStatus,
    EventKind,
    WebhookBatch,
    classify_event_kind,
)


class ChainhookHandler(WebhookHandler):
    """Routes every event of a chainhook batch to the handler owning its kind.

    Events are dispatched one at a time in delivery order. A failing handler
    is logged and recorded as a ``failed`` outcome; it never stops the rest
    of the batch. ``Unknown`` events are logged and never dispatched.
    """

    def __init__(self, handlers: Optional[Sequence[ChainhookEventHandler]] = None):
        """Initialize the dispatcher.

        Args:
            handlers: Handlers to route to; the built-in set when omitted

        Raises:
            ValueError: If two handlers claim the same kind, or one claims Unknown
        """
        super().__init__()
        self.logger = configure_logger(self.__class__.__name__)
        self.handlers = list(handlers) if handlers is not None else default_handlers()

        self._routes: Dict[EventKind, ChainhookEventHandler] = {}
        for handler in self.handlers:
            for kind in handler.kinds:
                if kind == EventKind.UNKNOWN:
                    raise ValueError(
                        f"{handler.__class__.__name__} cannot handle Unknown events"
                    )
                if kind in self._routes:
                    raise ValueError(
                        f"{kind.value} is claimed by both "
                        f"{self._routes[kind].__class__.__name__} and "
                        f"{handler.__class__.__name__}"
                    )
                self._routes[kind] = handler

    @staticmethod
    def classify(raw_tag: Any) -> EventKind:
        """Classify a raw chainhook event tag."""
        return classify_event_kind(raw_tag)

    def handler_for(self, kind: EventKind) -> Optional[ChainhookEventHandler]:
        return self._routes.get(kind)

    async def dispatch(self, event: ChainEvent) -> DispatchOutcome:
        """Hand one event to its handler and report what happened."""
        handler = self._routes.get(event.kind)
        if handler is None:
            self.logger.info(
                f"Unknown event type: {event.raw_type}",
                extra={"tx_id": event.transaction_id, "kind": event.kind.value},
            )
            return DispatchOutcome(
                transaction_id=event.transaction_id,
                kind=event.kind,
                status=DispatchStatus.IGNORED,
            )

        handler_name = handler.__class__.__name__
        self.logger.debug(
            "Processing event",
            extra={
                "event_type": event.raw_type,
                "tx_id": event.transaction_id,
                "block_height": event.block_height,
                "handler": handler_name,
            },
        )
        try:
            await handler.handle_event(event)
        except Exception as e:
            self.logger.error(
                f"Handler {handler_name} failed for event",
                extra={"tx_id": event.transaction_id, "error": str(e)},
                exc_info=True,
            )
            return DispatchOutcome(
                transaction_id=event.transaction_id,
                kind=event.kind,
                status=DispatchStatus.FAILED,
                handler=handler_name,
                error=str(e),
            )

        return DispatchOutcome(
            transaction_id=event.transaction_id,
            kind=event.kind,
            status=DispatchStatus.HANDLED,
            handler=handler_name,
        )

    async def handle(self, parsed_data: WebhookBatch) -> Dict[str, Any]:
        """Dispatch the ``apply`` events of a batch in order.

        Args:
            parsed_data: The parsed chainhook batch

        Returns:
            Dict[str, Any]: ``processed`` is the length of the raw ``apply``
            sequence; the remaining keys break the outcomes down
        """
        batch = parsed_data
        self.logger.info(
            "Received chainhook event",
            extra={
                "chainhook_uuid": batch.chainhook.uuid,
                "event_count": batch.apply_count,
            },
        )

        outcomes: List[DispatchOutcome] = []
        for event in batch.apply:
            outcomes.append(await self.dispatch(event))

        if batch.undo:
            # Rollbacks are not applied; delivery is at-least-once, no undo
            self.logger.warning(
                "Chainhook undo events received and not applied",
                extra={
                    "chainhook_uuid": batch.chainhook.uuid,
                    "undo_count": len(batch.undo),
                    "tx_ids": [event.transaction_id for event in batch.undo][:10],
                },
            )

        summary = {
            "processed": batch.apply_count,
            "handled": _count(outcomes, DispatchStatus.HANDLED),
            "failed": _count(outcomes, DispatchStatus.FAILED),
            "ignored": _count(outcomes, DispatchStatus.IGNORED),
            "rejected": len(batch.rejected),
            "undo": len(batch.undo),
        }
        self.logger.info(
            "Chainhook batch processed",
            extra={"chainhook_uuid": batch.chainhook.uuid, "summary": summary},
        )
        return summary


def _count(outcomes: List[DispatchOutcome], status: DispatchStatus) -> int:
    return sum(1 for outcome in outcomes if outcome.status == status)
