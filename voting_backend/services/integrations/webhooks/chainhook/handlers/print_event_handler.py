"""Handler for print events (contract logs)."""

from typing import Optional

from voting_backend.services.integrations.webhooks.chainhook.handlers.base import (
    ChainhookEventHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.models import (
    ChainEvent,
    EventKind,
    PrintLogPayload,
)
from voting_backend.services.processing.clarity import (
    extract_repr_field,
    to_python,
    to_repr,
    unwrap,
)

# Tuple fields that name the notification a contract printed
TOPIC_FIELDS = ("event", "notification", "topic")


class PrintEventHandler(ChainhookEventHandler):
    """Handler for values printed by contracts.

    The printed value arrives either as serialized hex, already decoded by
    the parser, or as a repr string such as ``(tuple (event "vote") ...)``.
    """

    kinds = frozenset([EventKind.PRINT_LOG])

    async def handle_event(self, event: ChainEvent) -> None:
        payload: PrintLogPayload = event.payload

        if payload.decoded is not None:
            rendering = to_repr(payload.decoded)
        elif isinstance(payload.value, dict) and isinstance(
            payload.value.get("repr"), str
        ):
            rendering = payload.value["repr"]
        else:
            rendering = str(payload.value)

        self.logger.info(
            f"Print event from {payload.contract_identifier}",
            extra={
                **self.extract_event_data(event),
                "contract": payload.contract_identifier,
                "topic": self.find_topic(payload, rendering),
                "value": rendering[:200],
            },
        )

    def find_topic(self, payload: PrintLogPayload, rendering: str) -> Optional[str]:
        """Return the notification name of a printed tuple, if it has one."""
        if payload.decoded is not None:
            data = to_python(unwrap(payload.decoded))
            if not isinstance(data, dict):
                return None
            for name in TOPIC_FIELDS:
                if isinstance(data.get(name), str):
                    return data[name]
            return None

        for name in TOPIC_FIELDS:
            topic = extract_repr_field(rendering, name, "string")
            if topic:
                return topic
        return None
