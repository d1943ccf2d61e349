"""Chainhook webhook service implementation."""

from typing import Optional

from voting_backend.lib.logger import configure_logger
from voting_backend.services.integrations.webhooks.base import WebhookService
from voting_backend.services.integrations.webhooks.chainhook.handler import (
    ChainhookHandler,
)
from voting_backend.services.integrations.webhooks.chainhook.parser import (
    ChainhookParser,
)


class ChainhookService(WebhookService):
    """Service for handling Chainhook webhooks.

    This service coordinates parsing and dispatching of Chainhook webhook payloads.
    """

    def __init__(self, handler: Optional[ChainhookHandler] = None):
        """Initialize the Chainhook service with parser and handler components."""
        super().__init__(parser=ChainhookParser(), handler=handler or ChainhookHandler())
        self.logger = configure_logger(self.__class__.__name__)
