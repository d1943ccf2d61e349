"""Base classes for webhook handling."""

from abc import ABC, abstractmethod
from typing import Any, Dict

from pydantic import BaseModel

from voting_backend.lib.logger import configure_logger


class WebhookParser(ABC):
    """Base class for webhook payload parsers."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    def parse(self, raw_data: Any) -> Any:
        """Parse the raw webhook data into a structured format.

        Args:
            raw_data: The decoded JSON body of the webhook

        Returns:
            Parsed data in the appropriate format
        """
        pass


class WebhookHandler(ABC):
    """Base class for webhook handlers."""

    def __init__(self):
        self.logger = configure_logger(self.__class__.__name__)

    @abstractmethod
    async def handle(self, parsed_data: Any) -> Dict[str, Any]:
        """Handle the parsed webhook data.

        Args:
            parsed_data: The parsed webhook data

        Returns:
            Dict containing the result of handling the webhook
        """
        pass


class WebhookResponse(BaseModel):
    """Response body of a successfully processed webhook."""

    success: bool
    processed: int


class WebhookService:
    """Base webhook service that coordinates parsing and handling."""

    def __init__(self, parser: WebhookParser, handler: WebhookHandler):
        self.parser = parser
        self.handler = handler
        self.logger = configure_logger(self.__class__.__name__)

    async def process(self, raw_data: Any) -> Dict[str, Any]:
        """Process a webhook request.

        Args:
            raw_data: The decoded JSON body of the webhook

        Returns:
            Dict containing the result of processing the webhook
        """
        try:
            parsed_data = self.parser.parse(raw_data)
            return await self.handler.handle(parsed_data)
        except Exception as e:
            self.logger.error(f"Error processing webhook: {str(e)}", exc_info=True)
            raise
