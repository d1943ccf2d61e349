"""Utility classes and types for Hiro API integration."""

from typing import Optional


class HiroApiError(Exception):
    """Base exception for Hiro API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint


class HiroApiConnectionError(HiroApiError):
    """Exception for network failures and timeouts (no HTTP response)."""

    pass
