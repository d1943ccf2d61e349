"""Exceptions raised while decoding or encoding Clarity values."""

from typing import Any, Dict, Optional


class ClarityError(Exception):
    """Base exception for all Clarity codec errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class ClarityDecodeError(ClarityError):
    """Raised when bytes or hex text are not a valid Clarity value."""

    def __init__(
        self,
        message: str,
        raw_data: Optional[str] = None,
        offset: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the decode error.

        Args:
            message: Error message
            raw_data: The hex text that failed to decode
            offset: Byte offset where decoding stopped
            **kwargs: Additional details
        """
        details = kwargs.copy()
        if raw_data is not None:
            # Truncate raw data to prevent huge error messages
            details["raw_data_preview"] = (
                raw_data[:200] + "..." if len(raw_data) > 200 else raw_data
            )
            details["raw_data_length"] = len(raw_data)
        if offset is not None:
            details["offset"] = offset

        super().__init__(message, details)
        self.raw_data = raw_data
        self.offset = offset


class ClarityEncodeError(ClarityError):
    """Raised when a value cannot be serialized."""

    pass
