"""Exceptions raised by the poll services."""

from typing import Any, Optional

from voting_backend.services.processing.clarity import ClarityDecodeError


class VotingError(Exception):
    """Base exception for poll retrieval errors."""

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class PollCountError(VotingError):
    """The poll count could not be resolved.

    ``status_code`` is the upstream HTTP status when the node answered with
    an error, otherwise None.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class PollFetchError(VotingError):
    """The node refused a single poll lookup (``okay: false``)."""

    def __init__(self, poll_id: int, details: Optional[Any] = None) -> None:
        super().__init__(f"Lookup of poll {poll_id} failed", details)
        self.poll_id = poll_id


class PollDecodeError(ClarityDecodeError):
    """A poll record decoded but does not have the expected shape."""

    pass
