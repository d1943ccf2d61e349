"""Stacks node API data models."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ReadOnlyCallResult:
    """Response of ``/v2/contracts/call-read``."""

    okay: bool
    result: Optional[str] = None
    cause: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReadOnlyCallResult":
        return cls(
            okay=bool(data.get("okay", False)),
            result=data.get("result"),
            cause=data.get("cause"),
        )
