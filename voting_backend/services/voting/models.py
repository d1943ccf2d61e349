"""Poll data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union


class AggregationMode(str, Enum):
    """How poll records are fetched from the node.

    BULK issues every lookup concurrently and returns polls in ascending id
    order with failed lookups as error entries. INCREMENTAL issues lookups
    one at a time with a pacing delay, skips failures and returns polls in
    descending id order (newest first).
    """

    BULK = "bulk"
    INCREMENTAL = "incremental"


@dataclass
class Poll:
    """A poll record decoded from the voting contract."""

    poll_id: int
    creator: str = ""
    title: str = ""
    description: str = ""
    yes_votes: int = 0
    no_votes: int = 0
    end_block: int = 0
    is_active: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pollId": self.poll_id,
            "creator": self.creator,
            "title": self.title,
            "description": self.description,
            "yesVotes": self.yes_votes,
            "noVotes": self.no_votes,
            "endBlock": self.end_block,
            "isActive": self.is_active,
        }


@dataclass
class PollLookupError:
    """Marker for a poll whose lookup failed in bulk mode."""

    poll_id: int
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"pollId": self.poll_id, "error": self.error}


PollEntry = Union[Poll, PollLookupError]


@dataclass
class AggregationResult:
    count: int
    mode: AggregationMode
    polls: List[PollEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "polls": [poll.to_dict() for poll in self.polls]}
