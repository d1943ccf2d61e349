from voting_backend.services.voting.aggregator import PollAggregator
from voting_backend.services.voting.decoder import decode_poll
from voting_backend.services.voting.exceptions import (
    PollCountError,
    PollDecodeError,
    PollFetchError,
    VotingError,
)
from voting_backend.services.voting.models import (
    AggregationMode,
    AggregationResult,
    Poll,
    PollEntry,
    PollLookupError,
)
from voting_backend.services.voting.poll_count import PollCountResolver

__all__ = [
    "PollAggregator",
    "PollCountResolver",
    "decode_poll",
    "AggregationMode",
    "AggregationResult",
    "Poll",
    "PollEntry",
    "PollLookupError",
    "VotingError",
    "PollCountError",
    "PollDecodeError",
    "PollFetchError",
]
