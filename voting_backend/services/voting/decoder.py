"""Decoding of poll records returned by ``get-poll``."""

from typing import Dict, Optional, Tuple

from voting_backend.services.processing.clarity import (
    BoolValue,
    ContractPrincipalValue,
    NoneValue,
    ResponseErrValue,
    StandardPrincipalValue,
    StringASCIIValue,
    StringUTF8Value,
    TupleValue,
    UIntValue,
    decode,
    to_repr,
    unwrap,
)

from .exceptions import PollDecodeError
from .models import Poll

_PRINCIPAL_TYPES = (StandardPrincipalValue, ContractPrincipalValue)
_STRING_TYPES = (StringUTF8Value, StringASCIIValue)

# Tuple field -> (Poll attribute, accepted Clarity types)
POLL_FIELDS: Dict[str, Tuple[str, tuple]] = {
    "creator": ("creator", _PRINCIPAL_TYPES),
    "title": ("title", _STRING_TYPES),
    "description": ("description", _STRING_TYPES),
    "yes-votes": ("yes_votes", (UIntValue,)),
    "no-votes": ("no_votes", (UIntValue,)),
    "end-block": ("end_block", (UIntValue,)),
    "is-active": ("is_active", (BoolValue,)),
}


def decode_poll(poll_id: int, result_hex: str) -> Optional[Poll]:
    """Decode the hex result of a ``get-poll`` call.

    Fields missing from the tuple keep the zero value of the Poll field.
    This is deliberate: the contract owns the record layout and an older
    record without a newer field is still a valid poll.

    Args:
        poll_id: Id the record was requested with
        result_hex: Hex-serialized Clarity result

    Returns:
        Optional[Poll]: The poll, or None when the slot is empty (``none``)

    Raises:
        ClarityDecodeError: If the result is not valid Clarity
        PollDecodeError: If the result is an ``err`` or not a poll tuple
    """
    value = unwrap(decode(result_hex), include_err=False)

    if isinstance(value, NoneValue):
        return None
    if isinstance(value, ResponseErrValue):
        raise PollDecodeError(
            f"Contract returned {to_repr(value)} for poll {poll_id}",
            raw_data=result_hex,
        )
    if not isinstance(value, TupleValue):
        raise PollDecodeError(
            f"Poll {poll_id} is a {type(value).__name__}, expected a tuple",
            raw_data=result_hex,
        )

    fields = {}
    for name, (attribute, accepted) in POLL_FIELDS.items():
        item = value.get(name)
        if item is None:
            continue
        if not isinstance(item, accepted):
            raise PollDecodeError(
                f"Poll {poll_id} field {name!r} has type {type(item).__name__}",
                raw_data=result_hex,
            )
        if isinstance(item, _PRINCIPAL_TYPES):
            try:
                fields[attribute] = item.address
            except ValueError as e:
                raise PollDecodeError(
                    f"Poll {poll_id} field {name!r} is not a valid principal: {e}",
                    raw_data=result_hex,
                ) from e
        else:
            fields[attribute] = item.value

    return Poll(poll_id=poll_id, **fields)
