"""Clarity repr format rendering and lenient field extraction."""

import json
import re
from typing import Any, Dict

from .codec import to_hex
from .values import (
    BoolValue,
    BufferValue,
    ClarityValue,
    ContractPrincipalValue,
    IntValue,
    ListValue,
    NoneValue,
    ResponseErrValue,
    ResponseOkValue,
    SomeValue,
    StandardPrincipalValue,
    StringASCIIValue,
    StringUTF8Value,
    TupleValue,
    UIntValue,
)

# Zero values returned when a field is absent from a rendering
FIELD_DEFAULTS = {"string": "", "uint": 0, "bool": False, "principal": ""}

# A field name must not be preceded by another name character, so that
# "votes" never matches inside "yes-votes"
_NAME_BOUNDARY = r"(?<![\w-])"

_VALUE_PATTERNS = {
    "string": r'u?"((?:[^"\\]|\\.)*)"',
    "uint": r"u(\d+)",
    "bool": r"(true|false)",
    "principal": r"'?([0-9A-Z]+(?:\.[A-Za-z][\w-]*)?)",
}


def to_repr(value: ClarityValue) -> str:
    """Render a value in Clarity's pretty-printed form.

    >>> to_repr(TupleValue({"yes-votes": UIntValue(10)}))
    '(tuple (yes-votes u10))'
    """
    if isinstance(value, UIntValue):
        return f"u{value.value}"
    if isinstance(value, IntValue):
        return str(value.value)
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, BufferValue):
        return to_hex(value.value)
    if isinstance(value, (StandardPrincipalValue, ContractPrincipalValue)):
        return f"'{value.address}"
    if isinstance(value, ResponseOkValue):
        return f"(ok {to_repr(value.value)})"
    if isinstance(value, ResponseErrValue):
        return f"(err {to_repr(value.value)})"
    if isinstance(value, NoneValue):
        return "none"
    if isinstance(value, SomeValue):
        return f"(some {to_repr(value.value)})"
    if isinstance(value, ListValue):
        return "(list " + " ".join(to_repr(item) for item in value.items) + ")"
    if isinstance(value, TupleValue):
        fields = " ".join(
            f"({name} {to_repr(item)})" for name, item in value.data.items()
        )
        return f"(tuple {fields})"
    if isinstance(value, StringASCIIValue):
        return json.dumps(value.value)
    if isinstance(value, StringUTF8Value):
        return "u" + json.dumps(value.value, ensure_ascii=False)
    raise TypeError(f"Not a Clarity value: {type(value).__name__}")


def extract_repr_field(rendering: str, name: str, kind: str) -> Any:
    """Extract one named field from a textual tuple rendering.

    Both ``name: value`` and ``(name value)`` layouts are recognised and the
    field may appear anywhere in the rendering. A missing field yields the
    zero value for ``kind`` instead of raising.

    Args:
        rendering: Textual rendering of a tuple
        name: Field name, e.g. ``yes-votes``
        kind: One of ``string``, ``uint``, ``bool`` or ``principal``

    Returns:
        Any: str, int or bool depending on ``kind``
    """
    if kind not in _VALUE_PATTERNS:
        raise ValueError(f"Unknown field kind: {kind}")

    pattern = _NAME_BOUNDARY + re.escape(name) + r":?\s+" + _VALUE_PATTERNS[kind]
    match = re.search(pattern, rendering, re.IGNORECASE)
    if not match:
        return FIELD_DEFAULTS[kind]

    raw = match.group(1)
    if kind == "uint":
        return int(raw)
    if kind == "bool":
        return raw.lower() == "true"
    if kind == "string":
        return raw.replace('\\"', '"')
    return raw


def extract_repr_fields(rendering: str, schema: Dict[str, str]) -> Dict[str, Any]:
    """Extract every field of ``schema`` (name -> kind) from a rendering."""
    return {
        name: extract_repr_field(rendering, name, kind) for name, kind in schema.items()
    }


def is_empty_repr(rendering: str) -> bool:
    """Whether a rendering marks an empty optional slot."""
    return "none" in rendering
