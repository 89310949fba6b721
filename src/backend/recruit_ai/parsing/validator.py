from collections.abc import Mapping, Sequence
from typing import Any


def missing_fields(payload: Mapping[str, Any], required_fields: Sequence[str]) -> list[str]:
    """Required top-level keys absent from payload, in the order given."""
    return [field for field in required_fields if field not in payload]


def validate(payload: Mapping[str, Any], required_fields: Sequence[str]) -> bool:
    """True if every required field is a top-level key. Values are not checked."""
    return not missing_fields(payload, required_fields)
