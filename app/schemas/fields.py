"""Shared field checks for input schemas."""

from typing import Any

from pydantic_core import PydanticCustomError

# Error type for checks whose message is shown to the caller as-is
INVALID_INPUT = "invalid_input"


def invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError(INVALID_INPUT, message)


def whole_number(value: Any, message: str) -> int:
    """Accept ints and integral floats (JSON 5.0); reject bools, fractions and strings."""
    if isinstance(value, bool):
        raise invalid(message)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise invalid(message)


def trimmed_name(value: Any, max_length: int, required: str, too_long: str) -> str:
    if not isinstance(value, str):
        raise invalid(required)
    value = value.strip()
    if not value:
        raise invalid(required)
    if len(value) > max_length:
        raise invalid(too_long)
    return value
