# states.py
from numbers import Number
from typing import Any, Dict, Optional, Tuple

# Order matches the scanner's numeric result codes.
STATE_NAMES: Tuple[str, ...] = ("secure", "unknown", "timeout", "connectionRefused", "vulnerable")

DISPLAY_CLASSES: Dict[str, str] = {
    "secure": "success",
    "connectionRefused": "info",
    "timeout": "warning",
    "vulnerable": "danger",
    "unknown": "active",
}


class InvalidStateCode(ValueError):
    """Raised for a numeric state code outside the known table."""

    def __init__(self, code: Any):
        super().__init__(f"Invalid state code: {code!r}")
        self.code = code


def decode_state(value: Any) -> Any:
    """Translates a numeric state code to its name.

    Names (and anything else that is not a number) are returned unchanged,
    so decoding is idempotent.
    """
    if isinstance(value, bool):
        raise InvalidStateCode(value)
    if isinstance(value, int):
        if 0 <= value < len(STATE_NAMES):
            return STATE_NAMES[value]
        raise InvalidStateCode(value)
    if isinstance(value, Number):
        raise InvalidStateCode(value)
    return value


def display_class_for(state: Any) -> Optional[str]:
    """Returns the display hint for a state name, or None if unrecognized."""
    if is_known_state(state):
        return DISPLAY_CLASSES[state]
    return None


def normalize_state(value: Any) -> Tuple[Any, Optional[str]]:
    """Returns (state, display_class) for a raw state value.

    Args:
        value: A numeric code, a state name, or anything else the source sent.

    Returns:
        Tuple of the decoded state and its display class. Unrecognized states
        are passed through with a display class of None.

    Raises:
        InvalidStateCode: If value is a number with no entry in STATE_NAMES.
    """
    state = decode_state(value)
    return state, display_class_for(state)


def is_known_state(state: Any) -> bool:
    return isinstance(state, str) and state in DISPLAY_CLASSES
