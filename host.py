# host.py
from dataclasses import dataclass, field, replace
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Optional, Tuple

from states import InvalidStateCode, normalize_state
from utils import first_present

# Accepted wire keys per field, scanner format first.
WIRE_KEYS: Dict[str, Tuple[str, ...]] = {
    "id": ("Uuid", "id"),
    "state": ("State", "state"),
    "last_checked": ("LastChecked", "lastChecked", "last_checked"),
    "host": ("Host", "host"),
    "original_host": ("OriginalHost", "originalHost", "original_host"),
    "time_verified": ("TimeVerified", "timeVerified", "time_verified"),
    "last_error": ("LastError", "lastError", "last_error"),
}

# Keys the presentation side never needs to see twice.
_DERIVED_KEYS = ("cssClass", "displayClass", "display_class")


class MalformedRecordError(ValueError):
    """Raised when a host record cannot be ingested."""


@dataclass(frozen=True)
class HostRecord:
    id: str
    state: Any = None
    display_class: Optional[str] = None
    last_checked: Optional[str] = None  # None until the host has been scanned
    host: Optional[str] = None
    original_host: Optional[str] = None
    time_verified: Optional[str] = None
    last_error: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Records are shared with readers of the engine, so nothing in them may change.
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HostRecord":
        """Builds a normalized record from one entry of a host listing.

        Args:
            data (Mapping): A host as decoded from the source's JSON.

        Returns:
            HostRecord: The record with its state decoded and display class set.

        Raises:
            MalformedRecordError: If the entry has no usable id or an invalid state code.
        """
        if not isinstance(data, Mapping):
            raise MalformedRecordError(f"Host record is not an object: {type(data).__name__}")

        values = {name: first_present(data, keys) for name, keys in WIRE_KEYS.items()}
        record_id = _check_id(values.pop("id"), data)

        known = {key for keys in WIRE_KEYS.values() for key in keys}
        extra = {k: v for k, v in data.items() if k not in known and k not in _DERIVED_KEYS}

        try:
            state, display_class = normalize_state(values.pop("state"))
        except InvalidStateCode as err:
            raise MalformedRecordError(f"Host {record_id}: {err}") from err

        return cls(id=record_id, state=state, display_class=display_class, extra=extra, **values)

    def normalized(self) -> "HostRecord":
        """Returns a copy with state decoded and display class recomputed."""
        _check_id(self.id, self)
        try:
            state, display_class = normalize_state(self.state)
        except InvalidStateCode as err:
            raise MalformedRecordError(f"Host {self.id}: {err}") from err
        return replace(self, state=state, display_class=display_class)

    @property
    def scanned(self) -> bool:
        return self.last_checked is not None

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the record using the scanner's wire keys plus cssClass."""
        data = dict(self.extra)
        data.update({
            "Uuid": self.id,
            "Host": self.host,
            "OriginalHost": self.original_host,
            "LastChecked": self.last_checked,
            "TimeVerified": self.time_verified,
            "LastError": self.last_error,
            "State": self.state,
            "cssClass": self.display_class,
        })
        return data

def _check_id(record_id: Any, source: Any) -> Any:
    if isinstance(record_id, bool) or not isinstance(record_id, (str, int)) or record_id == "":
        raise MalformedRecordError(f"Host record has no usable id: {source!r}")
    return record_id
