"""
Data models for the meta components page.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# Untyped JSON value from the external data source
RawPayload = Any


class ValueKind(str, Enum):
    """Structural classification of a decoded JSON value."""
    OBJECT = "object"
    ARRAY = "array"
    SCALAR = "scalar"
    NULL = "null"


def classify_value(value: Any) -> ValueKind:
    """Classify a decoded JSON value into one of the ValueKind variants."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.SCALAR


class ViewMode(str, Enum):
    """Page-wide presentation of every section."""
    TABLE = "table"
    CARDS = "cards"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class LoadState(str, Enum):
    """Observable loading state of the page."""
    LOADING = "loading"
    READY = "ready"


class PagePhase(str, Enum):
    """Page controller lifecycle."""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class FallbackReason(str, Enum):
    """Why the sample payload replaced the real one."""
    EMPTY_OR_INVALID = "empty_or_invalid"
    API_FAILED = "api_failed"

    @property
    def message(self) -> str:
        return _ADVISORIES[self]


_ADVISORIES = {
    FallbackReason.EMPTY_OR_INVALID: "Using hard-coded data (API returned empty or invalid).",
    FallbackReason.API_FAILED: "Using hard-coded data (API failed).",
}


@dataclass(frozen=True)
class Row:
    """One (component, identifier) pair displayed within a group."""
    component: str
    identifier: str


# Ordered mapping group name -> rows (dict insertion order is the source order)
GroupMap = Dict[str, List[Row]]


@dataclass
class LoadResult:
    """Outcome of one load: the groups to show and the fallback used, if any."""
    groups: GroupMap = field(default_factory=dict)
    fallback: Optional[FallbackReason] = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback is not None

    @property
    def advisory(self) -> Optional[str]:
        return self.fallback.message if self.fallback else None
