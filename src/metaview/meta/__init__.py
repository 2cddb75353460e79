"""
Meta components: normalization of third-party JSON and page state.
"""

from .models import (
    FallbackReason,
    GroupMap,
    LoadResult,
    LoadState,
    PagePhase,
    Row,
    ValueKind,
    ViewMode,
    classify_value,
)
from .stringify import stringify_value
from .normalizer import ROOT_COMPONENT, normalize, total_rows
from .sample_data import SAMPLE_PAYLOAD
from .client import (
    MetaClient,
    MetaFetchError,
    MetaPayloadError,
    MetaStatusError,
    MetaTransportError,
)
from .controller import PageController, SectionRegistry, SectionState, resolve_groups

__all__ = [
    "FallbackReason",
    "GroupMap",
    "LoadResult",
    "LoadState",
    "PagePhase",
    "Row",
    "ValueKind",
    "ViewMode",
    "classify_value",
    "stringify_value",
    "ROOT_COMPONENT",
    "normalize",
    "total_rows",
    "SAMPLE_PAYLOAD",
    "MetaClient",
    "MetaFetchError",
    "MetaPayloadError",
    "MetaStatusError",
    "MetaTransportError",
    "PageController",
    "SectionRegistry",
    "SectionState",
    "resolve_groups",
]
