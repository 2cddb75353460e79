"""
Page controller: fetch, fallback classification, view mode and section state.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional

from metaview.logger import get_logger
from metaview.meta.client import MetaFetchError
from metaview.meta.models import (
    FallbackReason,
    GroupMap,
    LoadResult,
    LoadState,
    PagePhase,
    RawPayload,
    ViewMode,
)
from metaview.meta.normalizer import normalize, total_rows
from metaview.meta.sample_data import SAMPLE_PAYLOAD

logger = get_logger(__name__)

Fetcher = Callable[[], RawPayload]


@dataclass
class SectionState:
    """Expand/collapse state owned by a single section."""
    expanded: bool = True

    def toggle(self) -> bool:
        self.expanded = not self.expanded
        return self.expanded


class SectionRegistry:
    """Section states keyed by group name, retired when the group disappears."""

    def __init__(self):
        self._states: Dict[str, SectionState] = {}

    def sync(self, names: Iterable[str]) -> None:
        self._states = {name: self._states.get(name) or SectionState() for name in names}

    def get(self, name: str) -> SectionState:
        return self._states[name]

    def toggle(self, name: str) -> bool:
        return self._states[name].toggle()

    def is_expanded(self, name: str) -> bool:
        return self._states[name].expanded

    def names(self) -> List[str]:
        return list(self._states)

    def __contains__(self, name: str) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)


def resolve_groups(fetch: Fetcher, sample_payload: Any = SAMPLE_PAYLOAD) -> LoadResult:
    """
    Run one fetch attempt and classify its outcome.

    Real data is used only when it normalizes to at least one group. An
    empty or non-object payload, and every fetch failure, fall back to the
    sample payload with the matching reason.

    Args:
        fetch: Zero-argument callable returning the decoded payload
        sample_payload: Payload substituted on fallback

    Returns:
        LoadResult with the groups to display and the fallback reason, if any
    """
    try:
        raw = fetch()
    except MetaFetchError as e:
        logger.warning(f"Meta fetch failed, using sample data: {e}")
        return LoadResult(groups=normalize(sample_payload), fallback=FallbackReason.API_FAILED)
    except Exception as e:
        # Custom fetchers may raise anything; the page must still become ready
        logger.error(f"Unexpected error while fetching meta payload: {e}", exc_info=True)
        return LoadResult(groups=normalize(sample_payload), fallback=FallbackReason.API_FAILED)

    groups = normalize(raw)
    if not groups:
        logger.warning("Meta payload empty or not an object, using sample data")
        return LoadResult(groups=normalize(sample_payload), fallback=FallbackReason.EMPTY_OR_INVALID)

    logger.info(f"Loaded {len(groups)} groups ({total_rows(groups)} fields) from data source")
    return LoadResult(groups=groups)


class PageController:
    """
    Drives the meta components page.

    Lifecycle: uninitialized -> loading -> ready, once per mount. The fetch
    is the only blocking step; its result is applied through settle(), which
    ignores results for a disposed controller or a superseded load.
    """

    def __init__(
        self,
        fetch: Fetcher,
        sample_payload: Any = SAMPLE_PAYLOAD,
        view: ViewMode = ViewMode.TABLE,
    ):
        self._fetch = fetch
        self._sample_payload = sample_payload
        self.view = ViewMode(view)
        self.phase = PagePhase.UNINITIALIZED
        self.groups: GroupMap = {}
        self.fallback: Optional[FallbackReason] = None
        self.sections = SectionRegistry()
        self._disposed = False
        self._load_token = 0
        self._count_source: Optional[GroupMap] = None
        self._count = 0

    # Lifecycle

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def advisory(self) -> Optional[str]:
        return self.fallback.message if self.fallback else None

    @property
    def load_state(self) -> LoadState:
        return LoadState.READY if self.phase is PagePhase.READY else LoadState.LOADING

    @property
    def is_loading(self) -> bool:
        return self.load_state is LoadState.LOADING

    def begin_load(self) -> int:
        """Enter loading, clear the advisory and return the token for this load."""
        self._load_token += 1
        self.phase = PagePhase.LOADING
        self.fallback = None
        return self._load_token

    def settle(self, token: int, result: LoadResult) -> bool:
        """Apply a load result. Returns False when the result was discarded."""
        if self._disposed:
            logger.info("Discarding load result for disposed page")
            return False
        if token != self._load_token:
            logger.info(f"Discarding stale load result (token {token}, current {self._load_token})")
            return False
        self._set_groups(result.groups)
        self.fallback = result.fallback
        self.phase = PagePhase.READY
        return True

    def mount(self) -> LoadResult:
        """Fetch once and settle. Calling mount() again on a mounted page does nothing."""
        if self.phase is not PagePhase.UNINITIALIZED:
            return LoadResult(groups=self.groups, fallback=self.fallback)
        token = self.begin_load()
        result = resolve_groups(self._fetch, self._sample_payload)
        self.settle(token, result)
        return result

    def dispose(self) -> None:
        self._disposed = True

    # Derived data

    def _set_groups(self, groups: GroupMap) -> None:
        self.groups = groups
        self.sections.sync(groups.keys())

    @property
    def total_count(self) -> int:
        # Recomputed only when the GroupMap object is replaced
        if self._count_source is not self.groups:
            self._count = total_rows(self.groups)
            self._count_source = self.groups
        return self._count

    def status_text(self) -> str:
        if self.is_loading:
            return "Loading…"
        return f"{self.total_count} total fields"

    # View mode

    def set_view(self, view: ViewMode) -> None:
        self.view = ViewMode(view)

    def toggle_view(self) -> ViewMode:
        self.view = ViewMode.CARDS if self.view is ViewMode.TABLE else ViewMode.TABLE
        return self.view
