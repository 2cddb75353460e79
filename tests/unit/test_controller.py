"""Tests for the page controller, fallback classification and section state."""

from unittest.mock import Mock

import pytest

from metaview.meta.client import MetaPayloadError, MetaStatusError, MetaTransportError
from metaview.meta.controller import (
    PageController,
    SectionRegistry,
    SectionState,
    resolve_groups,
)
from metaview.meta.models import (
    FallbackReason,
    LoadResult,
    LoadState,
    PagePhase,
    Row,
    ViewMode,
)
from metaview.meta.normalizer import normalize
from metaview.meta.sample_data import SAMPLE_PAYLOAD

EMPTY_ADVISORY = "Using hard-coded data (API returned empty or invalid)."
FAILED_ADVISORY = "Using hard-coded data (API failed)."


class TestResolveGroups:

    def test_real_data_is_used(self, meta_payload):
        result = resolve_groups(lambda: meta_payload)

        assert result.groups == normalize(meta_payload)
        assert result.fallback is None
        assert result.advisory is None
        assert not result.used_fallback

    @pytest.mark.parametrize("raw", [{}, None, 42, "text", [1, 2, 3]])
    def test_empty_or_invalid_falls_back(self, raw):
        result = resolve_groups(lambda: raw)

        assert result.groups == normalize(SAMPLE_PAYLOAD)
        assert result.fallback is FallbackReason.EMPTY_OR_INVALID
        assert result.advisory == EMPTY_ADVISORY

    @pytest.mark.parametrize(
        "error",
        [
            MetaTransportError("refused"),
            MetaStatusError(500),
            MetaPayloadError("not json"),
            ConnectionError("reset by peer"),
        ],
    )
    def test_fetch_failure_falls_back(self, error):
        fetch = Mock(side_effect=error)

        result = resolve_groups(fetch)

        fetch.assert_called_once_with()
        assert result.groups == normalize(SAMPLE_PAYLOAD)
        assert result.fallback is FallbackReason.API_FAILED
        assert result.advisory == FAILED_ADVISORY

    def test_custom_sample_payload(self):
        result = resolve_groups(lambda: {}, sample_payload={"Only": {"k": "v"}})
        assert result.groups == {"Only": [Row(component="k", identifier="v")]}

    def test_group_with_empty_object_is_real_data(self):
        result = resolve_groups(lambda: {"A": {}})

        assert result.groups == {"A": []}
        assert result.fallback is None


class TestSectionState:

    def test_starts_expanded_and_toggles(self):
        state = SectionState()
        assert state.expanded is True
        assert state.toggle() is False
        assert state.toggle() is True


class TestSectionRegistry:

    def test_sync_creates_expanded_states(self):
        registry = SectionRegistry()
        registry.sync(["A", "B"])

        assert registry.names() == ["A", "B"]
        assert registry.is_expanded("A")
        assert registry.is_expanded("B")

    def test_toggle_is_isolated_per_group(self):
        registry = SectionRegistry()
        registry.sync(["A", "B", "C"])

        registry.toggle("B")

        assert registry.is_expanded("A")
        assert not registry.is_expanded("B")
        assert registry.is_expanded("C")

    def test_sync_keeps_surviving_and_retires_missing(self):
        registry = SectionRegistry()
        registry.sync(["A", "B"])
        registry.toggle("A")
        kept = registry.get("A")

        registry.sync(["C", "A"])

        assert registry.names() == ["C", "A"]
        assert registry.get("A") is kept
        assert not registry.is_expanded("A")
        assert registry.is_expanded("C")
        assert "B" not in registry

    def test_returning_group_gets_fresh_state(self):
        registry = SectionRegistry()
        registry.sync(["A"])
        registry.toggle("A")
        registry.sync([])
        registry.sync(["A"])

        assert registry.is_expanded("A")
        assert len(registry) == 1


class TestPageController:

    def test_initial_state(self):
        page = PageController(fetch=Mock())

        assert page.phase is PagePhase.UNINITIALIZED
        assert page.load_state is LoadState.LOADING
        assert page.view is ViewMode.TABLE
        assert page.groups == {}
        assert page.advisory is None

    def test_mount_with_real_data(self, meta_payload):
        fetch = Mock(return_value=meta_payload)
        page = PageController(fetch=fetch)

        page.mount()

        fetch.assert_called_once_with()
        assert page.phase is PagePhase.READY
        assert page.load_state is LoadState.READY
        assert page.groups == normalize(meta_payload)
        assert page.advisory is None
        assert page.sections.names() == list(meta_payload)

    def test_mount_empty_object_uses_sample(self):
        page = PageController(fetch=lambda: {})

        page.mount()

        assert page.load_state is LoadState.READY
        assert list(page.groups) == ["A", "B", "C"]
        assert page.total_count == 7
        assert page.advisory == EMPTY_ADVISORY

    def test_mount_network_failure_uses_sample(self):
        page = PageController(fetch=Mock(side_effect=MetaTransportError("down")))

        page.mount()

        assert page.load_state is LoadState.READY
        assert page.groups == normalize(SAMPLE_PAYLOAD)
        assert page.advisory == FAILED_ADVISORY
        assert page.status_text() == "7 total fields"

    def test_mount_fetches_once(self, meta_payload):
        fetch = Mock(return_value=meta_payload)
        page = PageController(fetch=fetch)

        page.mount()
        again = page.mount()

        assert fetch.call_count == 1
        assert again.groups is page.groups

    def test_begin_load_clears_advisory(self):
        page = PageController(fetch=lambda: {})
        page.mount()
        assert page.advisory is not None

        page.begin_load()

        assert page.advisory is None
        assert page.load_state is LoadState.LOADING
        assert page.status_text() == "Loading…"

    def test_disposed_page_ignores_settle(self):
        page = PageController(fetch=Mock())
        token = page.begin_load()
        page.dispose()

        applied = page.settle(token, LoadResult(groups={"A": [Row("x", "1")]}))

        assert applied is False
        assert page.groups == {}
        assert page.disposed

    def test_dispose_during_fetch_discards_result(self, meta_payload):
        page = None

        def fetch():
            page.dispose()
            return meta_payload

        page = PageController(fetch=fetch)
        page.mount()

        assert page.groups == {}
        assert page.phase is PagePhase.LOADING

    def test_stale_token_is_discarded(self):
        page = PageController(fetch=Mock())
        stale = page.begin_load()
        current = page.begin_load()

        assert page.settle(stale, LoadResult(groups={"Old": []})) is False
        assert page.settle(current, LoadResult(groups={"New": []})) is True
        assert list(page.groups) == ["New"]

    def test_groups_replaced_wholesale(self):
        page = PageController(fetch=Mock())
        page.settle(page.begin_load(), LoadResult(groups={"A": [Row("x", "1")], "B": []}))
        page.sections.toggle("A")

        page.settle(page.begin_load(), LoadResult(groups={"C": [Row("y", "2")]}))

        assert list(page.groups) == ["C"]
        assert page.sections.names() == ["C"]
        assert page.total_count == 1

    def test_total_count_is_memoized_per_group_map(self, monkeypatch):
        page = PageController(fetch=lambda: {"A": {"x": 1, "y": 2}, "B": 3})
        page.mount()

        calls = []
        import metaview.meta.controller as controller_module
        real_total = controller_module.total_rows

        def counting_total(groups):
            calls.append(groups)
            return real_total(groups)

        monkeypatch.setattr(controller_module, "total_rows", counting_total)
        page._count_source = None

        assert page.total_count == 3
        assert page.total_count == 3
        assert len(calls) == 1

        page.settle(page.begin_load(), LoadResult(groups={"Z": []}))
        assert page.total_count == 0
        assert len(calls) == 2

    def test_toggle_view_changes_only_view(self, meta_payload):
        fetch = Mock(return_value=meta_payload)
        page = PageController(fetch=fetch)
        page.mount()
        groups_before = page.groups
        count_before = page.total_count

        assert page.toggle_view() is ViewMode.CARDS
        assert page.toggle_view() is ViewMode.TABLE
        page.set_view(ViewMode.CARDS)

        assert page.view is ViewMode.CARDS
        assert page.groups is groups_before
        assert page.total_count == count_before
        assert fetch.call_count == 1

    def test_set_view_accepts_string(self):
        page = PageController(fetch=Mock(), view="cards")
        assert page.view is ViewMode.CARDS
        page.set_view("table")
        assert page.view is ViewMode.TABLE
