"""Tests for monitor filtering, sorting, and line layout."""

from __future__ import annotations

import pytest
from traefiktop.commands.monitor import (
    LineLayout,
    SortMode,
    compute_line_layout,
    compute_scroll_offset,
    filter_routers,
    matches_ignore_pattern,
    router_line_count,
    sort_routers,
)


class TestIgnorePatterns:
    """Tests for router ignore patterns."""

    @pytest.mark.parametrize("name", ["api-test-router", "test", "mytestservice"])
    def test_contains_pattern(self, name):
        assert matches_ignore_pattern(name, ["*test*"])

    def test_prefix_pattern(self):
        assert matches_ignore_pattern("testrouter", ["test*"])
        assert not matches_ignore_pattern("mytest", ["test*"])

    def test_suffix_pattern(self):
        assert matches_ignore_pattern("mytest", ["*test"])
        assert not matches_ignore_pattern("testrouter", ["*test"])

    def test_bare_pattern_is_substring(self):
        assert matches_ignore_pattern("testrouter", ["test"])
        assert matches_ignore_pattern("mytest", ["test"])
        assert matches_ignore_pattern("my-test-router", ["test"])
        assert not matches_ignore_pattern("production", ["test"])

    def test_case_insensitive(self):
        assert matches_ignore_pattern("API-Internal", ["*internal*"])
        assert matches_ignore_pattern("api-internal", ["API*"])

    def test_any_pattern_matches(self):
        assert matches_ignore_pattern("dashboard@internal", ["foo", "*@internal"])
        assert not matches_ignore_pattern("web", ["foo", "*@internal"])

    def test_no_patterns(self):
        assert not matches_ignore_pattern("web", [])

    def test_empty_pattern_is_skipped(self):
        assert not matches_ignore_pattern("web", [""])

    def test_lone_star_matches_everything(self):
        assert matches_ignore_pattern("anything", ["*"])


class TestFilterRouters:
    """Tests for ignore + search filtering."""

    def test_ignore_then_search(self, make_router):
        routers = [
            make_router("web", "web-svc"),
            make_router("web-test", "web-svc"),
            make_router("api", "api-svc"),
        ]
        result = filter_routers(routers, ignore_patterns=["*test*"], query="web")
        assert [r.name for r in result] == ["web"]

    def test_search_matches_rule_and_service(self, make_router):
        routers = [
            make_router("a", "billing", rule="Host(`a.example.com`)"),
            make_router("b", "other", rule="PathPrefix(`/Billing`)"),
            make_router("c", "other", rule="Host(`c.example.com`)"),
        ]
        result = filter_routers(routers, query="BILLING")
        assert [r.name for r in result] == ["a", "b"]

    def test_empty_query_keeps_all(self, make_router):
        routers = [make_router("a", "s"), make_router("b", "s")]
        assert filter_routers(routers) == routers


class TestSortRouters:
    """Tests for dead-first and name sorting."""

    def _scenario(self, make_router, make_service, *, svc_a_server: str):
        routers = [
            make_router("R2", "svcB"),
            make_router("R1", "svcA"),
        ]
        services = [
            make_service("svcA", servers={"http://url1": svc_a_server}),
            make_service("svcB", failover=("svcC", "svcD")),
            make_service("svcC", status="disabled"),
            make_service("svcD", status="enabled"),
        ]
        return routers, services

    def test_both_up_sorted_by_name(self, make_router, make_service):
        routers, services = self._scenario(make_router, make_service, svc_a_server="UP")
        result = sort_routers(routers, services, sort_mode=SortMode.DEAD_FIRST)
        assert [r.name for r in result] == ["R1", "R2"]

    def test_down_router_first(self, make_router, make_service):
        routers, services = self._scenario(make_router, make_service, svc_a_server="DOWN")
        routers = [*routers, make_router("R0", "missing")]
        result = sort_routers(routers, services, sort_mode=SortMode.DEAD_FIRST)
        assert [r.name for r in result] == ["R1", "R2", "R0"]

    def test_up_router_between_down_and_unknown(self, make_router, make_service):
        routers, services = self._scenario(make_router, make_service, svc_a_server="UP")
        services = [*services, make_service("dead", status="disabled")]
        routers = [
            make_router("a-unknown", "missing"),
            *routers,
            make_router("z-dead", "dead"),
        ]
        result = sort_routers(routers, services, sort_mode=SortMode.DEAD_FIRST)
        assert [r.name for r in result] == ["z-dead", "R1", "R2", "a-unknown"]

    def test_by_name(self, make_router, make_service):
        routers, services = self._scenario(make_router, make_service, svc_a_server="DOWN")
        routers = [make_router("b", "missing"), *routers, make_router("A", "missing")]
        result = sort_routers(routers, services, sort_mode=SortMode.BY_NAME)
        assert [r.name for r in result] == ["A", "R1", "R2", "b"]


@pytest.fixture
def layout_routers(sample_snapshot):
    """web (2 servers), api (failover), orphan (service not found), in that order."""
    by_name = {r.name: r for r in sample_snapshot.routers()}
    return [by_name["web"], by_name["api"], by_name["orphan"]]


class TestLineLayout:
    """Tests for per-router line counts and offsets."""

    def test_regular_service_lines(self, layout_routers, sample_snapshot):
        web = layout_routers[0]
        services = sample_snapshot.services()
        assert router_line_count(web, services, selected=False, is_last=False) == 4
        # Selected router shows one line per server
        assert router_line_count(web, services, selected=True, is_last=False) == 6
        assert router_line_count(web, services, selected=True, is_last=True) == 5

    def test_failover_lines_fixed(self, layout_routers, sample_snapshot):
        api = layout_routers[1]
        services = sample_snapshot.services()
        assert router_line_count(api, services, selected=False, is_last=False) == 6
        assert router_line_count(api, services, selected=True, is_last=False) == 6

    def test_not_found_lines(self, layout_routers, sample_snapshot):
        orphan = layout_routers[2]
        services = sample_snapshot.services()
        assert router_line_count(orphan, services, selected=True, is_last=True) == 3

    def test_layout_depends_on_selection(self, layout_routers, sample_snapshot):
        services = sample_snapshot.services()
        first = compute_line_layout(layout_routers, services, selected_index=0)
        assert first.starts == (0, 6, 12)
        assert first.total_lines == 15
        second = compute_line_layout(layout_routers, services, selected_index=1)
        assert second.starts == (0, 4, 10)
        assert second.total_lines == 13
        assert second.span(1) == 6
        assert second.span(2) == 3

    def test_empty_layout(self):
        layout = compute_line_layout([], [], selected_index=0)
        assert layout.starts == ()
        assert layout.total_lines == 0


def _scroll(layout: LineLayout, selected: int, offset: int, height: int) -> int:
    return compute_scroll_offset(
        layout, selected_index=selected, scroll_offset=offset, viewport_height=height
    )


class TestScrollOffset:
    """Tests for keeping the selected router visible."""

    LAYOUT = LineLayout(starts=(0, 6, 12), total_lines=15)

    def test_already_visible(self):
        assert _scroll(self.LAYOUT, 1, 4, 10) == 4

    def test_scroll_down_just_enough(self):
        assert _scroll(self.LAYOUT, 2, 0, 5) == 10
        assert _scroll(LineLayout(starts=(0, 4, 10), total_lines=13), 1, 0, 8) == 2

    def test_scroll_up_to_start(self):
        assert _scroll(self.LAYOUT, 0, 10, 5) == 0

    def test_taller_than_viewport_shows_start(self):
        assert _scroll(self.LAYOUT, 1, 0, 4) == 6

    def test_clamped_to_content(self):
        assert _scroll(self.LAYOUT, 2, 100, 5) == 10

    def test_everything_fits(self):
        assert _scroll(self.LAYOUT, 2, 3, 40) == 0

    def test_empty_layout(self):
        assert _scroll(LineLayout(starts=(), total_lines=0), 0, 5, 5) == 0
