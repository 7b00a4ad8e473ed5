"""Filtering, sorting, and line layout for the router list (pure functions)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ...models import Router, Service
from ...status import compute_router_status, resolve_service_by_name, status_rank
from .types import SortMode

# Lines every router takes regardless of its service: name + rule
ROUTER_FIXED_LINES = 2
# Failover block: failover header + primary + fallback
FAILOVER_LINES = 3


def matches_ignore_pattern(name: str, patterns: Iterable[str]) -> bool:
    """Return True if a router name matches any ignore pattern.

    Matching is case-insensitive:
    - ``*foo*`` matches names containing "foo"
    - ``*foo`` matches names ending with "foo"
    - ``foo*`` matches names starting with "foo"
    - ``foo`` (no wildcard) matches names containing "foo"

    Empty patterns are skipped.
    """
    name_lower = name.lower()
    for pattern in patterns:
        pattern_lower = pattern.lower()
        if not pattern_lower:
            continue
        starts = pattern_lower.startswith("*")
        ends = pattern_lower.endswith("*")
        if starts and ends:
            matched = pattern_lower[1:-1] in name_lower
        elif starts:
            matched = name_lower.endswith(pattern_lower[1:])
        elif ends:
            matched = name_lower.startswith(pattern_lower[:-1])
        else:
            matched = pattern_lower in name_lower
        if matched:
            return True
    return False


def router_matches_query(router: Router, query: str) -> bool:
    """Return True if the query occurs in the router's name, rule, or service."""
    needle = query.lower()
    return (
        needle in router.name.lower()
        or needle in router.rule.lower()
        or needle in router.service.lower()
    )


def filter_routers(
    routers: Iterable[Router],
    *,
    ignore_patterns: Sequence[str] = (),
    query: str = "",
) -> list[Router]:
    """Drop ignored routers, then keep only those matching the search query."""
    kept = [r for r in routers if not matches_ignore_pattern(r.name, ignore_patterns)]
    if query:
        kept = [r for r in kept if router_matches_query(r, query)]
    return kept


def sort_routers(
    routers: Iterable[Router],
    services: Sequence[Service],
    *,
    sort_mode: SortMode,
) -> list[Router]:
    """Sort routers dead-first (Down, Up, Unknown, then name) or by name."""
    if sort_mode is SortMode.BY_NAME:
        return sorted(routers, key=lambda r: r.name)
    return sorted(
        routers,
        key=lambda r: (status_rank(compute_router_status(r, services).status), r.name),
    )


def router_line_count(
    router: Router,
    services: Sequence[Service],
    *,
    selected: bool,
    is_last: bool,
) -> int:
    """Number of display lines a router occupies, including its separator."""
    lines = ROUTER_FIXED_LINES
    service = resolve_service_by_name(router.service, services)
    if service is None:
        lines += 1
    elif service.is_failover:
        lines += FAILOVER_LINES
    else:
        lines += 1
        if selected and service.load_balancer is not None:
            lines += len(service.load_balancer.servers)
    if not is_last:
        lines += 1
    return lines


@dataclass(frozen=True)
class LineLayout:
    """Line offsets of each router in the fully rendered list.

    Attributes:
        starts: First line index of each router
        total_lines: Total number of lines for all routers
    """

    starts: tuple[int, ...]
    total_lines: int

    def span(self, index: int) -> int:
        """Number of lines router ``index`` occupies (separator included)."""
        end = self.starts[index + 1] if index + 1 < len(self.starts) else self.total_lines
        return end - self.starts[index]


def compute_line_layout(
    routers: Sequence[Router],
    services: Sequence[Service],
    *,
    selected_index: int,
) -> LineLayout:
    """Compute where each router starts given the current selection.

    The selected router expands to show its load-balancer servers, so the
    layout has to be recomputed whenever the selection changes.
    """
    starts = []
    line = 0
    last = len(routers) - 1
    for idx, router in enumerate(routers):
        starts.append(line)
        line += router_line_count(
            router, services, selected=(idx == selected_index), is_last=(idx == last)
        )
    return LineLayout(starts=tuple(starts), total_lines=line)


def compute_scroll_offset(
    layout: LineLayout,
    *,
    selected_index: int,
    scroll_offset: int,
    viewport_height: int,
) -> int:
    """Return a scroll offset that keeps the selected router visible.

    Scrolls up to the router's first line if it is above the viewport, or
    down just far enough to show all of it. A router taller than the
    viewport is aligned to its first line. The result is clamped to
    ``[0, max(0, total_lines - viewport_height)]``.
    """
    if not layout.starts:
        return 0
    start = layout.starts[selected_index]
    span = layout.span(selected_index)

    if start < scroll_offset:
        scroll_offset = start
    elif start + span > scroll_offset + viewport_height:
        if span <= viewport_height:
            scroll_offset = max(start + span - viewport_height, 0)
        else:
            scroll_offset = start

    max_scroll = max(layout.total_lines - viewport_height, 0)
    return min(max(scroll_offset, 0), max_scroll)
