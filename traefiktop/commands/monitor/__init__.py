"""traefiktop router monitor command implementation.

This package provides the monitor command with clear separation of concerns:

- types.py: Shared enums, style names, and help text
- data.py: Filtering, sorting, and line layout (pure functions, easily testable)
- formatting.py: Text rendering of router blocks (no curses dependencies)
- view_model.py: Selection, scroll, and search state for the router list
- refresh.py: Background snapshot refresh applied from the control loop
- display.py: Curses-based interactive UI
- entry.py: Command entry point and orchestration
"""

from __future__ import annotations

from .data import (
    LineLayout,
    compute_line_layout,
    compute_scroll_offset,
    filter_routers,
    matches_ignore_pattern,
    router_line_count,
    router_matches_query,
    sort_routers,
)
from .display import MonitorDisplay
from .entry import cmd_monitor
from .formatting import (
    DisplayLine,
    Segment,
    render_list_lines,
    render_plain_report,
    render_router_lines,
    router_status_payload,
    window_lines,
)
from .refresh import RefreshScheduler
from .types import AppState, SortMode
from .view_model import RouterListView

__all__ = [
    "AppState",
    "DisplayLine",
    "LineLayout",
    "MonitorDisplay",
    "RefreshScheduler",
    "RouterListView",
    "Segment",
    "SortMode",
    "cmd_monitor",
    "compute_line_layout",
    "compute_scroll_offset",
    "filter_routers",
    "matches_ignore_pattern",
    "render_list_lines",
    "render_plain_report",
    "render_router_lines",
    "router_line_count",
    "router_matches_query",
    "router_status_payload",
    "sort_routers",
    "window_lines",
]
