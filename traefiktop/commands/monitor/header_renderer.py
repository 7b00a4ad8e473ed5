"""Header and footer rendering for the monitor display."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from importlib.metadata import version as get_version
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .curses_colors import CursesColors

from .types import AppState, SortMode


@dataclass
class HeaderInfo:
    """Display state parameters for header and footer rendering.

    Attributes:
        state: Current AppState
        search_query: Active search filter ("" when none)
        sort_mode: Current sort mode
        source: Traefik API URL being monitored
        total_routers: Routers in the current snapshot
        filtered_routers: Routers left after ignore patterns and search
        seconds_since_update: Age of the snapshot, None before the first one
        error_message: Message of the last failed refresh, if any
        loading: A refresh is in flight (shown in search mode too)
    """

    state: AppState
    search_query: str
    sort_mode: SortMode
    source: str
    total_routers: int
    filtered_routers: int
    seconds_since_update: float | None
    error_message: str | None = None
    loading: bool = False


def format_updated(seconds: float | None) -> str:
    """Format snapshot age for display ("never", "12s ago")."""
    if seconds is None:
        return "never"
    return f"{int(seconds)}s ago"


def build_header_sections(info: HeaderInfo) -> tuple[str, str]:
    """Build the left and right sections of the top header line."""
    try:
        ver = get_version("traefiktop")
    except Exception:
        ver = "?"
    left = f"traefiktop {ver} [? for help]"
    if info.state is AppState.SEARCH and info.search_query:
        left = f"{left} filter: {info.search_query}"
    elif info.search_query:
        left = f"{left} filter={info.search_query}"
    elif info.state is AppState.SEARCH:
        left = f"{left} type to search"
    else:
        left = f"{left} press / to search"

    if info.filtered_routers != info.total_routers:
        routers = f"{info.filtered_routers}/{info.total_routers}"
    else:
        routers = str(info.total_routers)
    right = f"source={info.source}, routers={routers}"
    return left, right


def build_footer_sections(info: HeaderInfo) -> list[tuple[str, str]]:
    """Build footer text as (text, role) pairs.

    Roles: "plain", "search", "highlight", "loading", "error".
    """
    if info.state is AppState.SEARCH:
        query = info.search_query or "(type to filter routers)"
        sections = [(f"Search: {query} | ESC: exit | Enter: accept", "search")]
        if info.loading:
            sections.append((" | loading...", "loading"))
        return sections

    sections = [
        ("q: quit | r: refresh | /: search | s: sort | sort: ", "plain"),
        (info.sort_mode.value, "highlight"),
        (f" | {format_updated(info.seconds_since_update)}", "plain"),
    ]
    if info.state is AppState.LOADING:
        sections.append((" | loading...", "loading"))
    elif info.state is AppState.ERROR:
        sections.append((" | refresh failed", "error"))
    return sections


class HeaderRenderer:
    """Renders the top banner and the bottom status line."""

    def __init__(
        self,
        *,
        safe_addstr: Callable[[int, int, str, int], None],
        colors: CursesColors,
    ) -> None:
        self.safe_addstr = safe_addstr
        self.colors = colors

    def draw_top_header(self, info: HeaderInfo, *, usable_width: int) -> int:
        """Render the header. Returns the number of rows used (1 or 2).

        The second row is only used to show a refresh error.
        """
        left, right = build_header_sections(info)
        if usable_width > 0:
            left = left[:usable_width]
        brand = left.split(" [", 1)[0]
        self.safe_addstr(0, 0, brand, self.colors.attrs.brand_attr)
        self.safe_addstr(0, len(brand), left[len(brand) :], self.colors.attrs.header_attr)
        if usable_width > 0 and len(left) + 1 + len(right) <= usable_width:
            self.safe_addstr(0, usable_width - len(right), right, self.colors.attrs.header_attr)

        if info.error_message:
            message = f"Error: {info.error_message}"
            if usable_width > 0:
                message = message[:usable_width]
            self.safe_addstr(1, 0, message, self.colors.attrs.error_attr)
            return 2
        return 1

    def draw_footer(self, info: HeaderInfo, *, row: int, usable_width: int) -> None:
        role_attrs = {
            "plain": self.colors.attrs.footer_attr,
            "search": self.colors.attrs.search_attr,
            "highlight": self.colors.attrs.highlight_attr,
            "loading": self.colors.attrs.loading_attr,
            "error": self.colors.attrs.error_attr,
        }
        col = 0
        for text, role in build_footer_sections(info):
            if usable_width > 0 and col >= usable_width:
                break
            if usable_width > 0:
                text = text[: usable_width - col]
            self.safe_addstr(row, col, text, role_attrs[role])
            col += len(text)
