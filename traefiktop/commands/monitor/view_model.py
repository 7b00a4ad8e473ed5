"""Router list state: filters, sort mode, selection, and scroll position."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from ...constants import DEFAULT_PAGE_SIZE
from ...models import Router, Service, Snapshot
from ...status import resolve_service_by_name
from .data import compute_line_layout, compute_scroll_offset, filter_routers, sort_routers
from .formatting import DisplayLine, render_list_lines, window_lines
from .types import AppState, SortMode


class RouterListView:
    """Mutable session state for the router list.

    Not thread-safe: the control loop must serialize calls. A pending refresh
    leaves the current snapshot readable; ``apply_snapshot`` replaces it and
    recomputes the visible list in one step.

    Selection rules:
    - search, sort, and ``reset_navigation`` move the cursor and scroll to 0
    - a refresh keeps the cursor index, clamped to the new list length
    - an empty list resets cursor and scroll to 0 and selects nothing
    """

    def __init__(
        self,
        *,
        ignore_patterns: Sequence[str] = (),
        sort_mode: SortMode = SortMode.DEAD_FIRST,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ignore_patterns: tuple[str, ...] = tuple(ignore_patterns)
        self.sort_mode = sort_mode
        self.page_size = page_size
        self.search_query = ""
        self.snapshot: Snapshot | None = None
        self.visible: list[Router] = []
        self.selected_index = 0
        self.scroll_offset = 0
        self.searching = False
        self.loading = False
        self.error_message: str | None = None
        self.last_update: float | None = None
        self._clock = clock

    # -- state ---------------------------------------------------------------

    @property
    def state(self) -> AppState:
        if self.searching:
            return AppState.SEARCH
        if self.loading:
            return AppState.LOADING
        if self.error_message is not None:
            return AppState.ERROR
        return AppState.NORMAL

    @property
    def services(self) -> tuple[Service, ...]:
        return self.snapshot.services() if self.snapshot is not None else ()

    @property
    def total_count(self) -> int:
        return len(self.snapshot.routers()) if self.snapshot is not None else 0

    @property
    def filtered_count(self) -> int:
        return len(self.visible)

    @property
    def has_selection(self) -> bool:
        return bool(self.visible)

    def seconds_since_update(self) -> float | None:
        if self.last_update is None:
            return None
        return self._clock() - self.last_update

    # -- recompute pipeline --------------------------------------------------

    def recompute(self, *, reset_position: bool = False) -> None:
        """Rebuild the visible list from the snapshot, filters, and sort mode."""
        if self.snapshot is None:
            self.visible = []
        else:
            filtered = filter_routers(
                self.snapshot.routers(),
                ignore_patterns=self.ignore_patterns,
                query=self.search_query,
            )
            self.visible = sort_routers(filtered, self.services, sort_mode=self.sort_mode)

        if reset_position:
            self.selected_index = 0
            self.scroll_offset = 0
        elif self.selected_index >= len(self.visible) and self.visible:
            self.selected_index = len(self.visible) - 1

        if not self.visible:
            self.selected_index = 0
            self.scroll_offset = 0

    def begin_refresh(self) -> None:
        self.loading = True

    def apply_snapshot(self, snapshot: Snapshot) -> None:
        """Replace the snapshot after a successful refresh, keeping the cursor."""
        self.snapshot = snapshot
        self.recompute()
        self.loading = False
        self.error_message = None
        self.last_update = self._clock()

    def apply_refresh_error(self, message: str) -> None:
        """Record a failed refresh; the previous snapshot is left untouched."""
        self.loading = False
        self.error_message = message

    def set_ignore_patterns(self, patterns: Sequence[str]) -> None:
        self.ignore_patterns = tuple(patterns)
        self.recompute(reset_position=True)

    # -- search and sort -----------------------------------------------------

    def enter_search_mode(self) -> None:
        self.searching = True

    def exit_search_mode(self) -> None:
        """Leave search mode and clear the filter."""
        self.searching = False
        self.search_query = ""
        self.recompute(reset_position=True)

    def accept_search(self) -> None:
        """Leave search mode keeping the current filter."""
        self.searching = False

    def set_search_query(self, query: str) -> None:
        self.search_query = query
        self.recompute(reset_position=True)

    def toggle_sort_mode(self) -> None:
        self.sort_mode = self.sort_mode.toggled()
        self.recompute(reset_position=True)

    def reset_navigation(self) -> None:
        self.selected_index = 0
        self.scroll_offset = 0

    # -- navigation ----------------------------------------------------------

    def _select(self, index: int) -> None:
        if not self.visible:
            return
        self.selected_index = min(max(index, 0), len(self.visible) - 1)

    def select_next(self) -> None:
        self._select(self.selected_index + 1)

    def select_previous(self) -> None:
        self._select(self.selected_index - 1)

    def select_first(self) -> None:
        self._select(0)

    def select_last(self) -> None:
        self._select(len(self.visible) - 1)

    def _page(self, page_size: int | None) -> int:
        return self.page_size if page_size is None else page_size

    def page_down(self, page_size: int | None = None) -> None:
        self._select(self.selected_index + self._page(page_size))

    def page_up(self, page_size: int | None = None) -> None:
        self._select(self.selected_index - self._page(page_size))

    def selected_router(self) -> Router | None:
        if not self.visible:
            return None
        return self.visible[self.selected_index]

    def service_for_router(self, router: Router) -> Service | None:
        return resolve_service_by_name(router.service, self.services)

    # -- line layout and scrolling -------------------------------------------

    def total_lines(self) -> int:
        return compute_line_layout(
            self.visible, self.services, selected_index=self.selected_index
        ).total_lines

    def ensure_selected_visible(self, viewport_height: int) -> None:
        """Adjust the scroll offset so the selected router is on screen."""
        if not self.visible:
            return
        layout = compute_line_layout(
            self.visible, self.services, selected_index=self.selected_index
        )
        self.scroll_offset = compute_scroll_offset(
            layout,
            selected_index=self.selected_index,
            scroll_offset=self.scroll_offset,
            viewport_height=viewport_height,
        )

    def display_lines(self, viewport_height: int) -> list[DisplayLine]:
        """Return exactly ``viewport_height`` lines for the current scroll window."""
        self.ensure_selected_visible(viewport_height)
        lines = render_list_lines(self.visible, self.services, selected_index=self.selected_index)
        return window_lines(lines, offset=self.scroll_offset, height=viewport_height)
