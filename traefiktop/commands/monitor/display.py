"""Curses-based UI display for monitor command."""

from __future__ import annotations

from curses import error as curses_error
from typing import TYPE_CHECKING

from .curses_colors import CursesColors
from .formatting import DisplayLine
from .header_renderer import HeaderInfo, HeaderRenderer
from .help_popup import draw_help_popup

if TYPE_CHECKING:
    from .refresh import RefreshScheduler
    from .view_model import RouterListView

KEY_ESCAPE = 27
KEY_CTRL_C = 3
BACKSPACE_KEYS = (8, 127)


class MonitorDisplay:
    """Curses monitor display driving a RouterListView."""

    def __init__(
        self,
        stdscr,
        *,
        view: RouterListView,
        scheduler: RefreshScheduler,
        source: str,
    ) -> None:
        self.stdscr = stdscr
        self.view = view
        self.scheduler = scheduler
        self.source = source
        self.show_help = False
        self.pending_g = False
        self.colors = CursesColors(stdscr)
        self.curses_mod = self.colors.curses_mod
        self.header_renderer = HeaderRenderer(safe_addstr=self.safe_addstr, colors=self.colors)

    def safe_addstr(self, row: int, col: int, text: str, attr: int = 0) -> None:
        try:
            if attr:
                self.stdscr.addstr(row, col, text, attr)
            else:
                self.stdscr.addstr(row, col, text)
        except curses_error:
            return

    def _is_enter(self, key: int) -> bool:
        return key in (self.curses_mod.KEY_ENTER, ord("\n"), ord("\r"))

    def _handle_search_key(self, key: int) -> None:
        view = self.view
        if key == KEY_ESCAPE:
            view.exit_search_mode()
        elif self._is_enter(key):
            view.accept_search()
        elif key in (self.curses_mod.KEY_BACKSPACE, *BACKSPACE_KEYS):
            view.set_search_query(view.search_query[:-1])
        elif 32 <= key < 127:
            view.set_search_query(view.search_query + chr(key))

    def handle_key(self, key: int, *, draw: bool = True) -> bool:
        """Handle a keypress. Returns True if we should exit.

        Args:
            key: The key code from getch()
            draw: Whether to redraw immediately (default True)
        """
        if key == -1:
            return False

        # Any key closes help (except '?' which opens it)
        if self.show_help:
            if key != ord("?"):
                self.show_help = False
                if draw:
                    self.draw_screen()
            return False

        if not self.curses_mod:
            return key in (ord("q"), ord("Q"))

        if self.view.searching:
            self._handle_search_key(key)
            if draw:
                self.draw_screen()
            return False

        if key in (ord("q"), ord("Q"), KEY_CTRL_C):
            return True

        view = self.view
        pending_g = self.pending_g
        self.pending_g = False
        if key == ord("?"):
            self.show_help = True
        elif key in (ord("r"), ord("R")):
            self.scheduler.request()
        elif key == ord("/"):
            view.enter_search_mode()
        elif key in (ord("s"), ord("S")):
            view.toggle_sort_mode()
        elif key in (self.curses_mod.KEY_UP, ord("k")):
            view.select_previous()
        elif key in (self.curses_mod.KEY_DOWN, ord("j")):
            view.select_next()
        elif key == ord("g"):
            # gg jumps to the first router
            if pending_g:
                view.select_first()
            else:
                self.pending_g = True
        elif key == ord("G"):
            view.select_last()
        elif key == self.curses_mod.KEY_NPAGE:
            view.page_down()
        elif key == self.curses_mod.KEY_PPAGE:
            view.page_up()

        if draw:
            self.draw_screen()
        return False

    def header_info(self) -> HeaderInfo:
        view = self.view
        return HeaderInfo(
            state=view.state,
            search_query=view.search_query,
            sort_mode=view.sort_mode,
            source=self.source,
            total_routers=view.total_count,
            filtered_routers=view.filtered_count,
            seconds_since_update=view.seconds_since_update(),
            error_message=view.error_message,
            loading=view.loading,
        )

    def _draw_line(self, row: int, line: DisplayLine, usable_width: int) -> None:
        col = 0
        for segment in line.segments:
            if usable_width > 0 and col >= usable_width:
                break
            text = segment.text[: usable_width - col] if usable_width > 0 else segment.text
            self.safe_addstr(row, col, text, self.colors.style_attr(segment.style))
            col += len(text)

    def _empty_message(self) -> tuple[str, int] | None:
        """Message to show instead of the list, if the list can't be shown."""
        view = self.view
        attrs = self.colors.attrs
        if view.snapshot is None:
            if view.error_message:
                return f"Error: {view.error_message}", attrs.error_attr
            return "Loading Traefik data...", attrs.loading_attr
        if not view.visible:
            if view.search_query:
                return "No routers match your search", attrs.header_attr
            return "No routers found", attrs.header_attr
        return None

    def draw_screen(self) -> None:
        self.stdscr.erase()
        height, width = self.stdscr.getmaxyx()
        usable_width = max(width - 1, 0)

        info = self.header_info()
        if self.view.snapshot is None:
            # Error is shown in the main area until there is data
            info.error_message = None
        header_rows = self.header_renderer.draw_top_header(info, usable_width=usable_width)
        footer_row = max(height - 1, header_rows)
        viewport_height = max(footer_row - header_rows, 0)

        message = self._empty_message()
        if message is not None:
            text, attr = message
            self.safe_addstr(header_rows, 0, text[:usable_width] if usable_width else text, attr)
        else:
            for idx, line in enumerate(self.view.display_lines(viewport_height)):
                self._draw_line(header_rows + idx, line, usable_width)

        self.header_renderer.draw_footer(info, row=footer_row, usable_width=usable_width)

        # Refresh main screen first, then draw help popup on top
        if self.show_help and self.curses_mod:
            self.stdscr.noutrefresh()
            draw_help_popup(self.stdscr, self.curses_mod, attr=self.colors.popup_attr())
            self.curses_mod.doupdate()
        else:
            self.stdscr.refresh()
