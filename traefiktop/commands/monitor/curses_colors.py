"""Curses color initialization and attribute management for monitor display."""

from __future__ import annotations

from curses import error as curses_error
from dataclasses import dataclass

from .types import (
    STYLE_ARROW,
    STYLE_DOWN,
    STYLE_FAILED,
    STYLE_ICON,
    STYLE_ICON_DOWN,
    STYLE_MUTED,
    STYLE_NAME,
    STYLE_NOT_FOUND,
    STYLE_OK,
    STYLE_RULE,
    STYLE_SELECTED,
    STYLE_SERVICE,
    STYLE_UNKNOWN,
)

# Color pair numbers
PAIR_CYAN = 1
PAIR_YELLOW = 2
PAIR_MAGENTA = 3
PAIR_GREEN = 4
PAIR_RED = 5
PAIR_WHITE = 6
PAIR_SELECTED = 7  # black on cyan
PAIR_POPUP = 8  # white on black


@dataclass
class CursesAttrs:
    """Named curses attributes for header, footer, and messages.

    Attributes:
        brand_attr: Attribute for "traefiktop" branding
        header_attr: Attribute for the search/count header
        footer_attr: Attribute for the footer key help
        highlight_attr: Attribute for the active sort mode in the footer
        search_attr: Attribute for the search prompt
        error_attr: Attribute for error messages
        loading_attr: Attribute for the loading indicator
    """

    brand_attr: int
    header_attr: int
    footer_attr: int
    highlight_attr: int
    search_attr: int
    error_attr: int
    loading_attr: int


class CursesColors:
    """Curses color initialization and style-name to attribute resolution.

    Render code tags text with style names (see ``types.STYLE_*``); this class
    maps them to curses attributes, falling back to monochrome attributes when
    the terminal has no colors.
    """

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        self.curses_mod = None
        self.color_enabled = False
        self.attrs = CursesAttrs(0, 0, 0, 0, 0, 0, 0)
        self._styles: dict[str, int] = {}
        self._init_curses()

    def _init_curses(self) -> None:
        """Initialize curses with color support."""
        try:
            import curses

            self.curses_mod = curses
            curses.curs_set(0)
            if curses.has_colors():
                curses.start_color()
                curses.use_default_colors()
                curses.init_pair(PAIR_CYAN, curses.COLOR_CYAN, -1)
                curses.init_pair(PAIR_YELLOW, curses.COLOR_YELLOW, -1)
                curses.init_pair(PAIR_MAGENTA, curses.COLOR_MAGENTA, -1)
                curses.init_pair(PAIR_GREEN, curses.COLOR_GREEN, -1)
                curses.init_pair(PAIR_RED, curses.COLOR_RED, -1)
                curses.init_pair(PAIR_WHITE, curses.COLOR_WHITE, -1)
                curses.init_pair(PAIR_SELECTED, curses.COLOR_BLACK, curses.COLOR_CYAN)
                curses.init_pair(PAIR_POPUP, curses.COLOR_WHITE, curses.COLOR_BLACK)
                self.color_enabled = True
            self._build_attrs(curses)
        except curses_error:
            return

    def _pair(self, number: int) -> int:
        if not self.color_enabled or self.curses_mod is None:
            return 0
        return self.curses_mod.color_pair(number)

    def _build_attrs(self, curses) -> None:
        bold = curses.A_BOLD
        dim = curses.A_DIM
        self.attrs = CursesAttrs(
            brand_attr=bold | self._pair(PAIR_CYAN),
            header_attr=dim,
            footer_attr=dim,
            highlight_attr=self._pair(PAIR_CYAN),
            search_attr=self._pair(PAIR_YELLOW),
            error_attr=bold | self._pair(PAIR_RED),
            loading_attr=self._pair(PAIR_YELLOW),
        )
        selected = bold | (self._pair(PAIR_SELECTED) if self.color_enabled else curses.A_REVERSE)
        self._styles = {
            STYLE_NAME: bold | self._pair(PAIR_WHITE),
            STYLE_SELECTED: selected,
            STYLE_DOWN: bold | self._pair(PAIR_RED),
            STYLE_ICON: self._pair(PAIR_CYAN),
            STYLE_ICON_DOWN: self._pair(PAIR_WHITE),
            STYLE_ARROW: self._pair(PAIR_YELLOW),
            STYLE_RULE: dim,
            STYLE_SERVICE: self._pair(PAIR_MAGENTA),
            STYLE_NOT_FOUND: self._pair(PAIR_RED),
            STYLE_OK: self._pair(PAIR_GREEN),
            STYLE_FAILED: self._pair(PAIR_RED),
            STYLE_UNKNOWN: self._pair(PAIR_YELLOW),
            STYLE_MUTED: dim,
        }

    def style_attr(self, style: str) -> int:
        """Return the curses attribute for a render style name (0 if unknown)."""
        return self._styles.get(style, 0)

    def popup_attr(self) -> int:
        if self.curses_mod is None:
            return 0
        return self._pair(PAIR_POPUP) if self.color_enabled else self.curses_mod.A_REVERSE
