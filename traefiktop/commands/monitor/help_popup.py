"""Key help overlay for the monitor display."""

from __future__ import annotations

from curses import error as curses_error
from dataclasses import dataclass
from importlib.metadata import version as get_version

from .types import KEYBINDINGS_TEXT

H_PAD = 2
V_PAD = 1


@dataclass(frozen=True)
class PopupGeometry:
    """Window position and the text rows that fit inside its border."""

    top: int
    left: int
    rows: int
    cols: int
    lines: tuple[str, ...]


def help_lines() -> list[str]:
    try:
        ver = get_version("traefiktop")
    except Exception:
        ver = "?"
    return [f"traefiktop v{ver}", "", *KEYBINDINGS_TEXT.strip().splitlines()]


def popup_geometry(lines: list[str], *, screen_rows: int, screen_cols: int) -> PopupGeometry:
    """Center a bordered box around ``lines``, shrinking it to fit the screen.

    ``rows`` and ``cols`` include the border. Lines that do not fit are
    dropped from the bottom and cut on the right.
    """
    inner_cols = max(len(line) for line in lines) + 2 * H_PAD
    inner_rows = len(lines) + 2 * V_PAD
    cols = min(inner_cols + 2, max(screen_cols, 3))
    rows = min(inner_rows + 2, max(screen_rows, 3))
    text_cols = cols - 2
    visible = [
        (" " * H_PAD + line).ljust(text_cols)[:text_cols]
        for line in lines[: max(rows - 2 - 2 * V_PAD, 0)]
    ]
    return PopupGeometry(
        top=max((screen_rows - rows) // 2, 0),
        left=max((screen_cols - cols) // 2, 0),
        rows=rows,
        cols=cols,
        lines=tuple(visible),
    )


def draw_help_popup(stdscr, curses_mod, *, attr: int) -> None:
    """Draw the help box on top of the current screen (caller refreshes)."""
    if not curses_mod:
        return
    height, width = stdscr.getmaxyx()
    geometry = popup_geometry(help_lines(), screen_rows=height, screen_cols=width)
    try:
        win = curses_mod.newwin(geometry.rows, geometry.cols, geometry.top, geometry.left)
    except curses_error:
        return

    win.bkgd(" ", attr)
    win.border()
    for offset, text in enumerate(geometry.lines):
        try:
            win.addstr(1 + V_PAD + offset, 1, text, attr)
        except curses_error:
            # Writing the bottom-right cell raises after the text is drawn
            continue
    win.noutrefresh()
