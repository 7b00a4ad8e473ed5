"""Shared types and constants for the monitor module."""

from __future__ import annotations

import enum


class AppState(enum.Enum):
    """What the monitor is currently showing.

    ERROR is paired with ``RouterListView.error_message``.
    """

    NORMAL = "normal"
    SEARCH = "search"
    LOADING = "loading"
    ERROR = "error"


class SortMode(enum.Enum):
    DEAD_FIRST = "dead"
    BY_NAME = "name"

    def toggled(self) -> SortMode:
        """Return the other sort mode."""
        if self is SortMode.DEAD_FIRST:
            return SortMode.BY_NAME
        return SortMode.DEAD_FIRST


# Render style names shared by formatting.py (producer) and curses_colors.py (consumer)
STYLE_PLAIN = ""
STYLE_NAME = "name"
STYLE_SELECTED = "selected"
STYLE_DOWN = "down"
STYLE_ICON = "icon"
STYLE_ICON_DOWN = "icon_down"
STYLE_ARROW = "arrow"
STYLE_RULE = "rule"
STYLE_SERVICE = "service"
STYLE_NOT_FOUND = "not_found"
STYLE_OK = "ok"
STYLE_FAILED = "failed"
STYLE_UNKNOWN = "unknown"
STYLE_MUTED = "muted"


KEYBINDINGS_TEXT = """\
Keybindings (press any key to close)

  ↑/↓ or k/j  Move selection
  gg / G      First / last router
  PgUp/PgDn   Move selection by a page
  /           Search (name, rule or service)
    Enter       keep filter and leave search
    Esc         clear filter and leave search
  s           Toggle sort (dead first ↔ name)
  r           Refresh now
  q           Quit

Router status:
  ⬢  at least one service (or failover target) is up
  ✖  every matching service is down
  ?  no matching service found
"""
