"""traefiktop command implementations."""

from __future__ import annotations

from .monitor import cmd_monitor

__all__ = [
    "cmd_monitor",
]
