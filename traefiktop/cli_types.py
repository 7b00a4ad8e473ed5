"""Type definitions for CLI command arguments."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MonitorArgs:
    """Arguments for monitor command."""

    host: str
    insecure: bool
    basic_auth: str | None
    ignore: list[str]
    refresh: int
    once: bool
    json: bool
    sort: str
    page_size: int
