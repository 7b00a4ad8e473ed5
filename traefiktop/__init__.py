"""
traefiktop - Terminal dashboard for Traefik router health.

Design goals:
- Read-only: only GET requests against the Traefik API.
- Each refresh replaces the whole snapshot; nothing is kept between refreshes.
- Failover chains are followed to decide whether a router can serve traffic.
"""

from __future__ import annotations

from .cli import main
from .exceptions import FetchError, ParseError, TraefikTopError, UserError

__all__ = [
    "FetchError",
    "ParseError",
    "TraefikTopError",
    "UserError",
    "main",
]
