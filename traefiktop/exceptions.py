"""traefiktop exception classes."""

from __future__ import annotations


class TraefikTopError(RuntimeError):
    """Base exception for traefiktop errors."""


class UserError(TraefikTopError):
    """Errors that should be shown to user without traceback."""

    def __init__(self, message: str, rc: int = 2):
        super().__init__(message)
        self.rc = rc


class FetchError(TraefikTopError):
    """Traefik API request failed (transport error or non-success status)."""


class ParseError(TraefikTopError):
    """Traefik API returned a response that could not be decoded."""
