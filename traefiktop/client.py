"""Traefik API integration."""

from __future__ import annotations

import logging
import os
import time
from importlib.metadata import PackageNotFoundError, version
from typing import Any
from urllib.parse import quote

import requests
import urllib3

from .constants import (
    DEFAULT_TIMEOUT_S,
    ENV_BASIC_AUTH,
    ROUTERS_PATH,
    SERVICE_PATH,
    SERVICES_PATH,
    USER_AGENT_PREFIX,
)
from .exceptions import FetchError, ParseError, UserError
from .models import Service, Snapshot

logger = logging.getLogger("traefiktop")


def load_basic_auth(value: str | None = None) -> tuple[str, str] | None:
    """Parse basic auth credentials.

    Looks for credentials in this order:
    1. The ``value`` argument (from --basic-auth)
    2. TRAEFIK_BASIC_AUTH environment variable

    Args:
        value: Credentials as "user:password", or None

    Returns:
        (user, password) tuple, or None if no credentials were given

    Raises:
        UserError: If the credentials are not in user:password form
    """
    raw = value if value is not None else os.environ.get(ENV_BASIC_AUTH)
    if not raw:
        return None
    user, sep, password = raw.partition(":")
    if not sep or not user:
        raise UserError("Invalid basic auth credentials (expected user:password)")
    return user, password


def _user_agent() -> str:
    try:
        ver = version("traefiktop")
    except PackageNotFoundError:
        ver = "0"
    return f"{USER_AGENT_PREFIX}/{ver}"


class TraefikClient:
    """Read-only client for the Traefik HTTP API."""

    def __init__(
        self,
        base_url: str,
        *,
        insecure: bool = False,
        auth: tuple[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json", "User-Agent": _user_agent()})
        if auth is not None:
            self.session.auth = auth
        if insecure:
            self.session.verify = False
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)
        start = time.monotonic()
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Failed to send request to Traefik API ({url}): {e}") from e
        logger.debug("GET %s -> %d in %.2fs", url, response.status_code, time.monotonic() - start)

        if not response.ok:
            body = response.text.strip()
            detail = f" - {body}" if body else ""
            raise FetchError(f"Traefik API returned HTTP {response.status_code} for {url}{detail}")

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON from {url}: {e}") from e

    def get_routers(self) -> list[dict[str, Any]]:
        """Fetch raw HTTP router records."""
        data = self._get_json(ROUTERS_PATH)
        if not isinstance(data, list):
            raise ParseError(f"Expected a list of routers, got {type(data).__name__}")
        return data

    def get_services(self) -> list[dict[str, Any]]:
        """Fetch raw HTTP service records."""
        data = self._get_json(SERVICES_PATH)
        if not isinstance(data, list):
            raise ParseError(f"Expected a list of services, got {type(data).__name__}")
        return data

    def get_service(self, name: str) -> Service:
        """Fetch a single service by name (including any @provider suffix)."""
        return Service.from_dict(self._get_json(SERVICE_PATH.format(name=quote(name, safe=""))))

    def fetch_snapshot(self) -> Snapshot:
        """Fetch routers and services and build one snapshot.

        Raises:
            FetchError: If either request fails or returns a non-success status
            ParseError: If either response is malformed
        """
        routers = self.get_routers()
        services = self.get_services()
        snapshot = Snapshot.from_payload(routers, services)
        logger.debug("Fetched %r", snapshot)
        return snapshot

    def close(self) -> None:
        self.session.close()
