"""Shared pytest fixtures for traefiktop tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from traefiktop.models import Router, Service, Snapshot


def router_dict(name: str, service: str, **overrides: Any) -> dict[str, Any]:
    """Build a router record shaped like the Traefik API response."""
    record = {
        "entryPoints": ["websecure"],
        "service": service,
        "rule": f"Host(`{name}.example.com`)",
        "priority": 10,
        "status": "enabled",
        "using": ["websecure"],
        "name": name,
        "provider": "docker",
    }
    record.update(overrides)
    return record


def service_dict(name: str, **overrides: Any) -> dict[str, Any]:
    """Build a service record shaped like the Traefik API response."""
    record: dict[str, Any] = {
        "status": "enabled",
        "name": name,
        "provider": name.split("@", 1)[1] if "@" in name else "file",
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_router() -> Callable[..., Router]:
    """Factory for Router objects."""

    def factory(name: str, service: str, **overrides: Any) -> Router:
        return Router.from_dict(router_dict(name, service, **overrides))

    return factory


@pytest.fixture
def make_service() -> Callable[..., Service]:
    """Factory for Service objects.

    Keyword shortcuts:
        servers: dict of url -> status (sets loadBalancer and serverStatus)
        failover: (primary, fallback) names
    """

    def factory(
        name: str,
        *,
        servers: dict[str, str] | None = None,
        failover: tuple[str, str] | None = None,
        **overrides: Any,
    ) -> Service:
        record = service_dict(name, **overrides)
        if servers is not None:
            record["loadBalancer"] = {"servers": [{"url": url} for url in servers]}
            record["serverStatus"] = dict(servers)
        if failover is not None:
            record["type"] = "failover"
            record["failover"] = {"service": failover[0], "fallback": failover[1]}
        return Service.from_dict(record)

    return factory


@pytest.fixture
def sample_payload() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Routers and services covering regular, failover, and missing services."""
    routers = [
        router_dict("web", "web-svc"),
        router_dict("api", "api-failover"),
        router_dict("orphan", "missing-svc"),
        router_dict("dashboard", "api@internal", provider="internal"),
    ]
    services = [
        service_dict(
            "web-svc@docker",
            loadBalancer={
                "servers": [{"url": "http://10.0.0.1:80"}, {"url": "http://10.0.0.2:80"}],
                "healthCheck": {"path": "/health", "interval": "10s", "timeout": "3s"},
            },
            serverStatus={"http://10.0.0.1:80": "UP", "http://10.0.0.2:80": "DOWN"},
            usedBy=["web@docker"],
        ),
        service_dict(
            "api-failover@file",
            type="failover",
            failover={"service": "api-main", "fallback": "api-backup"},
        ),
        service_dict("api-main@file", status="disabled"),
        service_dict("api-backup@file", status="enabled"),
        service_dict("api@internal", status="enabled"),
    ]
    return routers, services


@pytest.fixture
def sample_snapshot(sample_payload) -> Snapshot:
    routers, services = sample_payload
    return Snapshot.from_payload(routers, services)


@pytest.fixture
def make_snapshot() -> Callable[..., Snapshot]:
    """Factory for snapshots of regular routers, one leaf service each.

    ``make_snapshot("a", "b", down={"b"})`` gives routers a -> a-svc (up) and
    b -> b-svc (down).
    """

    def factory(*names: str, down: frozenset[str] | set[str] = frozenset()) -> Snapshot:
        routers = [router_dict(name, f"{name}-svc") for name in names]
        services = [
            service_dict(f"{name}-svc@docker", status="disabled" if name in down else "enabled")
            for name in names
        ]
        return Snapshot.from_payload(routers, services)

    return factory
