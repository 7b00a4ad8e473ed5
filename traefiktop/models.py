"""Immutable snapshot types for Traefik routers and services.

Records are built from the JSON returned by the Traefik API
(``/api/http/routers`` and ``/api/http/services``). Field names follow
Python conventions; ``from_dict`` maps the camelCase keys of the API.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .constants import FAILOVER_TYPE
from .exceptions import ParseError


def _require_mapping(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ParseError(f"Expected {kind} object, got {type(data).__name__}")
    return data


def _require_name(data: Mapping[str, Any], kind: str) -> str:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise ParseError(f"{kind} record is missing a name: {dict(data)!r}")
    return name


def _require_list(value: Any, field_name: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"Expected {field_name} list, got {type(value).__name__}")
    return value


def _str_tuple(value: Any, field_name: str) -> tuple[str, ...]:
    return tuple(str(v) for v in _require_list(value, field_name))


@dataclass(frozen=True)
class Server:
    """A single load-balancer backend."""

    url: str

    @classmethod
    def from_dict(cls, data: Any) -> Server:
        data = _require_mapping(data, "server")
        return cls(url=str(data.get("url", "")))


@dataclass(frozen=True)
class HealthCheck:
    """Load-balancer health check descriptor."""

    mode: str | None = None
    path: str | None = None
    interval: str | None = None
    timeout: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> HealthCheck:
        data = _require_mapping(data, "healthCheck")
        return cls(
            mode=data.get("mode"),
            path=data.get("path"),
            interval=data.get("interval"),
            timeout=data.get("timeout"),
        )


@dataclass(frozen=True)
class LoadBalancer:
    """Server pool of a regular service."""

    servers: tuple[Server, ...] = ()
    health_check: HealthCheck | None = None

    @classmethod
    def from_dict(cls, data: Any) -> LoadBalancer:
        data = _require_mapping(data, "loadBalancer")
        servers = _require_list(data.get("servers"), "servers")
        health_check = data.get("healthCheck")
        return cls(
            servers=tuple(Server.from_dict(s) for s in servers),
            health_check=HealthCheck.from_dict(health_check) if health_check else None,
        )


@dataclass(frozen=True)
class FailoverConfig:
    """Names of the primary and fallback services of a failover service."""

    service: str
    fallback: str

    @classmethod
    def from_dict(cls, data: Any) -> FailoverConfig:
        data = _require_mapping(data, "failover")
        return cls(service=str(data.get("service", "")), fallback=str(data.get("fallback", "")))


@dataclass(frozen=True)
class TlsConfig:
    """Router TLS settings (only the options name is kept)."""

    options: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> TlsConfig:
        data = _require_mapping(data, "tls")
        return cls(options=data.get("options"))


@dataclass(frozen=True)
class Router:
    """A routing rule dispatching matching traffic to a service."""

    name: str
    rule: str = ""
    service: str = ""
    entry_points: tuple[str, ...] = ()
    middlewares: tuple[str, ...] | None = None
    priority: int = 0
    tls: TlsConfig | None = None
    status: str = ""
    provider: str = ""
    using: tuple[str, ...] = ()
    rule_syntax: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Router:
        data = _require_mapping(data, "router")
        name = _require_name(data, "Router")
        try:
            priority = int(data.get("priority") or 0)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Router {name!r} has invalid priority: {e}") from e
        middlewares = data.get("middlewares")
        tls = data.get("tls")
        return cls(
            name=name,
            rule=str(data.get("rule", "")),
            service=str(data.get("service", "")),
            entry_points=_str_tuple(data.get("entryPoints"), "entryPoints"),
            middlewares=_str_tuple(middlewares, "middlewares") if middlewares is not None else None,
            priority=priority,
            tls=TlsConfig.from_dict(tls) if isinstance(tls, Mapping) else None,
            status=str(data.get("status", "")),
            provider=str(data.get("provider", "")),
            using=_str_tuple(data.get("using"), "using"),
            rule_syntax=data.get("ruleSyntax"),
        )


@dataclass(frozen=True)
class Service:
    """A dispatch target: a load-balanced server pool or a failover wrapper."""

    name: str
    type: str | None = None
    load_balancer: LoadBalancer | None = None
    failover: FailoverConfig | None = None
    status: str = ""
    server_status: Mapping[str, str] | None = field(default=None, hash=False)
    used_by: tuple[str, ...] = ()
    provider: str = ""

    @property
    def is_failover(self) -> bool:
        return self.type == FAILOVER_TYPE or self.failover is not None

    @classmethod
    def from_dict(cls, data: Any) -> Service:
        data = _require_mapping(data, "service")
        name = _require_name(data, "Service")
        load_balancer = data.get("loadBalancer")
        failover = data.get("failover")
        server_status = data.get("serverStatus")
        if server_status is not None:
            server_status = MappingProxyType(
                {str(k): str(v) for k, v in _require_mapping(server_status, "serverStatus").items()}
            )
        return cls(
            name=name,
            type=data.get("type"),
            load_balancer=LoadBalancer.from_dict(load_balancer) if load_balancer else None,
            failover=FailoverConfig.from_dict(failover) if failover else None,
            status=str(data.get("status", "")),
            server_status=server_status,
            used_by=_str_tuple(data.get("usedBy"), "usedBy"),
            provider=str(data.get("provider", "")),
        )


class Snapshot:
    """One atomically fetched pair of router and service lists."""

    __slots__ = ("_routers", "_services")

    def __init__(self, routers: Iterable[Router] = (), services: Iterable[Service] = ()) -> None:
        self._routers = tuple(routers)
        self._services = tuple(services)

    def routers(self) -> tuple[Router, ...]:
        return self._routers

    def services(self) -> tuple[Service, ...]:
        return self._services

    @classmethod
    def from_payload(cls, routers: Any, services: Any) -> Snapshot:
        """Build a snapshot from decoded ``/routers`` and ``/services`` responses.

        Raises:
            ParseError: If either payload is not a list of objects with names
        """
        if not isinstance(routers, list):
            raise ParseError(f"Expected routers list, got {type(routers).__name__}")
        if not isinstance(services, list):
            raise ParseError(f"Expected services list, got {type(services).__name__}")
        return cls(
            routers=[Router.from_dict(r) for r in routers],
            services=[Service.from_dict(s) for s in services],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self._routers == other._routers and self._services == other._services

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Snapshot(routers={len(self._routers)}, services={len(self._services)})"
