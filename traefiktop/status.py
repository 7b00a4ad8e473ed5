"""Health verdicts for Traefik services and routers.

All functions here are pure: they read a snapshot's service list and never
mutate it. Failover services may reference each other in cycles (including
self-references); recursion is bounded by a per-call-tree ``visiting`` set.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from .constants import PROVIDER_SEPARATOR, SERVER_UP, STATUS_DISABLED, STATUS_ENABLED
from .models import Router, Service


class ServiceStatus(enum.Enum):
    UP = "up"
    DOWN = "down"
    UNKNOWN = "unknown"


# Dead-first ordering: Down < Up < Unknown
_STATUS_RANK = {
    ServiceStatus.DOWN: 0,
    ServiceStatus.UP: 1,
    ServiceStatus.UNKNOWN: 2,
}


def status_rank(status: ServiceStatus) -> int:
    """Return the dead-first sort rank of a status."""
    return _STATUS_RANK[status]


@dataclass(frozen=True)
class FailoverServices:
    """Resolved primary and fallback of a failover service."""

    primary: Service | None = None
    fallback: Service | None = None


@dataclass(frozen=True)
class RouterStatus:
    """Router verdict plus the service currently carrying its traffic.

    Attributes:
        status: Overall router status
        active_service: First alive service in match order, if any
        alive_count: Number of matched services with an alive path
    """

    status: ServiceStatus
    active_service: Service | None
    alive_count: int


def matches_service_name(name: str, candidate: str) -> bool:
    """Return True if ``candidate`` is ``name`` or ``name@<provider>``."""
    if not candidate.startswith(name):
        return False
    remainder = candidate[len(name) :]
    return not remainder or remainder.startswith(PROVIDER_SEPARATOR)


def resolve_service_by_name(name: str, services: Sequence[Service]) -> Service | None:
    """Find a service by name, accepting provider-qualified aliases.

    An exact name match always wins over ``name@provider``. Among aliases the
    first in iteration order is returned.
    """
    for service in services:
        if service.name == name:
            return service
    for service in services:
        if matches_service_name(name, service.name):
            return service
    return None


def resolve_failover(service_name: str, services: Sequence[Service]) -> FailoverServices:
    """Resolve the primary and fallback of the failover service ``service_name``.

    The failover service itself is looked up by exact name only.
    """
    service = next((s for s in services if s.name == service_name), None)
    if service is None or service.failover is None:
        return FailoverServices()
    return FailoverServices(
        primary=resolve_service_by_name(service.failover.service, services),
        fallback=resolve_service_by_name(service.failover.fallback, services),
    )


@contextmanager
def _visiting(visiting: set[str], name: str) -> Iterator[None]:
    visiting.add(name)
    try:
        yield
    finally:
        visiting.discard(name)


def _leaf_status(service: Service) -> ServiceStatus:
    if service.server_status is not None:
        statuses = list(service.server_status.values())
        if any(s == SERVER_UP for s in statuses):
            return ServiceStatus.UP
        if statuses:
            return ServiceStatus.DOWN
        return ServiceStatus.UNKNOWN
    if service.status == STATUS_ENABLED:
        return ServiceStatus.UP
    if service.status == STATUS_DISABLED:
        return ServiceStatus.DOWN
    return ServiceStatus.UNKNOWN


def compute_service_status(
    service: Service,
    services: Sequence[Service],
    visiting: set[str] | None = None,
) -> ServiceStatus:
    """Compute the health of a service, following failover chains.

    Args:
        service: Service to evaluate
        services: All services of the snapshot
        visiting: Names on the current recursion path; a service reached
            again while on the path evaluates to UNKNOWN

    Returns:
        UP, DOWN or UNKNOWN
    """
    if visiting is None:
        visiting = set()
    if service.name in visiting:
        return ServiceStatus.UNKNOWN

    with _visiting(visiting, service.name):
        if not service.is_failover:
            return _leaf_status(service)

        resolved = resolve_failover(service.name, services)
        primary_status = (
            compute_service_status(resolved.primary, services, visiting)
            if resolved.primary is not None
            else ServiceStatus.UNKNOWN
        )
        if primary_status is ServiceStatus.UP:
            return ServiceStatus.UP

        fallback_status = (
            compute_service_status(resolved.fallback, services, visiting)
            if resolved.fallback is not None
            else ServiceStatus.UNKNOWN
        )
        if fallback_status is ServiceStatus.UP:
            return ServiceStatus.UP
        if ServiceStatus.DOWN in (primary_status, fallback_status):
            return ServiceStatus.DOWN
        return ServiceStatus.UNKNOWN


def find_router_services(router: Router, services: Sequence[Service]) -> list[Service]:
    """Return every service whose name matches the router's service reference."""
    return [s for s in services if matches_service_name(router.service, s.name)]


def compute_router_status(router: Router, services: Sequence[Service]) -> RouterStatus:
    """Compute a router's verdict from all services it may dispatch to.

    Each matched service is evaluated with its own fresh ``visiting`` set.
    """
    matched = find_router_services(router, services)
    alive_count = 0
    active_service: Service | None = None

    for svc in matched:
        if svc.is_failover:
            resolved = resolve_failover(svc.name, services)
            primary_status = (
                compute_service_status(resolved.primary, services, set())
                if resolved.primary is not None
                else ServiceStatus.UNKNOWN
            )
            fallback_status = (
                compute_service_status(resolved.fallback, services, set())
                if resolved.fallback is not None
                else ServiceStatus.UNKNOWN
            )
            if primary_status is ServiceStatus.UP:
                alive_count += 1
                if active_service is None:
                    active_service = resolved.primary
            elif fallback_status is ServiceStatus.UP:
                alive_count += 1
                if active_service is None:
                    active_service = resolved.fallback
        elif compute_service_status(svc, services, set()) is ServiceStatus.UP:
            alive_count += 1
            if active_service is None:
                active_service = svc

    if alive_count > 0:
        status = ServiceStatus.UP
    elif not matched:
        status = ServiceStatus.UNKNOWN
    else:
        status = ServiceStatus.DOWN
    return RouterStatus(status=status, active_service=active_service, alive_count=alive_count)
