"""Text rendering and layout for the router list (no curses dependencies)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ...constants import SERVER_UP
from ...models import Router, Service, Snapshot
from ...status import (
    ServiceStatus,
    compute_router_status,
    compute_service_status,
    resolve_failover,
    resolve_service_by_name,
)
from .types import (
    STYLE_ARROW,
    STYLE_DOWN,
    STYLE_FAILED,
    STYLE_ICON,
    STYLE_ICON_DOWN,
    STYLE_MUTED,
    STYLE_NAME,
    STYLE_NOT_FOUND,
    STYLE_OK,
    STYLE_PLAIN,
    STYLE_RULE,
    STYLE_SELECTED,
    STYLE_SERVICE,
    STYLE_UNKNOWN,
)

ICON_UP = "⬢ "
ICON_DOWN = "✖ "
ICON_UNKNOWN = "? "

_STATUS_GLYPHS = {
    ServiceStatus.UP: ("✓", STYLE_OK),
    ServiceStatus.DOWN: ("✗", STYLE_FAILED),
    ServiceStatus.UNKNOWN: ("?", STYLE_UNKNOWN),
}


@dataclass(frozen=True)
class Segment:
    text: str
    style: str = STYLE_PLAIN


@dataclass(frozen=True)
class DisplayLine:
    """One rendered line made of styled segments."""

    segments: tuple[Segment, ...] = ()

    @property
    def text(self) -> str:
        return "".join(seg.text for seg in self.segments)


BLANK_LINE = DisplayLine()


def _line(*segments: Segment) -> DisplayLine:
    return DisplayLine(segments=segments)


def _status_line(branch: str, label: str, status: ServiceStatus) -> DisplayLine:
    glyph, glyph_style = _STATUS_GLYPHS[status]
    text_style = STYLE_NAME if status is ServiceStatus.UP else STYLE_MUTED
    return _line(
        Segment(f"      {branch} ", text_style),
        Segment(glyph, glyph_style),
        Segment(" "),
        Segment(label, text_style),
    )


def _server_lines(service: Service) -> list[DisplayLine]:
    if service.load_balancer is None:
        return []
    servers = service.load_balancer.servers
    lines = []
    for idx, server in enumerate(servers):
        branch = "└──" if idx == len(servers) - 1 else "├──"
        state = (service.server_status or {}).get(server.url, "unknown")
        status = ServiceStatus.UP if state == SERVER_UP else ServiceStatus.DOWN
        lines.append(_status_line(branch, server.url, status))
    return lines


def render_router_lines(
    router: Router,
    services: Sequence[Service],
    *,
    selected: bool,
    is_last: bool,
) -> list[DisplayLine]:
    """Render a router block.

    The number of lines returned always equals ``data.router_line_count`` for
    the same arguments.
    """
    status = compute_router_status(router, services).status
    if status is ServiceStatus.DOWN:
        icon, icon_style, name_style = ICON_DOWN, STYLE_ICON_DOWN, STYLE_DOWN
    elif status is ServiceStatus.UP:
        icon, icon_style, name_style = ICON_UP, STYLE_ICON, STYLE_NAME
    else:
        icon, icon_style, name_style = ICON_UNKNOWN, STYLE_UNKNOWN, STYLE_NAME
    if selected:
        name_style = STYLE_SELECTED

    lines = [
        _line(Segment(icon, icon_style), Segment(router.name, name_style)),
        _line(
            Segment("  "),
            Segment("→", STYLE_ARROW),
            Segment(" "),
            Segment(router.rule, STYLE_RULE),
        ),
    ]

    service = resolve_service_by_name(router.service, services)
    if service is None:
        missing = Segment(f"{router.service} (not found)", STYLE_NOT_FOUND)
        lines.append(_line(Segment("  └── "), missing))
    elif service.is_failover:
        header = Segment(f"{service.name} (failover)", STYLE_SERVICE)
        lines.append(_line(Segment("  └── "), header))
        resolved = resolve_failover(service.name, services)
        for branch, target, label in (
            ("├──", resolved.primary, service.failover.service if service.failover else ""),
            ("└──", resolved.fallback, service.failover.fallback if service.failover else ""),
        ):
            if target is None:
                lines.append(
                    _line(
                        Segment(f"      {branch} ", STYLE_MUTED),
                        Segment("?", STYLE_UNKNOWN),
                        Segment(" "),
                        Segment(f"{label or '-'} (not found)", STYLE_NOT_FOUND),
                    )
                )
            else:
                target_status = compute_service_status(target, services)
                lines.append(_status_line(branch, target.name, target_status))
    else:
        lines.append(_line(Segment("  └── "), Segment(service.name, STYLE_SERVICE)))
        if selected:
            lines.extend(_server_lines(service))

    if not is_last:
        lines.append(BLANK_LINE)
    return lines


def render_list_lines(
    routers: Sequence[Router],
    services: Sequence[Service],
    *,
    selected_index: int,
) -> list[DisplayLine]:
    """Render every router of the visible list, in order."""
    lines: list[DisplayLine] = []
    last = len(routers) - 1
    for idx, router in enumerate(routers):
        lines.extend(
            render_router_lines(
                router, services, selected=(idx == selected_index), is_last=(idx == last)
            )
        )
    return lines


def window_lines(lines: Sequence[DisplayLine], *, offset: int, height: int) -> list[DisplayLine]:
    """Slice ``height`` lines starting at ``offset``, padding with blank lines."""
    if height <= 0:
        return []
    visible = list(lines[offset : offset + height])
    visible.extend(BLANK_LINE for _ in range(height - len(visible)))
    return visible


def router_status_payload(router: Router, services: Sequence[Service]) -> dict[str, Any]:
    """Summarize a router and its computed status as a JSON-friendly dict."""
    info = compute_router_status(router, services)
    return {
        "name": router.name,
        "rule": router.rule,
        "service": router.service,
        "provider": router.provider,
        "entry_points": list(router.entry_points),
        "priority": router.priority,
        "status": info.status.value,
        "active_service": info.active_service.name if info.active_service else None,
        "alive_count": info.alive_count,
    }


def render_plain_report(
    snapshot: Snapshot,
    routers: Sequence[Router],
    *,
    source: str,
) -> list[str]:
    """Render a non-interactive summary of routers for --once output."""
    services = snapshot.services()
    lines = [
        f"traefik: {source}",
        f"routers: {len(routers)}/{len(snapshot.routers())}  services: {len(services)}",
        "",
    ]
    if not routers:
        lines.append("No routers found")
        return lines

    rows = [router_status_payload(r, services) for r in routers]
    name_width = max(len(row["name"]) for row in rows)
    for row in rows:
        status = row["status"].upper()
        active = row["active_service"] or "-"
        lines.append(
            f"{status:<7}  {row['name']:<{name_width}}  {row['service']}"
            f"  (active: {active}, alive: {row['alive_count']})"
        )
    return lines
