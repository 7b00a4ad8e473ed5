"""Monitor command entry point."""

from __future__ import annotations

import curses
import json
import logging
import sys
from contextlib import contextmanager
from curses import wrapper as curses_wrapper
from typing import TYPE_CHECKING

from ...client import TraefikClient, load_basic_auth
from ...constants import INPUT_TIMEOUT_MS
from ...exceptions import UserError
from .data import filter_routers, sort_routers
from .display import MonitorDisplay
from .formatting import render_plain_report, router_status_payload
from .refresh import RefreshScheduler
from .types import SortMode
from .view_model import RouterListView

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ...cli_types import MonitorArgs

logger = logging.getLogger("traefiktop")


@contextmanager
def muted_logging() -> Iterator[None]:
    """Silence the traefiktop logger while curses owns the terminal."""
    previous = logger.disabled
    logger.disabled = True
    try:
        yield
    finally:
        logger.disabled = previous


def run_once(client: TraefikClient, args: MonitorArgs) -> None:
    """Fetch a single snapshot and print it (plain text or JSON)."""
    snapshot = client.fetch_snapshot()
    services = snapshot.services()
    routers = sort_routers(
        filter_routers(snapshot.routers(), ignore_patterns=args.ignore),
        services,
        sort_mode=SortMode(args.sort),
    )
    if args.json:
        payload = {
            "routers": [router_status_payload(r, services) for r in routers],
            "total_routers": len(snapshot.routers()),
            "total_services": len(services),
        }
        print(json.dumps(payload, indent=2, sort_keys=True))
        return
    for line in render_plain_report(snapshot, routers, source=args.host):
        print(line)


def run_interactive(client: TraefikClient, args: MonitorArgs) -> None:
    view = RouterListView(
        ignore_patterns=args.ignore,
        sort_mode=SortMode(args.sort),
        page_size=args.page_size,
    )
    scheduler = RefreshScheduler(client, view, interval_s=args.refresh)

    def curses_main(stdscr) -> None:
        stdscr.keypad(True)
        stdscr.timeout(INPUT_TIMEOUT_MS)
        display = MonitorDisplay(stdscr, view=view, scheduler=scheduler, source=args.host)
        scheduler.request()
        display.draw_screen()
        while True:
            key = stdscr.getch()
            if display.handle_key(key, draw=False):
                return

            redraw = key != -1
            if redraw:
                peek = stdscr.getch()
                if peek != -1:
                    if view.searching:
                        # Typed text must not be lost
                        curses.ungetch(peek)
                    else:
                        # Drop queued repeats (held arrow keys) so we don't lag behind
                        curses.flushinp()
            if scheduler.tick():
                redraw = True
            if redraw:
                display.draw_screen()

    try:
        with muted_logging():
            curses_wrapper(curses_main)
    finally:
        scheduler.shutdown()


def cmd_monitor(args: MonitorArgs) -> None:
    """Show router health for a Traefik instance."""
    if not args.host:
        raise UserError("Traefik API URL is required (--host or TRAEFIK_API_URL)")
    if args.refresh <= 0:
        raise UserError("--refresh must be a positive number of seconds")

    client = TraefikClient(
        args.host,
        insecure=args.insecure,
        auth=load_basic_auth(args.basic_auth),
    )
    try:
        if args.once:
            run_once(client, args)
            return
        if not sys.stdout.isatty():
            raise UserError(
                "The interactive monitor requires a terminal (TTY). "
                "Use --once to print a single report instead."
            )
        run_interactive(client, args)
    finally:
        client.close()
