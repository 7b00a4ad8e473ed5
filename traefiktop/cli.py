"""traefiktop CLI using Click."""

from __future__ import annotations

import logging
import sys

import click

from .cli_types import MonitorArgs
from .commands import cmd_monitor
from .constants import DEFAULT_PAGE_SIZE, DEFAULT_REFRESH_S, ENV_API_URL, ENV_BASIC_AUTH
from .exceptions import FetchError, ParseError, TraefikTopError, UserError

# Module logger
logger = logging.getLogger("traefiktop")


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if debug else logging.WARNING
    logger.setLevel(level)
    if any(
        isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) is sys.stderr
        for h in logger.handlers
    ):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="traefiktop", prog_name="traefiktop")
@click.option(
    "--debug",
    "-d",
    is_flag=True,
    help="Enable debug logging to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """traefiktop: watch Traefik router health from the terminal."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    setup_logging(debug=debug)


@cli.command("monitor")
@click.option(
    "--host",
    envvar=ENV_API_URL,
    required=True,
    help=f"Traefik API base URL, e.g. http://traefik:8080 (env: {ENV_API_URL}).",
)
@click.option(
    "--insecure",
    is_flag=True,
    help="Skip TLS certificate verification.",
)
@click.option(
    "--basic-auth",
    metavar="USER:PASS",
    help=f"HTTP basic auth credentials (env: {ENV_BASIC_AUTH}).",
)
@click.option(
    "--ignore",
    multiple=True,
    metavar="PATTERN",
    help="Hide routers whose name matches PATTERN (case-insensitive, * wildcards, repeatable).",
)
@click.option(
    "--refresh",
    "-r",
    type=int,
    default=DEFAULT_REFRESH_S,
    show_default=True,
    help="Refresh interval in seconds.",
)
@click.option(
    "--once",
    "--headless",
    "once",
    is_flag=True,
    help="Fetch once, print a report and exit (no TUI).",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="With --once, emit machine-readable JSON to stdout.",
)
@click.option(
    "--sort",
    type=click.Choice(["dead", "name"], case_sensitive=False),
    default="dead",
    show_default=True,
    help="Sort order: dead routers first, or by name.",
)
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    default=DEFAULT_PAGE_SIZE,
    show_default=True,
    help="Routers to move on PgUp/PgDn.",
)
def monitor(
    host: str,
    insecure: bool,
    basic_auth: str | None,
    ignore: tuple[str, ...],
    refresh: int,
    once: bool,
    json_output: bool,
    sort: str,
    page_size: int,
):
    """Show router health for a Traefik instance (refreshes periodically)."""
    if json_output and not once:
        raise click.UsageError("--json requires --once")

    args = MonitorArgs(
        host=host,
        insecure=insecure,
        basic_auth=basic_auth,
        ignore=list(ignore),
        refresh=refresh,
        once=once,
        json=json_output,
        sort=sort.lower(),
        page_size=page_size,
    )
    cmd_monitor(args)


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except UserError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(e.rc)
    except (FetchError, ParseError) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)
    except TraefikTopError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(2)
