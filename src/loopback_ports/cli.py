"""CLI for loopback port checks: probe, scan, resolve."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
import yaml

from .config import get_config
from .probe import is_port_available
from .resolve import get_available_port
from .scan import NO_PORT, SCAN_WINDOW, find_available_port, scan_range
from .settings import SETTINGS_FILENAME, get_resolve_options, load_settings


def _config_callback(ctx: click.Context, _param: click.Parameter, value: str | None) -> str | None:
    if value:
        path = Path(value)
        if not path.exists():
            raise click.BadParameter(f"Properties file not found: {path}")
        ctx.ensure_object(dict)
        ctx.obj["properties_path"] = path
    return value


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    envvar="LOOPBACK_PORTS_PROPERTIES",
    help="Path to a properties file (key=value). LOOPBACK_PORTS_* env vars override.",
    callback=_config_callback,
)
@click.option("-v", "--verbose", is_flag=True, help="Log every probe to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Check TCP ports on 127.0.0.1 and pick a free one for a local server."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", force=True)
    ctx.ensure_object(dict)
    ctx.obj["config"] = get_config(ctx.obj.get("properties_path"))


@main.command(short_help="Check whether one port can be bound.")
@click.argument("port", type=int)
def probe(port: int) -> None:
    """Check whether PORT can be bound on 127.0.0.1.

    Exits 0 when the port is free and 1 when it is in use. The check briefly
    binds the port, so another process may still take it before you do.
    """
    if is_port_available(port):
        click.echo(f"Port {port} is available.")
        return
    click.echo(f"Port {port} is in use.")
    sys.exit(1)


@main.command(short_help="Find the first free port from START upwards.")
@click.argument("start", type=int)
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=SCAN_WINDOW,
    show_default=True,
    help="Number of consecutive ports to try.",
)
def scan(start: int, max_attempts: int) -> None:
    """Probe START, START+1, ... one at a time and print the first free port."""
    port = find_available_port(start, max_attempts)
    if port == NO_PORT:
        ports = scan_range(start, max_attempts)
        click.echo(f"No available ports found in range {ports[0]}-{ports[-1]}.", err=True)
        sys.exit(1)
    click.echo(str(port))


@main.command(short_help="Resolve the preferred port, switching to a free one if needed.")
@click.argument("port", type=int, required=False)
@click.option(
    "--auto-switch",
    type=click.BOOL,
    default=None,
    help="Scan the next ports when PORT is busy: true/false (default: from config, else true).",
)
@click.option(
    "--settings",
    "settings_path",
    type=click.Path(path_type=Path, exists=True, dir_okay=False),
    default=None,
    help=f"Path to settings YAML (default: {SETTINGS_FILENAME} in cwd).",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.pass_context
def resolve(
    ctx: click.Context,
    port: int | None,
    auto_switch: bool | None,
    settings_path: Path | None,
    as_json: bool,
) -> None:
    """Print the port a local server should use.

    PORT defaults to LOOPBACK_PORTS_PORT, then "port" in loopback-ports.yaml,
    then 8080. When it is busy and auto switching is on, the next 50 ports are
    tried in order. The chosen port goes to stdout and any note about switching
    goes to stderr. Exits 1 if no port could be found.
    """
    config = ctx.obj["config"]
    path = settings_path if settings_path is not None else Path.cwd() / SETTINGS_FILENAME
    try:
        settings = load_settings(path)
        preferred, switch = get_resolve_options(config, settings, port=port, auto_switch=auto_switch)
    except (yaml.YAMLError, OSError) as e:
        raise click.UsageError(f"Failed to read {path}: {e}") from e
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    result = get_available_port(preferred, switch)
    if as_json:
        click.echo(json.dumps(result.as_dict()))
    else:
        if result.message:
            click.echo(result.message, err=True)
        if result.ok:
            click.echo(str(result.port))
    if not result.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
