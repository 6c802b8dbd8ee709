from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click
from rich.console import Console

from .classifier import split_lines
from .config import DEFAULT_ENV_FILE, HostsConfig
from .exceptions import HostsmithError, format_error_message
from .hosts_manager import HostsManager
from .log_config import setup_logging
from .model import Intent
from .preflight import PreflightGuard
from .results import OperationResult
from .scanner import scan
from .cli_helpers.display import (
    display_content,
    display_entries,
    display_error,
    display_info,
    display_regions,
    display_success,
)

__all__ = ["cli"]

console = Console()

logger = logging.getLogger("hostsmith")


def _parse_entries(
    ctx: click.Context, param: click.Parameter, values: Tuple[str, ...]
) -> Dict[str, str]:
    entries: Dict[str, str] = {}
    for value in values:
        domain, sep, address = value.partition("=")
        if not sep or not domain.strip() or not address.strip():
            raise click.BadParameter(f"expected DOMAIN=ADDRESS, got {value!r}")
        entries[domain.strip()] = address.strip()
    return entries


def _finish(manager: HostsManager, result: OperationResult) -> None:
    if result.success:
        display_success(f"{result.message} ({manager.path})")
        return
    display_error(result.message)
    if result.error is not None:
        logger.debug(format_error_message(result.error))
    sys.exit(1)


def _preview(manager: HostsManager, intent: Intent, targets: Optional[Dict[str, str]] = None) -> None:
    try:
        content = manager.preview(intent, targets)
    except HostsmithError as exc:
        display_error(exc.message)
        sys.exit(1)
    display_info(f"Dry run, {manager.path} left unchanged:")
    display_content(content)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--hosts-file",
    "-f",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="Hosts file to edit. Defaults to the system hosts file.",
)
@click.option(
    "--env-file",
    "-e",
    type=click.Path(file_okay=True, dir_okay=False),
    default=DEFAULT_ENV_FILE,
    show_default=True,
    help="Optional dotenv file with HOSTSMITH_* settings.",
)
@click.option("--max-size", type=int, default=None, help="Size ceiling in bytes (default 50 MiB).")
@click.option("--no-size-check", is_flag=True, help="Process the file regardless of its size.")
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    envvar="HOSTSMITH_LOG_FILE",
    default=None,
    help="Also write logs to this file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging output.")
@click.pass_context
def cli(
    ctx: click.Context,
    hosts_file: Optional[Path],
    env_file: str,
    max_size: Optional[int],
    no_size_check: bool,
    log_file: Optional[Path],
    verbose: bool,
) -> None:
    """hostsmith – keep your own entries in the hosts file, undo them cleanly."""
    setup_logging(verbose, log_file)
    try:
        config = HostsConfig.load(
            env_file,
            hosts_file=hosts_file,
            max_size=max_size,
            check_size=False if no_size_check else None,
        )
    except HostsmithError as exc:
        display_error(exc.message)
        sys.exit(1)

    logger.debug(f"Configuration: {config}")
    ctx.ensure_object(dict)
    ctx.obj["manager"] = HostsManager(config)


@cli.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """List every effective address/domain entry."""
    manager: HostsManager = ctx.obj["manager"]
    result = manager.read_all_lines()
    if not result.success:
        display_error(result.message)
        sys.exit(1)
    entries = result.data or []
    if not entries:
        console.print("[yellow]No entries found.[/yellow]")
        return
    display_entries(entries, title=str(manager.path))


@cli.command()
@click.argument("entries", nargs=-1, callback=_parse_entries)
@click.option("--dry-run", is_flag=True, help="Print the new content instead of writing it.")
@click.pass_context
def update(ctx: click.Context, entries: Dict[str, str], dry_run: bool) -> None:
    """Point each DOMAIN at ADDRESS (arguments as DOMAIN=ADDRESS)."""
    manager: HostsManager = ctx.obj["manager"]
    if dry_run:
        _preview(manager, Intent.UPDATE, entries)
        return
    _finish(manager, manager.update_hosts(entries))


@cli.command()
@click.argument("domains", nargs=-1, required=True)
@click.option("--dry-run", is_flag=True, help="Print the new content instead of writing it.")
@click.pass_context
def remove(ctx: click.Context, domains: Tuple[str, ...], dry_run: bool) -> None:
    """Remove DOMAINS, keeping any original lines in the backup region."""
    manager: HostsManager = ctx.obj["manager"]
    if dry_run:
        _preview(manager, Intent.REMOVE, {domain: "" for domain in domains})
        return
    _finish(manager, manager.remove_hosts(domains))


@cli.command()
@click.option("--dry-run", is_flag=True, help="Print the new content instead of writing it.")
@click.pass_context
def restore(ctx: click.Context, dry_run: bool) -> None:
    """Drop every hostsmith entry and restore the original lines."""
    manager: HostsManager = ctx.obj["manager"]
    if dry_run:
        _preview(manager, Intent.RESTORE)
        return
    _finish(manager, manager.remove_hosts_by_tag())


@cli.command(name="open")
@click.pass_context
def open_file(ctx: click.Context) -> None:
    """Open the hosts file in a text viewer."""
    manager: HostsManager = ctx.obj["manager"]
    manager.open_file()


@cli.command()
@click.pass_context
def path(ctx: click.Context) -> None:
    """Print the hosts file location."""
    manager: HostsManager = ctx.obj["manager"]
    click.echo(str(manager.path))


@cli.command()
@click.pass_context
def doctor(ctx: click.Context) -> None:
    """Run preflight checks and summarize the regions owned by hostsmith."""
    manager: HostsManager = ctx.obj["manager"]
    guard = PreflightGuard(manager.path, manager.config.max_size)
    report = guard.report(check_size=manager.config.check_size)
    console.print("[bold blue]\nPreflight Check[/bold blue]")
    console.print(report.pretty())
    if not report.ok:
        sys.exit(1)

    console.print("[bold blue]\nRegions[/bold blue]")
    try:
        text = manager.path.read_text(encoding=manager.config.encoding)
        result = scan(split_lines(text), Intent.RESTORE)
    except (HostsmithError, OSError) as exc:
        display_error(format_error_message(exc))
        sys.exit(1)
    display_regions(result.insert, [backup.annotated() for backup in result.backup_data.values()])
