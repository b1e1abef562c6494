"""Command-line interface for bind-manager.

Usage:
    bind-manager add <domain> [reason]
    bind-manager del <domain>
    bind-manager list
    bind-manager check
    bind-manager about
"""

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from loguru import logger

from bind_manager import __version__
from bind_manager.core.config import Config
from bind_manager.core.constants import APP_NAME, DEFAULT_REASON
from bind_manager.core.exceptions import BindManagerError
from bind_manager.core.logger import setup_logging
from bind_manager.core.registry import DomainRegistry
from bind_manager.core.types import AddOutcome, LoadStatus, ReloadResult, RemoveOutcome

app = typer.Typer(
    name=APP_NAME,
    help="A CLI tool to manage BIND blacklisted zones.",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool):
    if value:
        typer.echo(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a YAML or JSON configuration file"),
    zones_file: Optional[str] = typer.Option(None, "--zones-file", help="Blacklisted zones file"),
    reason_log: Optional[str] = typer.Option(None, "--reason-log", help="JSON reason log"),
    no_reload: bool = typer.Option(False, "--no-reload", help="Do not reload BIND after changes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Manage BIND blacklisted zones."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config_path": config,
            "zones_file": zones_file,
            "reason_log": reason_log,
            "no_reload": no_reload,
            "verbose": verbose,
        }
    )


def _init_core(ctx: typer.Context) -> DomainRegistry:
    """Build the registry from config file, environment and CLI overrides."""
    options = ctx.obj or {}
    config = Config(options.get("config_path"))
    if options.get("zones_file"):
        config.set("zones_file", options["zones_file"])
    if options.get("reason_log"):
        config.set("reason_log", options["reason_log"])

    level = "DEBUG" if options.get("verbose") else config.get("log_level", "WARNING")
    setup_logging(level, config.get("log_file"))

    return DomainRegistry.from_config(config, reload=not options.get("no_reload"))


@contextmanager
def _fatal_errors():
    """Turn store, lock and config failures into exit status 1."""
    try:
        yield
    except (BindManagerError, OSError) as e:
        logger.debug(f"Fatal: {e!r}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _echo_reload(ctx: typer.Context, result: Optional[ReloadResult]) -> None:
    if result is None:
        return
    if (ctx.obj or {}).get("no_reload"):
        typer.echo("BIND reload skipped.")
        return
    if result is ReloadResult.SUCCESS:
        typer.echo("BIND reloaded successfully.")
    else:
        typer.echo("Failed to reload BIND.")


@app.command()
def add(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="The domain to be added."),
    reason: str = typer.Argument(DEFAULT_REASON, help="The reason for blacklisting."),
):
    """Add a domain to the blacklist."""
    with _fatal_errors():
        registry = _init_core(ctx)
        result = registry.add(domain, reason)

    if result.outcome is AddOutcome.UPDATED:
        typer.echo(f"Record already exists, updated reason for domain {domain}.")
    else:
        typer.echo(f"Domain {domain} added to blacklist.")
    _echo_reload(ctx, result.reload)


@app.command("del")
def delete(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="The domain to be removed."),
):
    """Remove a domain from the blacklist."""
    with _fatal_errors():
        registry = _init_core(ctx)
        result = registry.remove(domain)

    if result.outcome is RemoveOutcome.NOT_FOUND:
        typer.echo("Domain not found.")
    else:
        typer.echo(f"Domain {domain} removed from blacklist.")
        if result.outcome is RemoveOutcome.REASON_ONLY:
            typer.echo("  (no zone declaration was present; removed the reason only)")
        elif result.outcome is RemoveOutcome.ZONE_ONLY:
            typer.echo("  (no reason was recorded; removed the zone declaration only)")
    _echo_reload(ctx, result.reload)


@app.command("list")
def list_domains(ctx: typer.Context):
    """List blacklisted domains with their reasons."""
    with _fatal_errors():
        registry = _init_core(ctx)
        entries = registry.list_entries()

    for line in registry.format_listing(entries):
        typer.echo(line)


@app.command()
def check(ctx: typer.Context):
    """Report differences between the zones file and the reason log."""
    with _fatal_errors():
        registry = _init_core(ctx)
        report = registry.check()

    if report.reason_log_status is not LoadStatus.OK:
        typer.echo(f"Reason log: {report.reason_log_status}")
    for domain in report.missing_reasons:
        typer.echo(f" - {domain}: declared in zones file, no reason recorded")
    for domain in report.orphan_reasons:
        typer.echo(f" - {domain}: reason recorded, not declared in zones file")
    for domain in report.duplicate_zones:
        typer.echo(f" - {domain}: declared more than once")
    if report.marker_present:
        typer.echo(f"An interrupted commit left {registry.marker_path}; reconcile and delete it.")

    if report.consistent:
        typer.echo("Zones file and reason log are consistent.")
    else:
        raise typer.Exit(1)


@app.command()
def about():
    """Show information about this tool."""
    for line in DomainRegistry.about():
        typer.echo(line)


def main():
    """Entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception("CLI error")
        typer.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
