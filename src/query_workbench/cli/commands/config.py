"""Configuration management CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from query_workbench.cli.commands._shared import get_config
from query_workbench.core.config import DEFAULT_CONFIG_PATH, load_config

if TYPE_CHECKING:
    from pathlib import Path

config_app = typer.Typer(help="Configuration management commands")


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if not ctx.invoked_subcommand:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Display resolved configuration with source attribution."""
    resolved = get_config(ctx)
    config_path: Path | None = ctx.obj.get("config_file")
    sources = resolved.sources

    typer.echo("Service Settings (resolved):")
    timeout = (
        f"{resolved.request_timeout}s" if resolved.request_timeout else "not set"
    )
    service_fields = [
        ("service_url", resolved.service_url),
        ("query_path", resolved.query_path),
        ("request_timeout", timeout),
    ]
    for field_name, value in service_fields:
        source = sources.get(field_name, "default")
        typer.echo(f"  {field_name}: {value} ({source})")

    typer.echo("")
    typer.echo("General:")
    general_fields = [
        ("format", "default_format", resolved.default_format),
        ("column_width", "column_width", str(resolved.column_width)),
        ("min_column_width", "min_column_width", str(resolved.min_column_width)),
        ("progress_interval", "progress_interval", f"{resolved.progress_interval}s"),
    ]
    for label, field_name, value in general_fields:
        source = sources.get(field_name, "default")
        typer.echo(f"  {label}: {value} ({source})")

    typer.echo("")
    if resolved.active_profile:
        typer.echo(f"Active Profile: {resolved.active_profile}")
    else:
        typer.echo("Active Profile: none")

    display_path = config_path or DEFAULT_CONFIG_PATH
    typer.echo(f"Config File: {display_path}")


@config_app.command("profiles")
def config_profiles(ctx: typer.Context) -> None:
    """List available service profiles."""
    config_path: Path | None = ctx.obj.get("config_file")
    app_config = load_config(config_path)
    active_profile = ctx.obj.get("profile") or app_config.default_profile

    if not app_config.profiles:
        typer.echo("No profiles configured.")
        display_path = config_path or DEFAULT_CONFIG_PATH
        typer.echo(f"Add profiles to: {display_path}")
        return

    typer.echo("Available Profiles:")
    typer.echo("")
    for name, profile in sorted(app_config.profiles.items()):
        is_active = name == active_profile
        marker = "* " if is_active else "  "
        label = " (active)" if is_active else ""
        typer.echo(f"{marker}{name}{label}")

        typer.echo(f"      service_url: {profile.service_url}")
        if profile.query_path != "/query":
            typer.echo(f"      query_path: {profile.query_path}")
        if profile.request_timeout:
            typer.echo(f"      request_timeout: {profile.request_timeout}s")
        typer.echo("")
