"""Shared CLI plumbing for command modules.

Config resolution, client creation, format-option handling and output
helpers. Distinct from cli.helpers which holds pure formatting functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from query_workbench.cli.output import get_formatter, write_output
from query_workbench.core.client import QueryServiceClient
from query_workbench.core.config import load_config, resolve_config

if TYPE_CHECKING:
    import typer

    from query_workbench.core.config import ResolvedConfig
    from query_workbench.core.models import QueryResult
    from query_workbench.core.workbench import Workbench


def get_config(ctx: typer.Context, timeout: float | None = None) -> ResolvedConfig:
    obj = ctx.ensure_object(dict)
    config = load_config(obj.get("config_file"))

    cli_overrides: dict[str, Any] = {}
    for key in ("url", "timeout", "width", "format"):
        val = obj.get(key)
        if val is not None:
            cli_overrides[key] = val
    if timeout is not None:
        cli_overrides["timeout"] = timeout

    return resolve_config(config, profile_name=obj.get("profile"), **cli_overrides)


def get_client(config: ResolvedConfig) -> QueryServiceClient:
    return QueryServiceClient(config)


def format_options(ctx: typer.Context) -> dict[str, Any]:
    obj = ctx.ensure_object(dict)
    return {
        "format_flag": obj.get("format"),
        "compact": obj.get("compact", False),
        "width": obj.get("width") or 40,
        "no_header": obj.get("no_header", False),
    }


def output_result(
    ctx: typer.Context,
    result: QueryResult,
    workbench: Workbench | None = None,
) -> None:
    opts = format_options(ctx)
    if workbench is not None:
        if workbench.config.sources.get("default_format", "default") != "default":
            opts["default"] = workbench.config.default_format
        opts["width"] = workbench.config.column_width
        opts["widths"] = workbench.layout.widths
        opts["sort"] = workbench.sort_config
    formatter = get_formatter(**opts)
    write_output(formatter, result)
