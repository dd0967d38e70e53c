"""metriclint CLI entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
import yaml

from metriclint import __version__

if TYPE_CHECKING:
    from metriclint.descriptor import MetricDescriptor
    from metriclint.units import UnitTable


class ConfigError(Exception):
    """Raised when a definitions or units file cannot be used."""


@click.group()
@click.version_option(version=__version__, prog_name="metriclint")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.pass_context
def main(ctx: click.Context, *, verbose: bool) -> None:
    """metriclint - naming and documentation checks for metric definitions."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_inputs(
    definitions: Path, units: Path | None
) -> tuple[list[MetricDescriptor], UnitTable]:
    from metriclint.definitions import load_definitions
    from metriclint.units import DEFAULT_UNIT_TABLE, load_unit_table

    try:
        descriptors = load_definitions(definitions)
        table = load_unit_table(units) if units is not None else DEFAULT_UNIT_TABLE
    except (ValueError, yaml.YAMLError) as exc:
        msg = f"Invalid configuration: {exc}"
        raise ConfigError(msg) from exc
    return descriptors, table


@main.command()
@click.argument(
    "definitions",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--units",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML unit table overriding the built-in one.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if issues found.",
)
def check(
    definitions: Path,
    *,
    units: Path | None,
    fmt: str | None,
    strict: bool,
) -> None:
    """Lint the metric definitions in DEFINITIONS.

    Exit codes: 0 = clean or issues without --strict,
    1 = issues with --strict, 2 = configuration error.
    """
    from metriclint.linter import format_json as _format_json
    from metriclint.linter import format_porcelain as _format_porcelain
    from metriclint.linter import format_rich as _format_rich
    from metriclint.linter import lint as run_lint

    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        descriptors, table = _load_inputs(definitions, units)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    results = [run_lint(d, table=table) for d in descriptors]

    formatters = {
        "rich": _format_rich,
        "json": _format_json,
        "porcelain": _format_porcelain,
    }
    output = formatters[fmt](results)
    if output:
        click.echo(output)

    if strict and any(r.issues for r in results):
        sys.exit(1)
