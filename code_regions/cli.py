"""
Reports the region markers of a source file.
Prints the nested region outline (or fold levels, or JSON) to stdout and any
structural marker errors to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    get_max_line_length,
    normalize_filepath,
)
from .regions import ScanFileError, scan_file
from .render import render_errors, render_fold_levels, render_json, render_outline

__all__ = ["cli"]


@click.command()
@click.version_option(package_name="code-regions")
@click.option(
    "--start-keyword",
    "start_keywords",
    multiple=True,
    help="Keyword that opens a region (repeatable)",
)
@click.option(
    "--end-keyword",
    "end_keywords",
    multiple=True,
    help="Keyword that closes a region (repeatable)",
)
@click.option(
    "--case-sensitive/--ignore-case", default=None, help="Match keywords case-sensitively"
)
@click.option("--fold-sentinel", help="Character marking a region as folded by default")
@click.option(
    "--fold-by-default/--no-fold-by-default", default=None, help="Start every region folded"
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["outline", "folds", "json"]),
    default="outline",
    show_default=True,
    help="Output format",
)
@click.option(
    "--fail-on-errors/--no-fail-on-errors",
    default=True,
    show_default=True,
    help="Exit with status 1 when marker errors are found",
)
@click.option("--verbose", is_flag=True, help="Log debug information to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    start_keywords: tuple[str, ...] = (),
    end_keywords: tuple[str, ...] = (),
    case_sensitive: bool | None = None,
    fold_sentinel: str | None = None,
    fold_by_default: bool | None = None,
    output_format: str = "outline",
    fail_on_errors: bool = True,
    verbose: bool = False,
):
    """
    Entry point for reporting the code regions of a source file.

    Args:
        filepath: Path to the source file to scan.
        start_keywords: Overrides for the region start keywords.
        end_keywords: Overrides for the region end keywords.
        case_sensitive: Override for case-sensitive keyword matching.
        fold_sentinel: Override for the fold sentinel character.
        fold_by_default: Override for folding every region by default.
        output_format: One of ``outline``, ``folds``, or ``json``.
        fail_on_errors: Whether marker errors cause a non-zero exit status.
        verbose: Whether to enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path is rejected or the configuration is
            invalid.
        click.ClickException: If limits are exceeded or the file cannot be read.

    Examples:
        code-regions src/init.lua --format folds
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        config = build_config(
            Path(filepath).expanduser().absolute().parent,
            start_keywords=tuple(start_keywords),
            end_keywords=tuple(end_keywords),
            case_sensitive=case_sensitive,
            fold_sentinel=fold_sentinel,
            fold_by_default=fold_by_default,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        path = normalize_filepath(filepath, base_dir, config.disabled_extensions)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
        max_line_length = get_max_line_length(default=config.max_line_length)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(path), max_file_size, path)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        lines, snapshot = scan_file(path, config, max_line_length)
    except (ScanFileError, ConfigError) as error:
        raise click.ClickException(str(error)) from error

    if output_format == "json":
        click.echo(render_json(snapshot), nl=False)
    elif output_format == "folds":
        click.echo("".join(render_fold_levels(snapshot, len(lines))), nl=False)
    else:
        click.echo("".join(render_outline(snapshot, config)), nl=False)

    for message in render_errors(snapshot):
        click.echo(f"{path.name}: {message}", err=True, nl=False)

    if snapshot.errors and fail_on_errors:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
