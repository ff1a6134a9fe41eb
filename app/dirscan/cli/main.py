"""Main CLI application entry point.

Defines the Typer application and the scan command.
"""

import sys
from typing import Annotated

import click
import typer

from dirscan import __version__
from dirscan.cli.display import print_report
from dirscan.core.config import ScanOptions, build_scan_config
from dirscan.core.logging import setup_logging
from dirscan.core.settings import load_settings
from dirscan.scanning.engine import DirectoryScanner
from dirscan.scanning.errors import ConfigurationError, ConfigurationErrors, RootPathError
from dirscan.utils.formatting import err_console, print_error, print_warning

app = typer.Typer(
    name="dirscan",
    help="Scan a directory tree, filter its files and report on them.",
    rich_markup_mode="rich",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"dirscan version {__version__}")
        raise typer.Exit()


def _split_tokens(tokens: list[str]) -> tuple[str | None, tuple[str, ...]]:
    """Split leftover tokens into the root path and unrecognized extras.

    Unknown options are passed through by the parser as plain tokens, so
    the first token that does not look like an option is the root path.
    """
    path: str | None = None
    extras: list[str] = []
    for token in tokens:
        if path is None and not token.startswith("-"):
            path = token
        else:
            extras.append(token)
    return path, tuple(extras)


def _print_usage(ctx: click.Context) -> None:
    err_console.print(ctx.get_usage(), markup=False, highlight=False)
    err_console.print(
        f"Try '{ctx.command_path} --help' for help.", markup=False, highlight=False
    )


def _report_configuration_error(ctx: click.Context, error: ConfigurationError) -> None:
    problems = error.errors if isinstance(error, ConfigurationErrors) else [error]
    for problem in problems:
        print_error(str(problem))
    _print_usage(ctx)


@app.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        "ignore_unknown_options": True,
        "allow_extra_args": True,
    },
)
def scan(
    ctx: typer.Context,
    tokens: Annotated[
        list[str] | None,
        typer.Argument(
            metavar="PATH",
            help="Directory to scan.",
            show_default=False,
        ),
    ] = None,
    depth: Annotated[
        str | None,
        typer.Option("--depth", help="Maximum recursion depth (default: unlimited)."),
    ] = None,
    ext: Annotated[
        str | None,
        typer.Option("--ext", help="Filter by file extensions (comma-separated)."),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", help="Filter by filename pattern (* and ? wildcards)."),
    ] = None,
    size: Annotated[
        str | None,
        typer.Option("--size", help="Filter by file size: >, <, =, >=, <= with B/KB/MB/GB."),
    ] = None,
    search: Annotated[
        str | None,
        typer.Option("--search", help="Only files whose text contains this (case-insensitive)."),
    ] = None,
    tree: Annotated[
        bool,
        typer.Option("--tree", help="Display directory tree structure."),
    ] = False,
    stats: Annotated[
        bool,
        typer.Option("--stats", help="Show directory statistics."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results in JSON format."),
    ] = False,
    csv_output: Annotated[
        bool,
        typer.Option("--csv", help="Output results in CSV format."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print report bodies."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging on stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Scan a directory recursively, filter its files and report on them.

    Examples:
        dirscan ./src --tree --depth 3
        dirscan ./project --ext .js,.ts --stats
        dirscan ./logs --size ">1MB" --search "error"
        dirscan ./data --name "*.json" --json
    """
    setup_logging(verbose)

    path, extras = _split_tokens([*(tokens or []), *ctx.args])
    options = ScanOptions(
        path=path,
        depth=depth,
        ext=ext,
        name=name,
        size=size,
        search=search,
        tree=tree,
        stats=stats,
        json=json_output,
        csv=csv_output,
        extra_args=extras,
    )

    try:
        config = build_scan_config(options, load_settings())
    except ConfigurationError as e:
        _report_configuration_error(ctx, e)
        raise typer.Exit(code=1) from e
    except RootPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    try:
        result = DirectoryScanner(config).scan()
    except RootPathError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for warning in result.warnings:
        print_warning(str(warning))

    print_report(config, result, quiet=quiet)


def run() -> None:
    """Console-script entry point.

    Maps parser-level usage errors (e.g. an option missing its value) to
    exit status 1 like every other configuration error.
    """
    try:
        code = app(standalone_mode=False)
    except click.UsageError as e:
        print_error(e.format_message())
        if e.ctx is not None:
            _print_usage(e.ctx)
        sys.exit(1)
    except (KeyboardInterrupt, click.Abort):
        err_console.print("\nOperation cancelled.")
        sys.exit(130)
    sys.exit(code if isinstance(code, int) else 0)


if __name__ == "__main__":
    run()
