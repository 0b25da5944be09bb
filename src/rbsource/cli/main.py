# topmark:header:start
#
#   project      : RbSource
#   file         : main.py
#   file_relpath : src/rbsource/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 RbSource contributors
#
# topmark:header:end

"""Click CLI for inspecting how RbSource processes Ruby files.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; the ``check`` subcommand processes each path and reports its
diagnostics.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from rbsource.cli.exit_codes import ExitCode
from rbsource.config.logging import TRACE_LEVEL, get_logger, resolve_env_log_level, setup_logging
from rbsource.config.options import ParserOptions, load_parser_options
from rbsource.constants import RBSOURCE_VERSION
from rbsource.errors import ConfigError
from rbsource.processed_source import ProcessedSource

if TYPE_CHECKING:
    from rbsource.config.logging import RbsourceLogger
    from rbsource.diagnostic.model import Diagnostic

logger: RbsourceLogger = get_logger(__name__)

_VERBOSE_LOG_LEVELS: tuple[int | None, ...] = (
    None,
    logging.INFO,
    logging.DEBUG,
    TRACE_LEVEL,
)


def render_diagnostic(diagnostic: Diagnostic) -> str:
    """Return ``diagnostic`` as a single line colored by its level."""
    level = diagnostic.level
    text = diagnostic.render()
    return level.color(text)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="RbSource CLI",
)
@click.option("-v", "--verbose", count=True, help="Increase verbosity (repeatable).")
@click.option("--no-color", is_flag=True, default=False, help="Disable colored output.")
@click.version_option(RBSOURCE_VERSION, prog_name="rbsource")
@click.pass_context
def cli(ctx: click.Context, verbose: int, no_color: bool) -> None:
    """Entry point for the RbSource CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbosity_level"] = verbose
    ctx.color = not no_color

    level = resolve_env_log_level()
    if level is None and verbose:
        level = _VERBOSE_LOG_LEVELS[min(verbose, len(_VERBOSE_LOG_LEVELS) - 1)]
    setup_logging(level=level)


@cli.command(name="check", help="Parse Ruby files and report their diagnostics.")
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read parser options from this pyproject.toml or rbsource.toml.",
)
@click.option(
    "--all-errors-fatal/--no-all-errors-fatal",
    default=None,
    help="Treat every diagnostic, warnings included, as parse-aborting.",
)
@click.option(
    "--ignore-warnings/--no-ignore-warnings",
    default=None,
    help="Drop warning diagnostics.",
)
@click.pass_context
def check_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    config_path: Path | None,
    all_errors_fatal: bool | None,
    ignore_warnings: bool | None,
) -> None:
    """Process every path and exit non-zero if any has invalid syntax."""
    verbosity: int = ctx.obj.get("verbosity_level", 0)

    try:
        options = load_parser_options(config_path) if config_path else ParserOptions()
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(ExitCode.USAGE_ERROR)
    options = options.with_overrides(
        all_errors_are_fatal=all_errors_fatal,
        ignore_warnings=ignore_warnings,
    )

    exit_code = ExitCode.SUCCESS
    for path in paths:
        logger.debug("Checking %s with %s", path, options)
        processed = ProcessedSource.from_file(path, options=options)

        if processed.parser_error is not None:
            click.echo(f"{path}: cannot decode source: {processed.parser_error}", color=ctx.color)
        for diagnostic in processed.diagnostics:
            click.echo(render_diagnostic(diagnostic), color=ctx.color)

        if not processed.valid_syntax:
            exit_code = ExitCode.FAILURE
        elif verbosity > 0:
            click.echo(f"{path}: OK", color=ctx.color)

    ctx.exit(exit_code)
