from __future__ import annotations

import sys
from typing import Optional, Sequence, Tuple

import click

from tfguardian.constants import (
    DEFAULT_FORMAT,
    ENV_DEST_REF,
    ENV_DIR,
    ENV_FORMAT,
    ENV_MAX_DEPTH,
    ENV_MODIFIER_CONTENT,
    ENV_REPORTER,
    ENV_SOURCE_REF,
    EXIT_INVALID_INPUT,
    EXIT_SUCCESS,
    REPORTER_NONE,
    TOOL_NAME,
    TOOL_VERSION,
    UNLIMITED_DEPTH,
)
from tfguardian.entrypoints import EntrypointsOptions, run_entrypoints
from tfguardian.env_flags import (
    fail_unresolvable_modules_default,
    is_lenient_parse,
    log_level_default,
)
from tfguardian.errors import GuardianError
from tfguardian.logging_setup import LoggingConfig, configure_logging
from tfguardian.reporter import new_reporter


def _echo_error(message: str) -> None:
    click.echo(f"Error: {message}", err=True)


@click.group()
@click.version_option(TOOL_VERSION, prog_name=TOOL_NAME)
@click.option(
    "--log-level",
    default=None,
    help="Log level for diagnostics written to stderr (DEBUG, INFO, WARNING, ERROR). Defaults to $GUARDIAN_LOG_LEVEL or WARNING.",
)
def cli(log_level: Optional[str]) -> None:
    """Guardian helpers for Terraform plan/apply workflows."""

    try:
        configure_logging(LoggingConfig(level=log_level or log_level_default()), force=True)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--log-level") from exc


@cli.command()
@click.option(
    "--dir",
    "directories",
    multiple=True,
    envvar=ENV_DIR,
    help="Directory to search for entrypoints (repeatable, default: current directory).",
)
@click.option(
    "--max-depth",
    type=int,
    default=UNLIMITED_DEPTH,
    show_default=True,
    envvar=ENV_MAX_DEPTH,
    help="How far to traverse beneath each directory for entrypoints (-1 for no limit).",
)
@click.option(
    "--detect-changes",
    is_flag=True,
    help="Only emit entrypoints affected by changes between --source-ref and --dest-ref.",
)
@click.option("--source-ref", default="", envvar=ENV_SOURCE_REF, help="The source git ref for finding file changes.")
@click.option("--dest-ref", default="", envvar=ENV_DEST_REF, help="The destination git ref for finding file changes.")
@click.option(
    "--fail-unresolvable-modules",
    is_flag=True,
    help="Fail when a module source cannot be resolved to a local directory (also $GUARDIAN_FAIL_UNRESOLVABLE_MODULES).",
)
@click.option(
    "--lenient-parse",
    is_flag=True,
    help="Skip Terraform files that fail to parse instead of failing (also $GUARDIAN_LENIENT_PARSE).",
)
@click.option(
    "--format",
    "output_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    envvar=ENV_FORMAT,
    help="Output format for the directories (json, text).",
)
@click.option(
    "--modifier-content",
    default="",
    envvar=ENV_MODIFIER_CONTENT,
    help="Change-request text to scan for GUARDIAN_DESTROY=<dir> modifier lines.",
)
@click.option(
    "--reporter",
    default=REPORTER_NONE,
    show_default=True,
    envvar=ENV_REPORTER,
    help="Where to send the entrypoints summary (local, none).",
)
def entrypoints(
    directories: Tuple[str, ...],
    max_depth: int,
    detect_changes: bool,
    source_ref: str,
    dest_ref: str,
    fail_unresolvable_modules: bool,
    lenient_parse: bool,
    output_format: str,
    modifier_content: str,
    reporter: str,
) -> None:
    """Determine the entrypoint directories to run Guardian commands."""

    if max_depth < UNLIMITED_DEPTH:
        raise click.BadParameter("must be -1 (no limit) or a non-negative integer", param_hint="--max-depth")

    options = EntrypointsOptions(
        directories=list(directories),
        max_depth=None if max_depth == UNLIMITED_DEPTH else max_depth,
        detect_changes=detect_changes,
        source_ref=source_ref,
        dest_ref=dest_ref,
        fail_unresolvable_modules=fail_unresolvable_modules or fail_unresolvable_modules_default(),
        lenient_parse=lenient_parse or is_lenient_parse(),
        output_format=output_format,
        modifier_content=modifier_content,
    )

    try:
        run_entrypoints(
            options,
            write=_write_output,
            reporter=new_reporter(reporter),
        )
    except GuardianError as exc:
        _echo_error(str(exc))
        raise click.exceptions.Exit(exc.exit_code)


def _write_output(text: str) -> None:
    if text:
        click.echo(text)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])
    try:
        result = cli.main(args=args, prog_name=TOOL_NAME, standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.exceptions.Abort:
        _echo_error("aborted")
        return EXIT_INVALID_INPUT
    # Without standalone mode click returns the exit code of a raised Exit.
    if isinstance(result, int):
        return result
    return EXIT_SUCCESS
