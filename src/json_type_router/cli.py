"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

import click

from json_type_router.batch_execution import (
    BatchExecutionError,
    BatchOutcome,
    BatchRequest,
    execute_classification_batch,
    execute_extraction_batch,
    execute_unwrap_batch,
)
from json_type_router.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from json_type_router.results_writing import render_result_lines

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

BatchRunner = Callable[..., BatchOutcome]


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="json-type-router")
@click.option(
    "--log-level",
    "log_level",
    required=False,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Override logging.level from the configuration file",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Schema-driven JSON document classifier and extractor."""
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level.upper() if log_level else None


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON configuration file",
)
_DOCUMENTS_ARGUMENT = click.argument(
    "document_paths", nargs=-1, required=True, type=click.Path(path_type=str)
)


@cli.command(name="classify")
@_CONFIG_OPTION
@_DOCUMENTS_ARGUMENT
@click.pass_context
def classify_documents(
    ctx: click.Context, config_path: str, document_paths: tuple[str, ...]
) -> None:
    """Classify JSON documents against the configured schema catalog."""
    _run(ctx, execute_classification_batch, config_path, document_paths)


@cli.command(name="extract")
@_CONFIG_OPTION
@_DOCUMENTS_ARGUMENT
@click.pass_context
def extract_documents(
    ctx: click.Context, config_path: str, document_paths: tuple[str, ...]
) -> None:
    """Extract every sub-document matching the configured extraction schema."""
    _run(ctx, execute_extraction_batch, config_path, document_paths)


@cli.command(name="unwrap")
@_CONFIG_OPTION
@_DOCUMENTS_ARGUMENT
@click.pass_context
def unwrap_envelopes(
    ctx: click.Context, config_path: str, document_paths: tuple[str, ...]
) -> None:
    """Unwrap captured request/response envelopes into their response content."""
    _run(ctx, execute_unwrap_batch, config_path, document_paths)


def _run(
    ctx: click.Context,
    runner: BatchRunner,
    config_path: str,
    document_paths: tuple[str, ...],
) -> None:
    configuration = _load_configuration(config_path)
    override = (ctx.obj or {}).get("log_level")
    _configure_logging(override or configuration.logging.level)
    try:
        outcome = runner(
            BatchRequest(config_path=config_path, document_paths=document_paths),
            configuration=configuration,
        )
    except BatchExecutionError as exc:
        raise CliError(str(exc)) from exc
    for line in render_result_lines(outcome.outcomes):
        click.echo(line)


def _load_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr, force=True)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
