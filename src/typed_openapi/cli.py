"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from typed_openapi.configuration import DEFAULT_CONFIG_FILENAME, write_placeholder_configuration
from typed_openapi.generation_run import (
    GenerationRequest,
    GenerationRunError,
    execute_generation_run,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="typed-openapi")
def cli() -> None:
    """OpenAPI 3.0 document generator for typed API declarations."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generator configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="render")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON generator configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Override the document path from the configuration",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Assemble and validate the document without writing it.",
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log registry and assembly details to stderr.",
)
def render(config_path: str, output_path: str | None, dry_run: bool, verbose: bool) -> None:
    """Assemble the configured API declaration into an OpenAPI document."""
    if verbose:
        _configure_verbose_logging()
    try:
        outcome = execute_generation_run(
            GenerationRequest(
                config_path=config_path,
                output_path=output_path,
                dry_run=dry_run,
            )
        )
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    if outcome.dry_run:
        click.echo(
            f"dry run: {outcome.path_count} paths and {outcome.schema_count} schemas "
            f"validated, nothing written to {outcome.output_path}"
        )
        return
    click.echo(str(outcome.output_path))


def _configure_verbose_logging() -> None:
    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("typed_openapi").setLevel(logging.DEBUG)


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
