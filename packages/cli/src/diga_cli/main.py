"""DiGA FHIR adapter CLI - Main entry point.

Provides the ``diga-fhir-adapter`` command-line interface, which converts
the FHIR XML export of the DiGA catalog into one JSON document.

Usage:
    diga-fhir-adapter -in ./export
    diga-fhir-adapter -in ./export -out -
    diga-fhir-adapter --input-dir ./export --output-file catalog.json

Exit status is 0 on success and whenever usage help is shown (including
bad or missing arguments), 1 when an input document is missing or cannot
be parsed.
"""

from contextlib import ExitStack
from pathlib import Path
from typing import Optional

import click
import typer
from typer.core import TyperCommand

from diga_common import (
    FhirParseError,
    InputFileNotFoundError,
    configure_logging,
    get_logger,
    get_settings,
)
from diga_contracts import DigaVerzeichnis

from diga_cli._shared import RunConfig
from diga_cli.inputs import open_inputs
from diga_cli.output import serialize_verzeichnis, write_output

logger = get_logger(__name__)


class UsageHelpCommand(TyperCommand):
    """Command that answers any usage error with the help text and exit status 0."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        configure_logging()
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            logger.error("argument_parsing_failed", reason=e.format_message())
            click.echo(ctx.get_help(), color=ctx.color)
            ctx.exit(0)


# ---------------------------------------------------------------------------
# Root Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="diga-fhir-adapter",
    help="Convert the DiGA catalog FHIR XML export into one JSON document.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _require_value(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise typer.BadParameter("must not be empty")
    return value


def read_catalog(input_dir: Path) -> DigaVerzeichnis:
    """Open the four input documents and merge them into one catalog.

    Raises:
        InputFileNotFoundError: If an input document is missing
        FhirParseError: If an input document cannot be parsed
    """
    with ExitStack() as stack:
        inputs = open_inputs(input_dir, stack)
        logger.info("catalog_parse_started", input_dir=str(input_dir))
        return inputs.parse()


def run(config: RunConfig) -> int:
    """Execute one conversion.

    Serialization errors are not caught and abort the run.

    Returns:
        Process exit status
    """
    try:
        verzeichnis = read_catalog(config.input_dir)
    except InputFileNotFoundError as e:
        logger.error("input_file_missing", path=str(e.path), error=str(e))
        return 1
    except FhirParseError as e:
        logger.error("catalog_parse_failed", error=str(e))
        return 1

    settings = get_settings()
    json_text = serialize_verzeichnis(verzeichnis)
    write_output(
        json_text,
        config.output_target,
        default_file=settings.default_output_file,
        encoding=settings.output_encoding,
    )
    return 0


@app.command(cls=UsageHelpCommand)
def convert(
    input_dir: str = typer.Option(
        ...,
        "-in",
        "--input-dir",
        help="directory with FHIR XML-input files",
        callback=_require_value,
    ),
    output_file: Optional[str] = typer.Option(
        None,
        "-out",
        "--output-file",
        help="output file for combined json data, - for stdout, default 'DigaVerzeichnis.json'",
    ),
):
    """Combine CatalogEntries.xml, DeviceDefinitions.xml,
    ChargeItemDefinitions.xml and Organizations.xml into one JSON catalog.

    Examples:

        diga-fhir-adapter -in ./export

        diga-fhir-adapter -in ./export -out -
    """
    configure_logging()
    if output_file is None:
        output_file = get_settings().default_output_file
    config = RunConfig(input_dir=Path(input_dir), output_target=output_file)
    exit_code = run(config)
    if exit_code:
        raise typer.Exit(exit_code)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
