"""Render command - validate a request file and print the update payload."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from ...application.models import UpdateRequest
from ...application.update_object import UpdateObject
from ...config import ConfigLoader, UpdateConfig
from ...constants import OutputFormats
from ...exceptions import UpdateConnectorError
from ...infrastructure.schema_registry import load_schema_dir
from ..logging_config import create_logger

console = Console(stderr=True)


@click.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to an afas_update.toml config file (default: ./afas_update.toml)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OutputFormats.ALL),
    default=None,
    help="Payload format (default: from configuration, else json)",
)
@click.option("--pretty/--compact", default=None, help="Pretty-print the payload")
@click.option("--indent", type=click.IntRange(min=1), default=None, help="Spaces per indent level")
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def render_command(
    request_file: Path,
    config_file: Path | None,
    output_format: str | None,
    pretty: bool | None,
    indent: int | None,
    verbose: int,
) -> None:
    """Validate REQUEST_FILE and print its update connector payload.

    The request file is JSON holding the object type, the action and the
    element data, keyed by field names or aliases:

    \b
        {"type": "KnSubject", "action": "insert",
         "elements": {"type": 1, "description": "x"}}
    """
    logger = create_logger(console, verbose)
    runtime_config = ConfigLoader.load(config_file=config_file)
    if (
        runtime_config.schema_dir is not None
        and runtime_config.schema_dir != UpdateConfig.from_env().schema_dir
    ):
        try:
            load_schema_dir(runtime_config.schema_dir)
        except UpdateConnectorError as e:
            raise click.ClickException(str(e)) from e

    try:
        request = UpdateRequest.model_validate_json(request_file.read_text(encoding="utf-8"))
    except ValidationError as e:
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "request"
            logger.error(f"{location}: {error['msg']}")
        raise click.ClickException(f"Invalid request file {request_file}") from e

    fmt = output_format or runtime_config.output_format
    logger.set_context(object_type=request.type, operation="render")
    try:
        update_object = UpdateObject.create(
            request.type, request.elements, request.action, logger=logger
        )
        payload = update_object.output(
            fmt,
            pretty=runtime_config.pretty if pretty is None else pretty,
            indent=indent or runtime_config.indent,
            change=runtime_config.change_behavior,
            validation=runtime_config.validation_behavior,
        )
    except UpdateConnectorError as e:
        for message in str(e).splitlines():
            logger.error(message)
        raise click.ClickException(f"Could not render '{request.type}' payload") from e
    finally:
        logger.clear_context()

    logger.log_object_rendered(request.type, len(update_object), fmt)
    click.echo(payload)
    logger.log_final_stats()
