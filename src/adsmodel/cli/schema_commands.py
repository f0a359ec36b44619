"""AutoML I/O and build provenance CLI commands."""

import logging
from pathlib import Path

import click
from rich.console import Console

from .campaign_commands import report_violations

console = Console()
logger = logging.getLogger(__name__)


def _load_message(path, message_class, binary):
    from adsmodel.config.loader import ConfigError, load_message
    from adsmodel.wire.codec import DecodeError

    try:
        if binary:
            return message_class.decode(Path(path).read_bytes())
        return load_message(Path(path), message_class)
    except (ConfigError, DecodeError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


@click.group()
def automl():
    """AutoML input and output configuration."""


@automl.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--kind", type=click.Choice(["input", "output"]), default="input",
              help="Which configuration the document holds")
@click.option("--binary", is_flag=True, help="Read the binary wire format")
def validate_automl(path, kind, binary):
    """Check an AutoML input or output configuration."""
    from adsmodel.automl.io import (
        InputConfig,
        OutputConfig,
        validate_input_config,
        validate_output_config,
    )

    if kind == "input":
        result = validate_input_config(_load_message(path, InputConfig, binary))
    else:
        result = validate_output_config(_load_message(path, OutputConfig, binary))
    report_violations(result, f"{kind.capitalize()} configuration is valid")


@click.group()
def provenance():
    """Container build provenance records."""


@provenance.command("validate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--binary", is_flag=True, help="Read the binary wire format")
def validate_provenance_record(path, binary):
    """Check a build provenance record."""
    from adsmodel.provenance.models import BuildProvenance, validate_provenance

    record = _load_message(path, BuildProvenance, binary)
    result = validate_provenance(record)
    report_violations(result, f"Build {record.id or '(no id)'} provenance is valid")
