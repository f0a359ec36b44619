"""adsmodel CLI - Main entry point."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from adsmodel import __version__

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    """Configure console logging for the CLI."""
    log_format = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(handler)


@click.group()
@click.version_option(version=__version__, prog_name="adsmodel")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """adsmodel - Ads resource schemas

    Validate, encode and decode Campaign resources, AutoML I/O
    configuration and build provenance records.
    """
    _setup_logging(verbose)


from .campaign_commands import campaign  # noqa: E402
from .schema_commands import automl, provenance  # noqa: E402

cli.add_command(campaign)
cli.add_command(automl)
cli.add_command(provenance)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def wire(path):
    """Dump the raw fields of a binary message without a schema."""
    from adsmodel.wire.codec import DecodeError, WireType, iter_fields

    data = Path(path).read_bytes()

    table = Table(title=f"{path} ({len(data)} bytes)")
    table.add_column("Tag", style="cyan", justify="right")
    table.add_column("Wire type")
    table.add_column("Value")

    try:
        for tag, wire_type, value in iter_fields(data):
            if wire_type == WireType.VARINT:
                shown = str(value)
            elif wire_type == WireType.START_GROUP:
                shown = f"(group of {len(value)} field(s))"
            elif isinstance(value, int):
                shown = f"0x{value:x}"
            else:
                shown = value[:32].hex() + ("..." if len(value) > 32 else "")
            table.add_row(str(tag), wire_type.name, shown)
    except DecodeError as e:
        console.print(table)
        console.print(f"[red]Malformed input:[/red] {e}")
        raise SystemExit(1)

    console.print(table)


if __name__ == "__main__":
    cli()
