"""Campaign CLI commands."""

import json
import logging
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _load_campaign(path):
    from adsmodel.config.loader import ConfigError, load_campaign

    try:
        return load_campaign(Path(path))
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


def _load_settings(path):
    from adsmodel.config.loader import ConfigError, load_settings

    try:
        return load_settings(Path(path) if path else None)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)


def report_violations(result, success):
    """Print violations as a table; exit 1 when any of them is an error."""
    if not result.violations:
        console.print(f"[green]{success}[/green]")
        return

    table = Table(title="Violations")
    table.add_column("Severity")
    table.add_column("Field", style="cyan")
    table.add_column("Reason")
    table.add_column("Code", style="dim")
    for v in result.violations:
        style = "red" if v.severity == "error" else "yellow"
        table.add_row(f"[{style}]{v.severity}[/{style}]", v.field_path, v.reason, v.code)
    console.print(table)

    if not result.is_valid:
        console.print(f"[red]{len(result.errors)} error(s)[/red]")
        raise SystemExit(1)


def _parse_assignments(assignments):
    params = {}
    for item in assignments:
        if "=" not in item:
            console.print(f"[red]Expected key=value, got: {item}[/red]")
            raise SystemExit(1)
        key, value = item.split("=", 1)
        params[key.strip()] = yaml.safe_load(value)
    return params


@click.group()
def campaign():
    """Validate, encode and decode campaigns."""


@campaign.command()
@click.argument("campaign_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--create", "for_create", is_flag=True, help="Apply creation-time rules")
@click.option("--config", "config_path", type=click.Path(exists=True), default=None,
              help="adsmodel settings YAML")
def validate(campaign_path, for_create, config_path):
    """Check a campaign document against every invariant."""
    from adsmodel.campaign.validator import validate as validate_campaign

    settings = _load_settings(config_path)
    camp = _load_campaign(campaign_path)
    result = validate_campaign(camp, settings.validator, for_create=for_create)

    report_violations(result, f"Campaign {camp.name!r} is valid")


@campaign.command()
@click.argument("campaign_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, help="Write binary output to this path")
@click.option("--hex", "as_hex", is_flag=True, help="Print the encoding as hex")
def encode(campaign_path, output, as_hex):
    """Encode a campaign document to the binary wire format."""
    camp = _load_campaign(campaign_path)
    data = camp.encode()

    if output:
        Path(output).write_bytes(data)
        console.print(f"Wrote {len(data)} bytes to {output}")
    if as_hex or not output:
        click.echo(data.hex())


@campaign.command()
@click.argument("binary_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["yaml", "json"]), default="yaml")
@click.option("--config", "config_path", type=click.Path(exists=True), default=None,
              help="adsmodel settings YAML")
def decode(binary_path, fmt, config_path):
    """Decode a binary campaign and print its text form."""
    from adsmodel.campaign.models import Campaign
    from adsmodel.config.loader import dump_yaml
    from adsmodel.wire.codec import DecodeError

    settings = _load_settings(config_path)
    data = Path(binary_path).read_bytes()
    try:
        camp = Campaign.decode(
            data,
            preserve_unknown=settings.codec.preserve_unknown_fields,
            max_depth=settings.codec.max_depth,
        )
    except DecodeError as e:
        console.print(f"[red]Malformed campaign:[/red] {e}")
        raise SystemExit(1)

    text = camp.to_dict()
    if fmt == "json":
        click.echo(json.dumps(text, indent=2))
    else:
        click.echo(dump_yaml(text), nl=False)

    if camp.unknown_fields:
        size = len(camp.unknown_fields)
        logger.info(f"Kept {size} bytes of unknown fields")
        err_console.print(f"[yellow]{size} bytes of unknown fields kept[/yellow]")


@campaign.command()
@click.argument("campaign_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("strategy")
@click.option("--set", "assignments", multiple=True, help="Strategy field as key=value")
@click.option("--resource", default=None, help="Portfolio strategy resource name")
@click.option("--output", "-o", default=None, help="Write the updated campaign YAML here")
def bidding(campaign_path, strategy, assignments, resource, output):
    """Switch a campaign to STRATEGY (e.g. manual_cpc, target_roas, portfolio)."""
    from pydantic import ValidationError

    from adsmodel.campaign.bidding import (
        BiddingStrategyKind,
        apply_bidding_strategy,
        make_strategy,
    )
    from adsmodel.config.loader import dump_yaml

    camp = _load_campaign(campaign_path)

    key = strategy.lower()
    if key == "portfolio":
        kind = BiddingStrategyKind.PORTFOLIO
    else:
        try:
            kind = BiddingStrategyKind(key)
        except ValueError:
            names = ", ".join(k.value for k in BiddingStrategyKind if k.value != "bidding_strategy")
            console.print(f"[red]Unknown strategy '{strategy}'. Options: portfolio, {names}[/red]")
            raise SystemExit(1)

    if kind is BiddingStrategyKind.PORTFOLIO:
        if not resource:
            console.print("[red]--resource is required for a portfolio strategy[/red]")
            raise SystemExit(1)
        variant = resource
    else:
        try:
            variant = make_strategy(kind, **_parse_assignments(assignments))
        except ValidationError as e:
            console.print(f"[red]Invalid {kind.value} settings:[/red] {e}")
            raise SystemExit(1)

    apply_bidding_strategy(camp, variant)
    text = dump_yaml(camp.to_dict())
    if output:
        Path(output).write_text(text)
        console.print(f"Bidding strategy set to {kind.value}; wrote {output}")
    else:
        click.echo(text, nl=False)


@campaign.command()
@click.argument("campaign_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, help="Write the prepared campaign YAML here")
@click.option("--config", "config_path", type=click.Path(exists=True), default=None,
              help="adsmodel settings YAML")
def create(campaign_path, output, config_path):
    """Prepare a campaign for creation and check the creation rules."""
    from adsmodel.campaign.lifecycle import prepare_for_create
    from adsmodel.campaign.validator import validate as validate_campaign
    from adsmodel.config.loader import dump_yaml

    settings = _load_settings(config_path)
    prepared = prepare_for_create(_load_campaign(campaign_path))
    result = validate_campaign(prepared, settings.validator, for_create=True)
    if result.violations:
        report_violations(result, "")

    text = dump_yaml(prepared.to_dict())
    if output:
        Path(output).write_text(text)
        console.print(f"Campaign {prepared.name!r} ready to create; wrote {output}")
    else:
        click.echo(text, nl=False)


@campaign.command()
@click.argument("current_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("proposed_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True), default=None,
              help="adsmodel settings YAML")
def update(current_path, proposed_path, config_path):
    """Check that PROPOSED is an allowed update of the CURRENT campaign."""
    from adsmodel.campaign.lifecycle import check_update
    from adsmodel.campaign.validator import validate as validate_campaign

    settings = _load_settings(config_path)
    current = _load_campaign(current_path)
    proposed = _load_campaign(proposed_path)

    result = check_update(current, proposed)
    result.extend(validate_campaign(proposed, settings.validator))
    report_violations(result, f"Update of campaign {current.name!r} is allowed")


@campaign.command()
@click.argument("fields", nargs=-1, required=True)
@click.option("--where", default="", help="Filter, e.g. \"status = 'ENABLED'\"")
def query(fields, where):
    """Build a query selecting FIELDS from campaigns."""
    from adsmodel.campaign.query_builder import CampaignQueryBuilder, QueryError

    try:
        text = CampaignQueryBuilder().build(fields, where)
    except QueryError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1)
    click.echo(text)
