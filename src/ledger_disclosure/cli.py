"""
Command-line interface for ledger aggregation and disclosure control.
"""

from pathlib import Path
from typing import Optional
import json
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_config, generate_default_config
from .disclosure.engine import DisclosurePolicyEngine
from .disclosure.rules import FIELD_CATALOG, TRUST_ORDER, DisclosurePolicy
from .ledger.aggregator import LedgerAggregator, aggregate
from .ledger.convention import SignConvention
from .models.views import AuthorizationTier
from .parsers.transaction_csv import TransactionCsvParser
from .parsers.view_bundle import load_view_bundle
from .utils.exceptions import LedgerDisclosureError
from .utils.logging_config import setup_logging

console = Console()


@click.group()
@click.version_option(version=__version__)
def main():
    """Ledger aggregation and authorization-tiered disclosure tool."""
    pass


@main.command("aggregate")
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("--account", "account_id", default=None, help="Restrict to one account")
@click.option(
    "--category", "category_code", default=None, help="Restrict to one category (needs --account)"
)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def aggregate_command(
    transactions_file: Path,
    account_id: Optional[str],
    category_code: Optional[str],
    config: Optional[Path],
    verbose: bool,
):
    """
    Compute the signed balance of a transaction CSV.

    TRANSACTIONS_FILE: Path to the transaction CSV export
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    if category_code is not None and account_id is None:
        raise click.UsageError("--category requires --account")

    try:
        ledger_config = load_config(config)
        convention = SignConvention.from_config(ledger_config.sign_convention)
        records = TransactionCsvParser(ledger_config).parse_file(transactions_file)

        aggregator = LedgerAggregator(convention)
        if category_code is not None:
            result = aggregator.category_balance(records, account_id, category_code)
            scope = f"account {account_id}, category {category_code}"
        elif account_id is not None:
            result = aggregator.account_balance(records, account_id)
            scope = f"account {account_id}"
        else:
            result = aggregate(records, convention)
            scope = "all records"

        table = Table(title=f"Signed Balance: {transactions_file.name}")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Scope", scope)
        table.add_row("Records", str(result.count))
        table.add_row("Total", f"{result.rounded():,.2f}")
        console.print(table)

    except LedgerDisclosureError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command()
@click.argument("bundle_file", type=click.Path(exists=True, path_type=Path))
@click.option("-t", "--tier", required=True, help="Requester authorization tier")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the outcome as JSON only")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def disclose(
    bundle_file: Path,
    tier: str,
    config: Optional[Path],
    as_json: bool,
    verbose: bool,
):
    """
    Redact a JSON view bundle for an authorization tier.

    BUNDLE_FILE: Path to the view bundle JSON document
    """
    setup_logging(logging.DEBUG if verbose else logging.ERROR)

    try:
        ledger_config = load_config(config)
        engine = DisclosurePolicyEngine(DisclosurePolicy.from_config(ledger_config.disclosure))
        outcome = engine.apply(load_view_bundle(bundle_file), tier)
    except LedgerDisclosureError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
        return

    for warning in outcome.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    console.print_json(json.dumps(outcome.bundle.to_dict()))

    table = Table(title=f"Redacted Fields ({outcome.tier.value})")
    table.add_column("Field Path")
    table.add_column("Sensitivity")
    for path in outcome.redacted_fields:
        table.add_row(path, FIELD_CATALOG[path].sensitivity.value)
    console.print(table)
    console.print(f"Masked: {'yes' if outcome.was_masked else 'no'}")


@main.command("show-rules")
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def show_rules(config: Optional[Path]):
    """Display which fields each tier redacts."""
    try:
        ledger_config = load_config(config)
        policy = DisclosurePolicy.from_config(ledger_config.disclosure)
    except LedgerDisclosureError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    tiers = TRUST_ORDER + (AuthorizationTier.UNKNOWN,)
    redacted = {tier: set(policy.paths_for(tier)) for tier in tiers}

    table = Table(title="Disclosure Rules")
    table.add_column("Field Path")
    for tier in tiers:
        table.add_column(tier.value, justify="center")

    for path in sorted(FIELD_CATALOG):
        if not FIELD_CATALOG[path].sensitivity.redactable:
            continue
        table.add_row(path, *("x" if path in redacted[tier] else "" for tier in tiers))

    console.print(table)


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


if __name__ == "__main__":
    main()
