"""
CLI interface for the Log Pricing Calculator.

Collects log and user counts, validates them and renders the cost breakdown.
"""

import logging
import sys
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from log_pricing.config.loader import load_pricing_config
from log_pricing.config.settings import get_settings
from log_pricing.core.calculator import (
    CostBreakdown,
    TierUsage,
    calculate_costs,
    tier_breakdown,
)
from log_pricing.core.tiers import DEFAULT_PRICING_TABLE, PricingTable, PricingTier
from log_pricing.core.validation import (
    INVALID_QUANTITY_MESSAGE,
    is_valid_input,
    parse_input,
)

app = typer.Typer()
console = Console()

logger = logging.getLogger(__name__)

EXIT_CODE_PASS = 0
EXIT_CODE_FAIL = 1

CONFIG_OPTION_HELP = "YAML pricing table to use instead of the built-in one"


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_table(config_path: Optional[str]) -> PricingTable:
    """Pick the pricing table: --config, then LOG_PRICING_CONFIG, then built-in."""
    path = config_path or get_settings().PRICING_CONFIG
    if path is None:
        return DEFAULT_PRICING_TABLE
    return load_pricing_config(path)


def format_currency(amount: float) -> str:
    """Format a cost to two decimals with thousands separators."""
    return f"${amount:,.2f}"


def _format_upper(tier: PricingTier) -> str:
    return "∞" if tier.is_unbounded else f"{int(tier.upper):,}"


def _display_costs(costs: CostBreakdown) -> None:
    console.print(f"Log Cost: {format_currency(costs.log_cost)}")
    console.print(f"User Cost: {format_currency(costs.user_cost)}")
    console.print(f"[bold]Total Monthly Cost: {format_currency(costs.total_cost)}[/bold]")


def _display_tier_breakdown(usages: List[TierUsage]) -> None:
    table = Table(title="Log Cost by Tier")
    table.add_column("Tier")
    table.add_column("Logs", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Cost", justify="right")

    for usage in usages:
        tier = usage.tier
        table.add_row(
            f"{tier.lower:,} - {_format_upper(tier)}",
            f"{usage.units:,}",
            f"{tier.rate:g}",
            format_currency(usage.cost),
        )

    console.print(table)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context):
    """Log Pricing Calculator CLI."""
    _configure_logging(get_settings().LOG_LEVEL)
    if ctx.invoked_subcommand is None:
        console.print("Log Pricing Calculator - Use --help to see available commands")


@app.command()
def calculate(
    logs: str = typer.Option(
        "",
        "--logs",
        "-l",
        help="Number of logs (e.g. 1000000)"
    ),
    users: str = typer.Option(
        "",
        "--users",
        "-u",
        help="Number of users (e.g. 5)"
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help=CONFIG_OPTION_HELP
    ),
    breakdown: bool = typer.Option(
        False,
        "--breakdown",
        "-b",
        help="Show how the logs are spread across pricing tiers"
    )
):
    """Calculate the monthly cost for a log volume and user count."""
    invalid_fields = [
        name for name, value in (("logs", logs), ("users", users))
        if not is_valid_input(value)
    ]
    if invalid_fields:
        for name in invalid_fields:
            console.print(f"[red]{name}:[/] {INVALID_QUANTITY_MESSAGE}")
        sys.exit(EXIT_CODE_FAIL)

    try:
        table = _resolve_table(config)
        log_count = parse_input(logs, field="logs")
        user_count = parse_input(users, field="users")
        costs = calculate_costs(log_count, user_count, table)
        usages = tier_breakdown(log_count, table) if breakdown else []
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    if breakdown:
        _display_tier_breakdown(usages)
    _display_costs(costs)
    sys.exit(EXIT_CODE_PASS)


def _prompt_quantity(label: str, field: str) -> int:
    """Prompt until the answer is a valid non-negative integer or empty."""
    while True:
        text = typer.prompt(label, default="", show_default=False)
        if is_valid_input(text):
            return parse_input(text, field=field)
        console.print(f"[red]{INVALID_QUANTITY_MESSAGE}[/]")


@app.command()
def interactive(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help=CONFIG_OPTION_HELP
    )
):
    """Prompt for log and user counts, then show the cost.

    Press Enter on an empty prompt to use 0.
    """
    try:
        table = _resolve_table(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    log_count = _prompt_quantity("Number of logs", "logs")
    user_count = _prompt_quantity("Number of users", "users")
    logger.debug("interactive request: logs=%d users=%d", log_count, user_count)

    _display_costs(calculate_costs(log_count, user_count, table))
    sys.exit(EXIT_CODE_PASS)


@app.command()
def tiers(
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help=CONFIG_OPTION_HELP
    )
):
    """Show the pricing tiers and per-user price."""
    try:
        table = _resolve_table(config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Error:[/] {str(e)}")
        sys.exit(EXIT_CODE_FAIL)

    rich_table = Table(title="Log Pricing Tiers")
    rich_table.add_column("From", justify="right")
    rich_table.add_column("To", justify="right")
    rich_table.add_column("Rate per log", justify="right")
    for tier in table.tiers:
        rich_table.add_row(f"{tier.lower:,}", _format_upper(tier), f"{tier.rate:g}")

    console.print(rich_table)
    console.print(f"Price per user: {format_currency(table.user_price)}")
    sys.exit(EXIT_CODE_PASS)


if __name__ == "__main__":
    app()
