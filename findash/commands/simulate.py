"""Simulate command for the investment growth projection."""

import sys
from decimal import Decimal

from rich.console import Console
from rich.table import Table

from findash.config import load_settings
from findash.domain.models import Money
from findash.domain.report import format_money
from findash.domain.simulator import (
    CONTRIBUTION_END,
    CONTRIBUTION_START,
    SimulationParams,
    SimulationResult,
    round_money,
    simulate,
)
from findash.domain.validation import parse_money
from findash.logging_setup import get_logger

console = Console()
logger = get_logger(__name__)


def _decimal_option(value: str | None, default: Decimal) -> Decimal:
    if value is None:
        return default
    return parse_money(value)


def render_simulation(result: SimulationResult, currency: str) -> None:
    """Render the sampled trajectory and summary figures."""
    params = result.params

    table = Table(title="Investment projection")
    table.add_column("Period", style="cyan")
    table.add_column(f"Conservative ({result.conservative_rate_percent}%)", justify="right")
    table.add_column(f"Optimized ({params.annual_rate_percent}%)", justify="right", style="green")

    for point in result.points:
        table.add_row(
            point.label,
            format_money(round_money(point.conservative), currency),
            format_money(round_money(point.optimized), currency),
        )

    console.print(table)

    console.print(f"\n  Total contributed:      {format_money(result.total_contributed, currency)}")
    console.print(f"  Final (conservative):   {format_money(round_money(result.conservative_final), currency)}")
    console.print(f"  Final (optimized):      [green]{format_money(round_money(result.optimized_final), currency)}[/]")
    console.print(f"  Difference:             [bold]{format_money(round_money(result.difference), currency)}[/]")
    console.print(f"  Yield (optimized):      {format_money(round_money(result.optimized_yield), currency)}")
    console.print(f"  ROI:                    [cyan]{result.roi_percent:.1f}%[/cyan]\n")


def simulate_command(
    initial: str | None = None,
    monthly: str | None = None,
    rate: str | None = None,
    months: int | None = None,
    contribute_at_start: bool = False,
) -> None:
    """Project an investment under the conservative and chosen rates."""
    settings = load_settings()
    defaults = settings.simulator

    try:
        params = SimulationParams(
            initial_amount=Money(_decimal_option(initial, defaults.initial_amount)),
            monthly_contribution=Money(_decimal_option(monthly, defaults.monthly_contribution)),
            annual_rate_percent=_decimal_option(rate, defaults.annual_rate_percent),
            horizon_months=months if months is not None else defaults.horizon_months,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if params.initial_amount < 0 or params.monthly_contribution < 0 or params.horizon_months < 0:
        console.print("[red]Amounts and period must not be negative[/red]", style="bold")
        sys.exit(1)

    logger.debug("Simulating %s", params)

    result = simulate(
        params,
        conservative_rate_percent=defaults.conservative_rate_percent,
        step=defaults.sample_step_months,
        timing=CONTRIBUTION_START if contribute_at_start else CONTRIBUTION_END,
    )
    render_simulation(result, settings.currency)
