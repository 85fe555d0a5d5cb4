"""Pure functions for the investment growth simulator.

Growth is compounded month by month with full Decimal precision;
round_money is for display only.

Two scenarios always run side by side: a conservative baseline rate and
the user's chosen rate.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from findash.domain.models import Money, SimulationPoint

CONSERVATIVE_RATE = Decimal("0.5")
SAMPLE_STEP = 6
CENT = Decimal("0.01")

# When each monthly contribution is added relative to that month's interest
CONTRIBUTION_END = "end"
CONTRIBUTION_START = "start"


@dataclass(frozen=True)
class SimulationParams:
    """Flat parameter record adjusted by the user."""

    initial_amount: Money
    monthly_contribution: Money
    annual_rate_percent: Decimal
    horizon_months: int


@dataclass(frozen=True)
class SimulationResult:
    """Immutable simulator output for charting and summary cards."""

    params: SimulationParams
    conservative_rate_percent: Decimal
    points: list[SimulationPoint]
    conservative_final: Money
    optimized_final: Money
    total_contributed: Money
    conservative_yield: Money
    optimized_yield: Money
    difference: Money
    roi_percent: Decimal


def monthly_rate(annual_rate_percent: Decimal) -> Decimal:
    """Convert a nominal annual percentage into a monthly rate."""
    return annual_rate_percent / 100 / 12


def compound(
    initial: Money,
    contribution: Money,
    annual_rate_percent: Decimal,
    months: int,
    timing: str = CONTRIBUTION_END,
) -> Money:
    """Compound an investment month by month.

    With end timing each month applies P = P * (1 + rate) + C; with start
    timing the contribution is added first and earns that month's interest.

    Args:
        initial: Starting principal.
        contribution: Amount added every month.
        annual_rate_percent: Nominal annual rate, e.g. 8 for 8%.
        months: Number of months to compound.
        timing: CONTRIBUTION_END or CONTRIBUTION_START.

    Returns:
        Value after the given number of months; the initial amount when
        months is zero.
    """
    if timing not in (CONTRIBUTION_END, CONTRIBUTION_START):
        raise ValueError(f"Unknown contribution timing '{timing}'")

    growth = 1 + monthly_rate(annual_rate_percent)
    amount = Decimal(initial)

    for _ in range(months):
        if timing == CONTRIBUTION_START:
            amount = (amount + contribution) * growth
        else:
            amount = amount * growth + contribution

    return Money(amount)


def format_period_label(month: int) -> str:
    """Label a month offset as years and months, e.g. 18 -> "1y 6m"."""
    return f"{month // 12}y {month % 12}m"


def total_contributed(params: SimulationParams) -> Money:
    """Initial amount plus every monthly contribution; a negative horizon counts as zero months."""
    return Money(params.initial_amount + params.monthly_contribution * max(params.horizon_months, 0))


def roi_percent(final_amount: Money, contributed: Money) -> Decimal:
    """Return on investment in percent, zero when nothing was contributed."""
    if contributed == 0:
        return Decimal("0")
    return (final_amount / contributed - 1) * 100


def simulate(
    params: SimulationParams,
    conservative_rate_percent: Decimal = CONSERVATIVE_RATE,
    step: int = SAMPLE_STEP,
    timing: str = CONTRIBUTION_END,
) -> SimulationResult:
    """Run both scenarios and sample them for charting.

    Args:
        params: User-adjusted simulation parameters.
        conservative_rate_percent: Annual rate of the baseline scenario.
        step: Sampling interval in months.
        timing: When monthly contributions are added.

    Returns:
        SimulationResult with points at months 0, step, 2*step, ... up to the
        horizon, and summary figures for the full horizon.
    """
    horizon = max(params.horizon_months, 0)
    step = max(step, 1)

    def run(rate: Decimal, months: int) -> Money:
        return compound(params.initial_amount, params.monthly_contribution, rate, months, timing)

    points = [
        SimulationPoint(
            label=format_period_label(month),
            month=month,
            conservative=run(conservative_rate_percent, month),
            optimized=run(params.annual_rate_percent, month),
        )
        for month in range(0, horizon + 1, step)
    ]

    conservative_final = run(conservative_rate_percent, horizon)
    optimized_final = run(params.annual_rate_percent, horizon)
    contributed = total_contributed(params)

    return SimulationResult(
        params=params,
        conservative_rate_percent=conservative_rate_percent,
        points=points,
        conservative_final=conservative_final,
        optimized_final=optimized_final,
        total_contributed=contributed,
        conservative_yield=Money(conservative_final - contributed),
        optimized_yield=Money(optimized_final - contributed),
        difference=Money(optimized_final - conservative_final),
        roi_percent=roi_percent(optimized_final, contributed),
    )


def round_money(value: Decimal) -> Decimal:
    """Quantize to cents for display."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
