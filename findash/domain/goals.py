"""Pure functions for savings goal progress.

Ratios are not clamped: a goal that has been overfunded reports more than
100%. Every function has a defined zero result instead of raising for a
zero or missing target, zero contributions, or no goals at all.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from findash.domain.models import ZERO, Goal, Money


@dataclass(frozen=True)
class GoalStatus:
    """Immutable progress figures for one goal."""

    goal: Goal
    ratio: Decimal
    percentage: Decimal
    remaining: Money
    months_remaining: int
    days_remaining: int | None


@dataclass(frozen=True)
class GoalsSummary:
    """Immutable progress figures for all of a user's goals."""

    goals: list[GoalStatus]
    progress_percentage: Decimal


def progress_ratio(goal: Goal) -> Decimal:
    """Fraction of the target already saved.

    Args:
        goal: Goal to measure.

    Returns:
        current / target, or zero when the target is zero or missing.
    """
    if not goal.target_amount:
        return Decimal("0")
    return goal.current_amount / goal.target_amount


def goals_progress(goals: Iterable[Goal]) -> Decimal:
    """Unweighted mean of goal ratios, as a percentage.

    Args:
        goals: All of a user's goals.

    Returns:
        Mean ratio x 100, zero when there are no goals.
    """
    ratios = [progress_ratio(goal) for goal in goals]
    if not ratios:
        return Decimal("0")
    return sum(ratios, Decimal("0")) / len(ratios) * 100


def months_to_goal(target: Money | None, current: Money, monthly: Money) -> int:
    """Whole months of contributions needed to reach the target.

    Args:
        target: Target amount.
        current: Amount already saved.
        monthly: Monthly contribution.

    Returns:
        ceil((target - current) / monthly), or zero when the goal is already
        met or contributions are not positive.
    """
    if target is None or monthly <= 0 or current >= target:
        return 0
    return math.ceil((target - current) / monthly)


def days_remaining(target_date: date | None, today: date) -> int | None:
    """Days left until the target date.

    Returns:
        Positive day count, or None when there is no target date or it is
        today or in the past.
    """
    if target_date is None:
        return None
    days = (target_date - today).days
    if days <= 0:
        return None
    return days


def goal_status(goal: Goal, today: date) -> GoalStatus:
    """Compute all progress figures for a goal."""
    ratio = progress_ratio(goal)
    target = goal.target_amount or ZERO

    return GoalStatus(
        goal=goal,
        ratio=ratio,
        percentage=ratio * 100,
        remaining=Money(max(target - goal.current_amount, ZERO)),
        months_remaining=months_to_goal(goal.target_amount, goal.current_amount, goal.monthly_contribution),
        days_remaining=days_remaining(goal.target_date, today),
    )


def summarize_goals(goals: Iterable[Goal], today: date) -> GoalsSummary:
    """Per-goal status plus the aggregate progress percentage."""
    goal_list = list(goals)
    return GoalsSummary(
        goals=[goal_status(goal, today) for goal in goal_list],
        progress_percentage=goals_progress(goal_list),
    )
