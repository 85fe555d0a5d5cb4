"""Goal commands: add, list and contribute."""

import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from findash.config import load_settings
from findash.domain.goals import months_to_goal, summarize_goals
from findash.domain.models import Money, UserId
from findash.domain.report import format_money
from findash.domain.validation import parse_money, validate_amount, validate_goal
from findash.logging_setup import get_logger
from findash.store.queries import get_goal, get_goals, insert_goal, update_goal_amount
from findash.store.schema import get_db_path

console = Console()
logger = get_logger(__name__)


def format_progress_bar(percentage: float, width: int = 20) -> str:
    """Progress bar capped at full width; the percentage itself is not capped."""
    filled = min(int(percentage / 100 * width), width) if percentage > 0 else 0
    return "█" * filled + "░" * (width - filled)


def goal_add_command(
    name: str,
    target: str,
    current: str = "0",
    monthly: str = "0",
    target_date: str | None = None,
    user: str | None = None,
) -> None:
    """Create a savings goal."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)

    try:
        target_amount = parse_money(target)
        current_amount = parse_money(current)
        monthly_amount = parse_money(monthly)
        deadline = date.fromisoformat(target_date) if target_date else None
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    is_valid, error = validate_goal(target_amount, current_amount, monthly_amount)
    if not is_valid:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)

    try:
        goal_id = insert_goal(
            user_id, name, target_amount, current_amount, monthly_amount, deadline, db_path=get_db_path()
        )
    except sqlite3.Error as e:
        logger.error("Could not insert goal %r: %s", name, e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    logger.info("Created goal %d for %s", goal_id, user_id)

    console.print(f"[green]✓[/green] Goal '{name}' created (ID: {goal_id})")
    months = months_to_goal(target_amount, current_amount, monthly_amount)
    if months > 0:
        console.print(f"  Estimated time to reach it: [cyan]{months} months[/cyan]")


def goal_list_command(user: str | None = None) -> None:
    """List goals with their progress."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)

    try:
        goals = get_goals(user_id, get_db_path())
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not goals:
        console.print("[yellow]No goals yet[/yellow]")
        return

    summary = summarize_goals(goals, date.today())
    currency = settings.currency

    table = Table(title=f"Goals (overall progress {summary.progress_percentage:.1f}%)")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Goal", style="cyan")
    table.add_column("Saved", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress")
    table.add_column("Months left", justify="right")
    table.add_column("Days left", justify="right")

    for status in summary.goals:
        goal = status.goal
        percentage = float(status.percentage)
        table.add_row(
            str(goal.id),
            goal.name,
            format_money(goal.current_amount, currency),
            format_money(goal.target_amount or Money(0), currency),
            f"{format_progress_bar(percentage)} {percentage:.1f}%",
            str(status.months_remaining) if status.months_remaining else "[dim]-[/dim]",
            str(status.days_remaining) if status.days_remaining is not None else "[dim]-[/dim]",
        )

    console.print(table)


def goal_contribute_command(goal_id: int, amount: str, user: str | None = None) -> None:
    """Add money to a goal's saved amount."""
    settings = load_settings()
    user_id = UserId(user or settings.user_id)
    db_path = get_db_path()

    try:
        contribution = parse_money(amount)
    except ValueError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    is_valid, error = validate_amount(contribution)
    if not is_valid:
        console.print(f"[red]{error}[/red]", style="bold")
        sys.exit(1)

    try:
        goal = get_goal(user_id, goal_id, db_path)
        if goal is None:
            console.print(f"[red]Goal {goal_id} not found[/red]", style="bold")
            sys.exit(1)

        new_amount = Money(goal.current_amount + contribution)
        update_goal_amount(goal_id, new_amount, db_path)
    except sqlite3.Error as e:
        logger.error("Could not update goal %d: %s", goal_id, e)
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] '{goal.name}' now at {format_money(new_amount, settings.currency)}"
        f" of {format_money(goal.target_amount or Money(0), settings.currency)}"
    )
