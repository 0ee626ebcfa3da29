"""Savings goal progress."""

from datetime import date
from decimal import Decimal
from typing import Iterable

from finance_tracker.models.records import Goal
from finance_tracker.models.results import GoalProgress, GoalsSummary


ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _clamped_percentage(current: Decimal, target: Decimal) -> Decimal:
    if target <= 0:
        return ZERO
    return min(current / target * HUNDRED, HUNDRED)


def goal_progress(goal: Goal, today: date) -> GoalProgress:
    """
    Percentage (clamped to 100), amount still missing, and days until the
    deadline. Days are negative once the deadline has passed and None when
    the goal has no deadline.
    """
    days = (goal.deadline - today).days if goal.deadline else None
    return GoalProgress(
        goal_id=goal.id,
        percentage=_clamped_percentage(goal.current_amount, goal.target_amount),
        remaining=max(ZERO, goal.target_amount - goal.current_amount),
        days_remaining=days,
        is_completed=goal.is_completed,
    )


def active_goals(goals: Iterable[Goal]) -> list[Goal]:
    """Goals not yet reached."""
    return [g for g in goals if not g.is_completed]


def goals_summary(goals: Iterable[Goal]) -> GoalsSummary:
    """Totals across goals with the overall percentage (clamped to 100)."""
    goals = list(goals)
    total_target = sum((g.target_amount for g in goals), ZERO)
    total_current = sum((g.current_amount for g in goals), ZERO)
    active = len(active_goals(goals))
    return GoalsSummary(
        total_target=total_target,
        total_current=total_current,
        percentage=_clamped_percentage(total_current, total_target),
        active_count=active,
        completed_count=len(goals) - active,
    )
