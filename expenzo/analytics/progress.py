"""
Budget status and goal progress, as shown on the dashboard.

Budget status reads the cached `spent`, as of the last refresh. The alert
trigger recomputes spend from the ledger instead.
"""

import math
from datetime import date
from decimal import Decimal
from typing import Optional

from expenzo.models.insights import BudgetState, BudgetStatus, GoalProgress
from expenzo.models.ledger import Budget, SavingsGoal


NEAR_LIMIT_PERCENT = Decimal("80")
OVER_BUDGET_PERCENT = Decimal("100")
DAYS_PER_MONTH = 30
CENT = Decimal("0.01")


def budget_status(budget: Budget) -> BudgetStatus:
    percent = budget.spent / budget.limit * 100
    if percent > OVER_BUDGET_PERCENT:
        state = BudgetState.OVER_BUDGET
    elif percent > NEAR_LIMIT_PERCENT:
        state = BudgetState.NEAR_LIMIT
    else:
        state = BudgetState.ON_TRACK

    return BudgetStatus(
        budget=budget,
        percent_used=percent,
        remaining=budget.limit - budget.spent,
        state=state,
    )


def goal_progress(goal: SavingsGoal, today: Optional[date] = None) -> GoalProgress:
    """
    Progress of a goal and the monthly saving needed to hit the deadline.

    Months left are counted in 30-day blocks, rounded up, never below 1.
    An overdue goal has negative `days_left`.
    """
    today = today or date.today()
    days_left = (goal.deadline - today).days
    months_left = max(math.ceil(days_left / DAYS_PER_MONTH), 1)

    remaining = goal.remaining_amount
    monthly_required = (max(remaining, Decimal("0")) / months_left).quantize(CENT)

    return GoalProgress(
        goal=goal,
        percent=goal.progress_percent,
        remaining=remaining,
        days_left=days_left,
        monthly_required=monthly_required,
        completed=goal.progress_percent >= 100,
        as_of=today,
    )
