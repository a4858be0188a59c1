"""
Financial Health Scorer

Combines the current month's cash flow, budget state, expense stability
and goal progress into one composite score out of 100:

    savings ratio       30  (no floor: overspending pulls the total down)
    budget adherence    30
    expense volatility  20
    goal consistency    20

The raw parts are summed before the final rounding; each displayed part
is rounded on its own, so the parts need not add up to the total.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from expenzo.analytics.aggregation import (
    ZERO,
    current_month_key,
    monthly_trend,
    round_half_up,
    total_by_type,
    transactions_in_month,
)
from expenzo.models.insights import FinancialHealthScore, rating_for_score
from expenzo.models.ledger import Budget, SavingsGoal, Transaction, TransactionType


SAVINGS_CAP = Decimal("30")
BUDGET_ADHERENCE_MAX = Decimal("30")
OVER_BUDGET_PENALTY = Decimal("5")
VOLATILITY_MAX = Decimal("20")
VOLATILITY_WEIGHT = Decimal("10")
VOLATILITY_MONTHS = 3
GOAL_MAX = Decimal("20")


def savings_ratio_score(month_transactions: list[Transaction]) -> Decimal:
    income = total_by_type(month_transactions, TransactionType.INCOME)
    if income <= 0:
        return ZERO
    expenses = total_by_type(month_transactions, TransactionType.EXPENSE)
    return min((income - expenses) / income * 100, SAVINGS_CAP)


def budget_adherence_score(budgets: Iterable[Budget], month: str) -> Decimal:
    """30 minus 5 per budget of `month` whose cached spend exceeds its limit."""
    score = BUDGET_ADHERENCE_MAX
    for budget in budgets:
        if budget.month == month and budget.spent > budget.limit:
            score -= OVER_BUDGET_PENALTY
    return max(score, ZERO)


def expense_volatility_score(transactions: list[Transaction], today: date) -> Decimal:
    """
    Penalise unstable spending over the trailing three months.

    Uses the population variance divided by the mean of the monthly
    expense totals (0 when nothing was spent).
    """
    series = [p.expenses for p in monthly_trend(transactions, VOLATILITY_MONTHS, today)]
    mean = sum(series, ZERO) / len(series)
    if mean <= 0:
        volatility = ZERO
    else:
        variance = sum(((v - mean) ** 2 for v in series), ZERO) / len(series)
        volatility = variance / mean
    return max(VOLATILITY_MAX - volatility * VOLATILITY_WEIGHT, ZERO)


def goal_consistency_score(goals: list[SavingsGoal]) -> Decimal:
    if not goals:
        return ZERO
    count = len(goals)
    return sum(
        (min(goal.progress_percent / count, GOAL_MAX / count) for goal in goals),
        ZERO,
    )


def calculate_financial_health_score(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    goals: Iterable[SavingsGoal],
    today: Optional[date] = None,
) -> FinancialHealthScore:
    """Score the ledger snapshot against the calendar month containing `today`."""
    today = today or date.today()
    transactions = list(transactions)
    month = current_month_key(today)

    savings = savings_ratio_score(transactions_in_month(transactions, month))
    adherence = budget_adherence_score(budgets, month)
    volatility = expense_volatility_score(transactions, today)
    consistency = goal_consistency_score(list(goals))

    total = round_half_up(savings + adherence + volatility + consistency)

    return FinancialHealthScore(
        score=min(max(total, 0), 100),
        savings_ratio=round_half_up(savings),
        budget_adherence=round_half_up(adherence),
        expense_volatility=round_half_up(volatility),
        goal_consistency=round_half_up(consistency),
    )


def health_rating(score: int) -> str:
    """Human label for a composite score."""
    return rating_for_score(score)
