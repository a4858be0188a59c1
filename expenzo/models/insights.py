"""
Derived Insight Models

Display-ready values produced by the analytics engine. None of these are
persisted; they are recomputed from a ledger snapshot on every call.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from expenzo.models.ledger import Budget, SavingsGoal


def rating_for_score(score: int) -> str:
    """Human label for a composite health score."""
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Improvement"


class FinancialHealthScore(BaseModel):
    """
    Composite health score with its four weighted parts.

    Sub-scores are rounded for display independently of the total.
    `savings_ratio` has no lower bound: spending beyond a non-zero income
    pulls it below zero and drags the total down. The total is kept
    within 0-100.
    """

    score: int = Field(
        ...,
        ge=0,
        le=100,
        description="Composite score (0-100)"
    )
    savings_ratio: int = Field(
        ...,
        le=30,
        description="Savings ratio part, capped at 30"
    )
    budget_adherence: int = Field(
        ...,
        ge=0,
        le=30,
    )
    expense_volatility: int = Field(
        ...,
        ge=0,
        le=20,
    )
    goal_consistency: int = Field(
        ...,
        ge=0,
        le=20,
    )

    @property
    def rating(self) -> str:
        return rating_for_score(self.score)


class MonthlyTrendPoint(BaseModel):
    """Income and expense totals for one calendar month."""

    month_key: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
    )
    month_label: str = Field(
        ...,
        description="Short label, e.g. 'Feb 2026'"
    )
    income: Decimal = Decimal("0")
    expenses: Decimal = Decimal("0")


class WastefulExpense(BaseModel):
    """A category flagged by the waste heuristics."""

    category: str
    amount: Decimal
    description: str


class BudgetAlert(BaseModel):
    """Request for a budget notification."""

    category: str
    spent_amount: Decimal = Field(
        ...,
        description="Spend recomputed from the ledger"
    )
    limit: Decimal

    @property
    def percent_used(self) -> Decimal:
        return self.spent_amount / self.limit * 100

    def message(self) -> str:
        """Notification body shown to the user."""
        return (
            f"You've used {self.percent_used:.0f}% of your {self.category} budget! "
            f"(${self.spent_amount} / ${self.limit})"
        )


class BudgetState(str, Enum):
    """Where a budget stands against its limit."""
    ON_TRACK = "on_track"
    NEAR_LIMIT = "near_limit"
    OVER_BUDGET = "over_budget"


class BudgetStatus(BaseModel):
    """Budget with its usage derived from the cached `spent`."""

    budget: Budget
    percent_used: Decimal
    remaining: Decimal
    state: BudgetState


class GoalProgress(BaseModel):
    """Savings goal with derived progress figures."""

    goal: SavingsGoal
    percent: Decimal
    remaining: Decimal
    days_left: int
    monthly_required: Decimal
    completed: bool = False
    as_of: Optional[date] = None
