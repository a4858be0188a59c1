"""
Analytics package.

Pure functions over a ledger snapshot. Nothing here touches storage.
"""

from expenzo.analytics.aggregation import (
    current_month_key,
    date_range_for_period,
    expenses_by_category,
    filter_by_date_range,
    month_key,
    monthly_trend,
    previous_month_key,
    round_half_up,
    total_by_type,
    transactions_in_month,
)
from expenzo.analytics.anomalies import detect_spending_spikes, detect_wasteful_expenses
from expenzo.analytics.health import calculate_financial_health_score, health_rating
from expenzo.analytics.progress import budget_status, goal_progress
from expenzo.analytics.suggestions import suggest_budget

__all__ = [
    # Aggregation
    "current_month_key",
    "date_range_for_period",
    "expenses_by_category",
    "filter_by_date_range",
    "month_key",
    "monthly_trend",
    "previous_month_key",
    "round_half_up",
    "total_by_type",
    "transactions_in_month",
    # Scoring
    "calculate_financial_health_score",
    "health_rating",
    # Detection
    "detect_spending_spikes",
    "detect_wasteful_expenses",
    # Suggestions
    "suggest_budget",
    # Progress
    "budget_status",
    "goal_progress",
]
