"""
Anomaly & Waste Detector

Flags month-over-month category spikes and a fixed set of wasteful
spending patterns. The thresholds and category names below are fixed
constants of the rule set.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from expenzo.analytics.aggregation import (
    ZERO,
    current_month_key,
    expenses_by_category,
    previous_month_key,
    round_half_up,
    transactions_in_month,
)
from expenzo.models.insights import WastefulExpense
from expenzo.models.ledger import Transaction


SPIKE_THRESHOLD_PERCENT = Decimal("30")

FOOD_CATEGORY = "Food & Dining"
FOOD_MAX_TRANSACTIONS = 15
ENTERTAINMENT_CATEGORY = "Entertainment"
ENTERTAINMENT_MAX_TOTAL = Decimal("300")


def detect_spending_spikes(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[str]:
    """
    Alert messages for categories whose spend grew more than 30% since last month.

    Categories without spend last month never trigger.
    """
    transactions = list(transactions)
    current = expenses_by_category(transactions_in_month(transactions, current_month_key(today)))
    previous = expenses_by_category(transactions_in_month(transactions, previous_month_key(today)))

    alerts = []
    for category, amount in current.items():
        prior = previous.get(category, ZERO)
        if prior <= 0:
            continue
        increase = (amount - prior) / prior * 100
        if increase > SPIKE_THRESHOLD_PERCENT:
            alerts.append(
                f"Your {category} spending increased {round_half_up(increase)}% "
                f"compared to last month."
            )
    return alerts


def detect_wasteful_expenses(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[WastefulExpense]:
    """
    Current-month categories matching a waste rule.

    - Food & Dining: more than 15 transactions
    - Entertainment: more than 300 in total

    Ordered by first occurrence of the category this month.
    """
    month = transactions_in_month(transactions, current_month_key(today))

    stats: dict[str, list] = {}
    for t in month:
        if not t.is_expense:
            continue
        entry = stats.setdefault(t.category, [0, ZERO])
        entry[0] += 1
        entry[1] += t.amount

    wasteful = []
    for category, (count, total) in stats.items():
        if category == FOOD_CATEGORY and count > FOOD_MAX_TRANSACTIONS:
            wasteful.append(WastefulExpense(
                category=category,
                amount=total,
                description=f"{count} food expenses this month. Consider meal planning.",
            ))
        if category == ENTERTAINMENT_CATEGORY and total > ENTERTAINMENT_MAX_TOTAL:
            wasteful.append(WastefulExpense(
                category=category,
                amount=total,
                description="High entertainment spending. Review subscriptions.",
            ))
    return wasteful
