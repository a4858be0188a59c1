"""
Budget Suggestion Engine

Proposes a monthly limit for a category from the last three months of
spend: the average over three months plus a 10% buffer.

NOTE: Unlike the rest of the analytics, the window here is a true date
range (today minus three months), not a month-key prefix match.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from expenzo.analytics.aggregation import ZERO, round_half_up
from expenzo.models.ledger import Transaction


DEFAULT_SUGGESTION = 500
LOOKBACK_MONTHS = 3
BUFFER = Decimal("1.10")


def suggest_budget(
    transactions: Iterable[Transaction],
    category: str,
    today: Optional[date] = None,
) -> int:
    """Suggested limit for `category`, or 500 when it has no recent expenses."""
    cutoff = (today or date.today()) - relativedelta(months=LOOKBACK_MONTHS)
    recent = [
        t for t in transactions
        if t.is_expense
        and t.category == category
        and t.date >= cutoff
    ]
    if not recent:
        return DEFAULT_SUGGESTION

    total = sum((t.amount for t in recent), ZERO)
    # Always divided by 3, however many months actually have data
    return round_half_up(total / LOOKBACK_MONTHS * BUFFER)
