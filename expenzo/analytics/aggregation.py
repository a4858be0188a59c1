"""
Aggregation Engine

Pure functions computing totals, category breakdowns and multi-month
trend series from a transaction list.

IMPORTANT: Month membership is a string-prefix match on the ISO date
(`YYYY-MM`), never a parsed date range. Only `filter_by_date_range`
(and the budget suggestion built on true date arithmetic) compare dates.
"""

from datetime import date, timedelta
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from expenzo.models.insights import MonthlyTrendPoint
from expenzo.models.ledger import Transaction, TransactionType, month_key_of


ZERO = Decimal("0")

PERIODS = ("daily", "weekly", "monthly", "yearly")


def round_half_up(value: Decimal) -> int:
    """
    Round to the nearest integer, halves towards +infinity.

    2.5 -> 3, -2.5 -> -2. Displayed scores and suggestions all use this.
    """
    return int((Decimal(value) + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


# =============================================================================
# MONTH KEYS
# =============================================================================

def month_key(day: date) -> str:
    return month_key_of(day)


def current_month_key(today: Optional[date] = None) -> str:
    return month_key_of(today or date.today())


def previous_month_key(today: Optional[date] = None) -> str:
    """Key of the calendar month before the one containing `today`."""
    first = (today or date.today()).replace(day=1)
    return month_key_of(first - relativedelta(months=1))


def transactions_in_month(transactions: Iterable[Transaction], key: str) -> list[Transaction]:
    """Transactions whose ISO date starts with `key`."""
    return [t for t in transactions if t.date.isoformat().startswith(key)]


# =============================================================================
# TOTALS
# =============================================================================

def total_by_type(transactions: Iterable[Transaction], type: TransactionType) -> Decimal:
    """Sum of `amount` over records of the given type."""
    return sum((t.amount for t in transactions if t.type == type), ZERO)


def expenses_by_category(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Expense totals per category.

    Only categories with at least one expense appear; keys keep the order
    in which each category first occurs.
    """
    totals: dict[str, Decimal] = {}
    for t in transactions:
        if not t.is_expense:
            continue
        totals[t.category] = totals.get(t.category, ZERO) + t.amount
    return totals


# =============================================================================
# TRENDS
# =============================================================================

def monthly_trend(
    transactions: Iterable[Transaction],
    n: int = 6,
    today: Optional[date] = None,
) -> list[MonthlyTrendPoint]:
    """
    Income and expense totals for the `n` months ending at the current one.

    Oldest first. Always exactly `n` points; empty months are zeros.
    """
    transactions = list(transactions)
    first_of_month = (today or date.today()).replace(day=1)

    trend = []
    for offset in range(n - 1, -1, -1):
        month_start = first_of_month - relativedelta(months=offset)
        key = month_key_of(month_start)
        in_month = transactions_in_month(transactions, key)
        trend.append(MonthlyTrendPoint(
            month_key=key,
            month_label=month_start.strftime("%b %Y"),
            income=total_by_type(in_month, TransactionType.INCOME),
            expenses=total_by_type(in_month, TransactionType.EXPENSE),
        ))
    return trend


# =============================================================================
# DATE RANGES
# =============================================================================

def filter_by_date_range(
    transactions: Iterable[Transaction],
    start: date,
    end: date,
) -> list[Transaction]:
    """Transactions dated within [start, end], both ends inclusive."""
    return [t for t in transactions if start <= t.date <= end]


def date_range_for_period(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """
    Reporting window ending today.

    daily  -> today only
    weekly -> the last 7 days
    monthly / yearly -> one calendar month / year back
    """
    end = today or date.today()
    if period == "daily":
        start = end
    elif period == "weekly":
        start = end - timedelta(days=7)
    elif period == "monthly":
        start = end - relativedelta(months=1)
    elif period == "yearly":
        start = end - relativedelta(years=1)
    else:
        raise ValueError(f"Unknown period '{period}', expected one of {PERIODS}")
    return start, end
