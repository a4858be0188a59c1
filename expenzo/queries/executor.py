"""
Query Execution Engine

DESIGN DECISION: Query execution is DETERMINISTIC.
A TransactionQuery is evaluated against a fresh ledger snapshot; results
are only ever real stored transactions, newest first.

Filters are applied in a fixed order (type, category, date range, search)
and `limit` is applied last, after sorting.
"""

from datetime import date
from typing import Optional

from expenzo.analytics.aggregation import filter_by_date_range, total_by_type
from expenzo.models.ledger import Transaction, TransactionType
from expenzo.models.query import QueryResult, TransactionQuery
from expenzo.services.storage import LedgerStorageInterface


def matches_search(transaction: Transaction, text: str) -> bool:
    """Case-insensitive substring match on description, any tag, or category."""
    needle = text.lower()
    return (
        needle in transaction.description.lower()
        or any(needle in tag.lower() for tag in transaction.tags)
        or needle in transaction.category.lower()
    )


class QueryExecutor:
    """
    Executes transaction queries against ledger storage.

    GUARANTEES:
    - Only returns real data from storage
    - Clear "no data found" if nothing matches
    """

    def __init__(self, storage: LedgerStorageInterface):
        self._storage = storage

    def execute(self, query: TransactionQuery) -> QueryResult:
        transactions = self._storage.list_transactions()

        if query.type is not None:
            transactions = [t for t in transactions if t.type == query.type]
        if query.category:
            transactions = [t for t in transactions if t.category == query.category]
        if query.date_from or query.date_to:
            transactions = filter_by_date_range(
                transactions,
                query.date_from or date.min,
                query.date_to or date.max,
            )
        if query.search:
            transactions = [t for t in transactions if matches_search(t, query.search)]

        # Stable: same-day records keep storage order
        transactions = sorted(transactions, key=lambda t: t.date, reverse=True)
        if query.limit:
            transactions = transactions[:query.limit]

        return QueryResult(
            query_id=query.query_id,
            data_found=len(transactions) > 0,
            result_count=len(transactions),
            transactions=transactions,
            total_income=total_by_type(transactions, TransactionType.INCOME),
            total_expenses=total_by_type(transactions, TransactionType.EXPENSE),
            query_description=self._describe(query),
        )

    def _describe(self, query: TransactionQuery) -> str:
        desc_parts = ["Listing transactions"]
        if query.type:
            desc_parts.append(f"type: {query.type.value}")
        if query.category:
            desc_parts.append(f"category: {query.category}")
        if query.search:
            desc_parts.append(f"matching '{query.search}'")
        if query.date_from or query.date_to:
            desc_parts.append(self._date_range_str(query.date_from, query.date_to))
        return " | ".join(desc_parts)

    def _date_range_str(
        self,
        date_from: Optional[date],
        date_to: Optional[date],
    ) -> str:
        """Format date range for description."""
        if date_from and date_to:
            if date_from == date_to:
                return f"on {date_from.strftime('%d %b %Y')}"
            elif date_from.month == date_to.month and date_from.year == date_to.year:
                return f"in {date_from.strftime('%B %Y')}"
            return f"from {date_from.strftime('%d %b %Y')} to {date_to.strftime('%d %b %Y')}"
        elif date_from:
            return f"from {date_from.strftime('%d %b %Y')}"
        elif date_to:
            return f"until {date_to.strftime('%d %b %Y')}"
        return ""
