"""
Transaction Query Models

A TransactionQuery describes a filtered view of the ledger (the
transaction list screen); a QueryResult carries the matching records and
their totals.
"""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator

from expenzo.models.ledger import Transaction, TransactionType


class TransactionQuery(BaseModel):
    """
    Filters applied to the transaction list.

    Every filter is optional; an empty query returns the whole ledger.
    """

    query_id: UUID = Field(default_factory=uuid4)

    type: Optional[TransactionType] = None
    category: Optional[str] = Field(
        default=None,
        description="Exact category name"
    )
    search: Optional[str] = Field(
        default=None,
        description="Case-insensitive text matched against description, tags and category"
    )
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    limit: Optional[int] = Field(
        default=None,
        ge=1,
        le=10000,
    )

    @model_validator(mode='after')
    def validate_date_range(self) -> 'TransactionQuery':
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from cannot be after date_to")
        return self


class QueryResult(BaseModel):
    """Result of executing a TransactionQuery."""

    query_id: UUID

    data_found: bool
    result_count: int = Field(ge=0)
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Matches, newest first"
    )

    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")

    query_description: str = Field(
        ...,
        description="Human-readable description of what was searched"
    )
