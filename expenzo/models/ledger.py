"""
Ledger Data Models for Expenzo

These models define the entities stored by the ledger collaborator:
transactions, budgets and savings goals.

DESIGN DECISION: Entities never reference each other by key.
A budget "belongs to" a category and month, and a transaction "counts
toward" a budget, only by matching field values at read time. There are
no stored relations to keep in sync.

All entities are frozen. An update is a full replacement keyed by id,
built with `model_copy(update=...)`.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


def new_entity_id() -> str:
    """Collision-resistant identifier for a new ledger entity."""
    return uuid4().hex


def month_key_of(day: date) -> str:
    """
    Month key of a calendar day.

    The key is the first 7 characters of the ISO date (`YYYY-MM`).
    Every month association in the ledger is a prefix match on this key.
    """
    return day.isoformat()[:7]


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of money flow."""
    INCOME = "income"
    EXPENSE = "expense"


class RecurringInterval(str, Enum):
    """How often a recurring transaction repeats."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


DEFAULT_RECURRING_INTERVAL = RecurringInterval.MONTHLY


EXPENSE_CATEGORIES = [
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Bills & Utilities",
    "Entertainment",
    "Healthcare",
    "Education",
    "Travel",
    "Groceries",
    "Personal Care",
    "Other",
]

INCOME_CATEGORIES = [
    "Salary",
    "Freelance",
    "Investment",
    "Business",
    "Gift",
    "Other",
]


# =============================================================================
# CORE LEDGER ENTITIES
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    Identity is `id`. The ledger collaborator guarantees uniqueness;
    new records get a random hex id by default.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_entity_id,
        min_length=1,
        description="Unique transaction ID"
    )
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
        description="Non-negative amount in the ledger currency"
    )
    category: str = Field(
        ...,
        description="Category name, matched by string equality"
    )
    description: str = Field(
        default="",
        description="Free-text description"
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Ordered user tags"
    )
    is_recurring: bool = False
    recurring_interval: Optional[RecurringInterval] = None
    receipt_reference: Optional[str] = Field(
        default=None,
        description="Opaque reference to a captured receipt"
    )
    # Calendar day. No default: an assigned Field() would shadow the
    # `date` annotation inside the class body.
    date: date

    @property
    def month_key(self) -> str:
        return month_key_of(self.date)

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def effective_interval(self) -> RecurringInterval:
        """Interval used for recurrence; records without one repeat monthly."""
        return self.recurring_interval or DEFAULT_RECURRING_INTERVAL


class Budget(BaseModel):
    """
    Spending limit for one category in one calendar month.

    `spent` is a cached projection of the ledger, refreshed from time to
    time. It is NOT a source of truth: alerting recomputes spend from
    transactions.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_entity_id,
        min_length=1,
    )
    category: str
    limit: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Positive monthly limit"
    )
    month: str = Field(
        ...,
        pattern=r"^\d{4}-\d{2}$",
        description="Calendar month (YYYY-MM)"
    )
    spent: Decimal = Field(
        default=Decimal("0"),
        description="Cached spend for the month"
    )


class SavingsGoal(BaseModel):
    """
    A savings target with a deadline.

    `current_amount` only changes through an explicit "add funds" operation.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=new_entity_id,
        min_length=1,
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
    )
    target_amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
    )
    current_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        decimal_places=2,
    )
    deadline: date
    created_at: date = Field(default_factory=date.today)

    @property
    def progress_percent(self) -> Decimal:
        """Progress towards the target, uncapped (can exceed 100)."""
        return self.current_amount / self.target_amount * 100

    @property
    def remaining_amount(self) -> Decimal:
        return self.target_amount - self.current_amount

    @model_validator(mode='after')
    def validate_dates(self) -> 'SavingsGoal':
        if self.deadline < self.created_at:
            raise ValueError("Deadline cannot be before goal creation date")
        return self
