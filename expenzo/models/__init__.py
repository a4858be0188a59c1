"""
Data Models Package

This package contains all Pydantic models used by the Expenzo core.
Ledger entities, derived insights and audit events all live here.
"""

from expenzo.models.ledger import (
    DEFAULT_RECURRING_INTERVAL,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    Budget,
    RecurringInterval,
    SavingsGoal,
    Transaction,
    TransactionType,
    month_key_of,
    new_entity_id,
)
from expenzo.models.insights import (
    BudgetAlert,
    BudgetState,
    BudgetStatus,
    FinancialHealthScore,
    rating_for_score,
    GoalProgress,
    MonthlyTrendPoint,
    WastefulExpense,
)
from expenzo.models.query import QueryResult, TransactionQuery
from expenzo.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "DEFAULT_RECURRING_INTERVAL",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "Budget",
    "RecurringInterval",
    "SavingsGoal",
    "Transaction",
    "TransactionType",
    "month_key_of",
    "new_entity_id",
    # Insight models
    "BudgetAlert",
    "BudgetState",
    "BudgetStatus",
    "FinancialHealthScore",
    "rating_for_score",
    "GoalProgress",
    "MonthlyTrendPoint",
    "WastefulExpense",
    # Query models
    "QueryResult",
    "TransactionQuery",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
