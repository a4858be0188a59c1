"""Shared fixtures for the Expenzo test suite."""

from datetime import date
from decimal import Decimal

import pytest

from expenzo.audit import AuditLogger
from expenzo.models.ledger import Budget, SavingsGoal, Transaction, TransactionType
from expenzo.services.notifications import CollectingNotifier
from expenzo.services.storage import InMemoryAuditStorage, InMemoryLedgerStorage


TODAY = date(2026, 3, 15)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_transaction():
    """Factory for transactions with sensible defaults."""

    def _make(
        amount="100",
        category="Food & Dining",
        type=TransactionType.EXPENSE,
        day=TODAY,
        description="",
        **kwargs,
    ) -> Transaction:
        return Transaction(
            type=type,
            amount=Decimal(str(amount)),
            category=category,
            description=description,
            date=day,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_budget():
    def _make(category="Food & Dining", limit="500", month="2026-03", spent="0") -> Budget:
        return Budget(
            category=category,
            limit=Decimal(str(limit)),
            month=month,
            spent=Decimal(str(spent)),
        )

    return _make


@pytest.fixture
def make_goal():
    def _make(target="1000", current="0", deadline=date(2026, 12, 31), **kwargs) -> SavingsGoal:
        kwargs.setdefault("created_at", date(2026, 1, 1))
        return SavingsGoal(
            name=kwargs.pop("name", "Emergency Fund"),
            target_amount=Decimal(str(target)),
            current_amount=Decimal(str(current)),
            deadline=deadline,
            **kwargs,
        )

    return _make


@pytest.fixture
def storage() -> InMemoryLedgerStorage:
    return InMemoryLedgerStorage()


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()


@pytest.fixture
def audit_storage() -> InMemoryAuditStorage:
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage) -> AuditLogger:
    return AuditLogger(audit_storage)
