"""
Demo Ledger

A small sample ledger used for first runs and screenshots: one salary,
four expenses, three budgets and two savings goals.
"""

from datetime import date
from decimal import Decimal

from expenzo.models.ledger import (
    Budget,
    RecurringInterval,
    SavingsGoal,
    Transaction,
    TransactionType,
)
from expenzo.services.storage.interface import LedgerStorageInterface


def demo_transactions() -> list[Transaction]:
    return [
        Transaction(
            id="1",
            type=TransactionType.INCOME,
            amount=Decimal("5000"),
            category="Salary",
            description="Monthly Salary",
            date=date(2026, 2, 1),
            is_recurring=True,
            recurring_interval=RecurringInterval.MONTHLY,
            tags=["salary"],
        ),
        Transaction(
            id="2",
            type=TransactionType.EXPENSE,
            amount=Decimal("450"),
            category="Food & Dining",
            description="Grocery shopping",
            date=date(2026, 2, 15),
        ),
        Transaction(
            id="3",
            type=TransactionType.EXPENSE,
            amount=Decimal("80"),
            category="Transportation",
            description="Uber rides",
            date=date(2026, 2, 14),
        ),
        Transaction(
            id="4",
            type=TransactionType.EXPENSE,
            amount=Decimal("200"),
            category="Bills & Utilities",
            description="Electricity bill",
            date=date(2026, 2, 10),
            is_recurring=True,
            recurring_interval=RecurringInterval.MONTHLY,
        ),
        Transaction(
            id="5",
            type=TransactionType.EXPENSE,
            amount=Decimal("120"),
            category="Entertainment",
            description="Netflix, Spotify subscriptions",
            date=date(2026, 2, 5),
            is_recurring=True,
            recurring_interval=RecurringInterval.MONTHLY,
        ),
    ]


def demo_budgets() -> list[Budget]:
    return [
        Budget(id="1", category="Food & Dining", limit=Decimal("600"),
               month="2026-02", spent=Decimal("450")),
        Budget(id="2", category="Transportation", limit=Decimal("200"),
               month="2026-02", spent=Decimal("80")),
        Budget(id="3", category="Entertainment", limit=Decimal("150"),
               month="2026-02", spent=Decimal("120")),
    ]


def demo_goals() -> list[SavingsGoal]:
    return [
        SavingsGoal(
            id="1",
            name="Emergency Fund",
            target_amount=Decimal("10000"),
            current_amount=Decimal("3500"),
            deadline=date(2026, 12, 31),
            created_at=date(2026, 1, 1),
        ),
        SavingsGoal(
            id="2",
            name="Vacation to Europe",
            target_amount=Decimal("5000"),
            current_amount=Decimal("1200"),
            deadline=date(2026, 8, 1),
            created_at=date(2026, 1, 15),
        ),
    ]


def seed_demo_data(storage: LedgerStorageInterface) -> dict[str, int]:
    """
    Seed the demo ledger into every collection that is still empty.

    Collections that already hold records are left untouched.

    Returns:
        Number of records seeded per collection
    """
    seeded = {"transactions": 0, "budgets": 0, "goals": 0}

    if not storage.list_transactions():
        for t in demo_transactions():
            storage.append_transaction(t)
            seeded["transactions"] += 1

    if not storage.list_budgets():
        for b in demo_budgets():
            storage.append_budget(b)
            seeded["budgets"] += 1

    if not storage.list_goals():
        for g in demo_goals():
            storage.append_goal(g)
            seeded["goals"] += 1

    return seeded
