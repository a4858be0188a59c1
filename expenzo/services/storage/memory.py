"""
In-Memory Storage Implementation

Used in tests and whenever no ledger file is configured.

Each collection carries its own lock so that the read-modify-write of an
append or replace is atomic with respect to other writers of the same
collection.
"""

import threading
from collections import deque
from typing import ContextManager, Generic, Optional, Protocol, TypeVar

from expenzo.models.audit import AuditEvent
from expenzo.models.ledger import Budget, SavingsGoal, Transaction
from expenzo.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    LedgerStorageInterface,
    NotFoundError,
)


class _HasId(Protocol):
    id: str


EntityT = TypeVar("EntityT", bound=_HasId)

DEFAULT_MAX_AUDIT_EVENTS = 1000


class _Collection(Generic[EntityT]):
    """Ordered records keyed by id, guarded by one lock."""

    def __init__(self, kind: str):
        self._kind = kind
        self._records: list[EntityT] = []
        self._lock = threading.RLock()

    @property
    def lock(self) -> ContextManager:
        return self._lock

    def snapshot(self) -> list[EntityT]:
        with self._lock:
            return list(self._records)

    def append(self, record: EntityT) -> None:
        with self._lock:
            if any(r.id == record.id for r in self._records):
                raise DuplicateError(f"{self._kind} already exists: {record.id}")
            self._records.append(record)

    def replace(self, record_id: str, record: EntityT) -> None:
        with self._lock:
            for idx, existing in enumerate(self._records):
                if existing.id == record_id:
                    self._records[idx] = record
                    return
        raise NotFoundError(f"{self._kind} not found: {record_id}")

    def remove(self, record_id: str) -> bool:
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.id != record_id]
            return len(self._records) != before


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Ledger held in process memory."""

    def __init__(
        self,
        transactions: Optional[list[Transaction]] = None,
        budgets: Optional[list[Budget]] = None,
        goals: Optional[list[SavingsGoal]] = None,
    ):
        self._transactions: _Collection[Transaction] = _Collection("Transaction")
        self._budgets: _Collection[Budget] = _Collection("Budget")
        self._goals: _Collection[SavingsGoal] = _Collection("Goal")

        for t in transactions or []:
            self._transactions.append(t)
        for b in budgets or []:
            self._budgets.append(b)
        for g in goals or []:
            self._goals.append(g)

    def transactions_lock(self) -> ContextManager:
        return self._transactions.lock

    def list_transactions(self) -> list[Transaction]:
        return self._transactions.snapshot()

    def append_transaction(self, transaction: Transaction) -> None:
        self._transactions.append(transaction)

    def replace_transaction(self, transaction_id: str, transaction: Transaction) -> None:
        self._transactions.replace(transaction_id, transaction)

    def remove_transaction(self, transaction_id: str) -> bool:
        return self._transactions.remove(transaction_id)

    def list_budgets(self) -> list[Budget]:
        return self._budgets.snapshot()

    def append_budget(self, budget: Budget) -> None:
        self._budgets.append(budget)

    def replace_budget(self, budget_id: str, budget: Budget) -> None:
        self._budgets.replace(budget_id, budget)

    def list_goals(self) -> list[SavingsGoal]:
        return self._goals.snapshot()

    def append_goal(self, goal: SavingsGoal) -> None:
        self._goals.append(goal)

    def replace_goal(self, goal_id: str, goal: SavingsGoal) -> None:
        self._goals.replace(goal_id, goal)

    def remove_goal(self, goal_id: str) -> bool:
        return self._goals.remove(goal_id)


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Append-only audit log held in memory.

    Keeps at most `max_events`; the oldest events are dropped first.
    """

    def __init__(self, max_events: int = DEFAULT_MAX_AUDIT_EVENTS):
        self._events: deque[AuditEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append_event(self, event: AuditEvent) -> bool:
        with self._lock:
            self._events.append(event)
        return True

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        with self._lock:
            return list(reversed(self._events))[:limit]
