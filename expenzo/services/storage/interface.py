"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the ledger store.
This allows us to:
1. Swap the JSON file for a real database later
2. Use in-memory storage for testing
3. Keep the analytics and rules engine decoupled from persistence

The ledger is three independent collections (transactions, budgets,
goals). Each write touches exactly one collection, so implementations
only need read-modify-write atomicity per collection.

Calls are synchronous: every core operation completes within one call.
"""

from abc import ABC, abstractmethod
from contextlib import nullcontext
from typing import ContextManager

from expenzo.models.audit import AuditEvent
from expenzo.models.ledger import Budget, SavingsGoal, Transaction


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation (JSON file, SQLite, etc.)
    must implement these methods.
    """

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def transactions_lock(self) -> ContextManager:
        """
        Lock held across a read-then-write of the transaction collection.

        Recurrence generation (check for an existing occurrence, then append)
        and budget alerting (recompute spend after a write) run under it.
        Must be re-entrant: the append inside the block takes it again.
        Single-writer backends may keep this no-op default.
        """
        return nullcontext()

    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """
        List all transactions.

        Order is not guaranteed; callers sort as needed.
        """
        pass

    @abstractmethod
    def append_transaction(self, transaction: Transaction) -> None:
        """
        Append a new transaction.

        Raises:
            DuplicateError: If a transaction with the same id exists
        """
        pass

    @abstractmethod
    def replace_transaction(self, transaction_id: str, transaction: Transaction) -> None:
        """
        Replace the transaction stored under `transaction_id`.

        Raises:
            NotFoundError: If no transaction has that id
        """
        pass

    @abstractmethod
    def remove_transaction(self, transaction_id: str) -> bool:
        """
        Remove a transaction by id.

        Returns:
            True if a record was removed, False if none matched
        """
        pass

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        pass

    @abstractmethod
    def append_budget(self, budget: Budget) -> None:
        pass

    @abstractmethod
    def replace_budget(self, budget_id: str, budget: Budget) -> None:
        pass

    # -------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_goals(self) -> list[SavingsGoal]:
        pass

    @abstractmethod
    def append_goal(self, goal: SavingsGoal) -> None:
        pass

    @abstractmethod
    def replace_goal(self, goal_id: str, goal: SavingsGoal) -> None:
        pass

    @abstractmethod
    def remove_goal(self, goal_id: str) -> bool:
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
