"""
JSON File Storage Implementation

DESIGN DECISION: The ledger is a small key-value document on disk, one key
per collection:

    {
      "expense_tracker_transactions": [...],
      "expense_tracker_budgets": [...],
      "expense_tracker_goals": [...]
    }

TRADEOFFS:
- Every write rewrites the whole file (we're fine for personal use)
- Writes go to a temp file first and are swapped in with os.replace,
  so a crash never leaves a half-written ledger
- No query capabilities (the core filters in Python anyway)

The implementation follows the abstract interface, so we can swap
to SQLite later without changing business logic.
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, ContextManager, Optional

from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from expenzo.models.ledger import Budget, SavingsGoal, Transaction
from expenzo.services.storage.interface import (
    DuplicateError,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from expenzo.services.storage.memory import InMemoryLedgerStorage


STORAGE_KEYS = {
    "transactions": "expense_tracker_transactions",
    "budgets": "expense_tracker_budgets",
    "goals": "expense_tracker_goals",
}

MODEL_BY_KEY = {
    STORAGE_KEYS["transactions"]: Transaction,
    STORAGE_KEYS["budgets"]: Budget,
    STORAGE_KEYS["goals"]: SavingsGoal,
}


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    Ledger persisted as a single JSON document.

    All collections share one file, so one re-entrant lock guards every
    read-modify-write cycle.
    """

    def __init__(self, path: Path, indent: int = 2):
        self._path = Path(path)
        self._indent = indent
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    # -------------------------------------------------------------------------
    # Raw document access
    # -------------------------------------------------------------------------

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _read_document(self) -> dict[str, Any]:
        """Load the whole document; a missing file is an empty ledger."""
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as e:
                raise StorageError(f"Ledger file is corrupt: {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Ledger file is not a JSON object: {self._path}")
        return data

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, max=1),
        retry=retry_if_exception_type(OSError),
        reraise=True,
    )
    def _write_document(self, document: dict[str, Any]) -> None:
        """Write atomically: temp file in the same directory, then replace."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            dir=self._path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=self._indent, sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _load(self, key: str) -> list:
        model = MODEL_BY_KEY[key]
        try:
            raw = self._read_document().get(key) or []
        except OSError as e:
            raise StorageError(f"Failed to read ledger: {e}") from e
        try:
            return [model.model_validate(item) for item in raw]
        except ValidationError as e:
            raise StorageError(f"Invalid record under '{key}': {e}") from e

    def _save(self, key: str, records: list) -> None:
        try:
            document = self._read_document()
            document[key] = [r.model_dump(mode="json") for r in records]
            self._write_document(document)
        except OSError as e:
            raise StorageError(f"Failed to write ledger: {e}") from e

    # -------------------------------------------------------------------------
    # Generic collection operations
    # -------------------------------------------------------------------------

    def _append(self, key: str, record) -> None:
        with self._lock:
            records = self._load(key)
            if any(r.id == record.id for r in records):
                raise DuplicateError(f"Record already exists under '{key}': {record.id}")
            records.append(record)
            self._save(key, records)

    def _replace(self, key: str, record_id: str, record) -> None:
        with self._lock:
            records = self._load(key)
            for idx, existing in enumerate(records):
                if existing.id == record_id:
                    records[idx] = record
                    self._save(key, records)
                    return
        raise NotFoundError(f"Record not found under '{key}': {record_id}")

    def _remove(self, key: str, record_id: str) -> bool:
        with self._lock:
            records = self._load(key)
            remaining = [r for r in records if r.id != record_id]
            if len(remaining) == len(records):
                return False
            self._save(key, remaining)
            return True

    # -------------------------------------------------------------------------
    # LedgerStorageInterface
    # -------------------------------------------------------------------------

    def transactions_lock(self) -> ContextManager:
        return self._lock

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return self._load(STORAGE_KEYS["transactions"])

    def append_transaction(self, transaction: Transaction) -> None:
        self._append(STORAGE_KEYS["transactions"], transaction)

    def replace_transaction(self, transaction_id: str, transaction: Transaction) -> None:
        self._replace(STORAGE_KEYS["transactions"], transaction_id, transaction)

    def remove_transaction(self, transaction_id: str) -> bool:
        return self._remove(STORAGE_KEYS["transactions"], transaction_id)

    def list_budgets(self) -> list[Budget]:
        with self._lock:
            return self._load(STORAGE_KEYS["budgets"])

    def append_budget(self, budget: Budget) -> None:
        self._append(STORAGE_KEYS["budgets"], budget)

    def replace_budget(self, budget_id: str, budget: Budget) -> None:
        self._replace(STORAGE_KEYS["budgets"], budget_id, budget)

    def list_goals(self) -> list[SavingsGoal]:
        with self._lock:
            return self._load(STORAGE_KEYS["goals"])

    def append_goal(self, goal: SavingsGoal) -> None:
        self._append(STORAGE_KEYS["goals"], goal)

    def replace_goal(self, goal_id: str, goal: SavingsGoal) -> None:
        self._replace(STORAGE_KEYS["goals"], goal_id, goal)

    def remove_goal(self, goal_id: str) -> bool:
        return self._remove(STORAGE_KEYS["goals"], goal_id)


def open_ledger(path: Optional[Path], indent: int = 2) -> LedgerStorageInterface:
    """
    Open the configured ledger.

    A JSON file ledger when a path is given, an empty in-memory ledger
    otherwise.
    """
    if path is None:
        return InMemoryLedgerStorage()
    return JsonFileLedgerStorage(path, indent=indent)
