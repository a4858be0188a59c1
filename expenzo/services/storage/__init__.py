"""
Storage Services Package

Provides abstract interfaces and concrete implementations for the ledger.
A JSON file is the persistent backend; an in-memory ledger backs tests
and unconfigured sessions. Both are swappable behind the interface.
"""

from expenzo.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from expenzo.services.storage.json_file import (
    STORAGE_KEYS,
    JsonFileLedgerStorage,
    open_ledger,
)
from expenzo.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
)
from expenzo.services.storage.demo import seed_demo_data

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LedgerStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "STORAGE_KEYS",
    "open_ledger",
    # Demo data
    "seed_demo_data",
]
