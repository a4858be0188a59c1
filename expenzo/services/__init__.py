"""Services package."""

from expenzo.services.notifications import (
    CollectingNotifier,
    LogNotifier,
    NotificationInterface,
)
from expenzo.services.storage import (
    AuditStorageInterface,
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
    open_ledger,
    seed_demo_data,
)

__all__ = [
    # Notification services
    "CollectingNotifier",
    "LogNotifier",
    "NotificationInterface",
    # Storage services
    "AuditStorageInterface",
    "DuplicateError",
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "NotFoundError",
    "StorageError",
    "open_ledger",
    "seed_demo_data",
]
