"""
Audit Logger

DESIGN DECISION: Every mutation of the ledger is logged.
This provides:
1. Complete traceability (which occurrences were generated, and from what)
2. Debugging capability for recurrence and alert rules
3. User can see history of their changes

The audit logger:
- Runs inline with the operation that produced the event
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expenzo.models.audit import AuditEvent, AuditEventBuilder
from expenzo.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at `log_level`."""
    logging.basicConfig(format="%(message)s", level=log_level.upper())
    logging.getLogger().setLevel(log_level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
        correlation_id: Optional[UUID] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
            correlation_id: Default correlation ID stamped on events
                    that don't carry their own (typically one per session).
        """
        self._storage = storage
        self._logger = structlog.get_logger("expenzo.audit")
        self.correlation_id = correlation_id

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        if event.correlation_id is None and self.correlation_id is not None:
            event = event.model_copy(update={"correlation_id": self.correlation_id})

        log_dict = event.to_log_dict()

        if event.severity.value == "error":
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_added(self, transaction_id: str, category: str, amount: Decimal) -> None:
        self.log(AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            category=category,
            amount=str(amount),
        ))

    def log_transaction_updated(self, transaction_id: str) -> None:
        self.log(AuditEventBuilder.transaction_updated(transaction_id=transaction_id))

    def log_transaction_deleted(self, transaction_id: str) -> None:
        self.log(AuditEventBuilder.transaction_deleted(transaction_id=transaction_id))

    def log_recurring_generated(
        self,
        transaction_id: str,
        source_id: str,
        occurrence_date: str,
    ) -> None:
        """Log a materialized recurring occurrence."""
        self.log(AuditEventBuilder.recurring_generated(
            transaction_id=transaction_id,
            source_id=source_id,
            occurrence_date=occurrence_date,
        ))

    def log_recurring_skipped(self, source_id: str, occurrence_date: str) -> None:
        self.log(AuditEventBuilder.recurring_skipped(
            source_id=source_id,
            occurrence_date=occurrence_date,
        ))

    def log_recurring_migrated(self, migrated_count: int) -> None:
        self.log(AuditEventBuilder.recurring_migrated(migrated_count=migrated_count))

    def log_budget_saved(
        self,
        budget_id: str,
        category: str,
        month: str,
        limit: Decimal,
    ) -> None:
        self.log(AuditEventBuilder.budget_saved(
            budget_id=budget_id,
            category=category,
            month=month,
            limit=str(limit),
        ))

    def log_budget_alert_requested(
        self,
        category: str,
        spent_amount: Decimal,
        limit: Decimal,
    ) -> None:
        """Log a budget alert handed to the notifier."""
        self.log(AuditEventBuilder.budget_alert_requested(
            category=category,
            spent_amount=str(spent_amount),
            limit=str(limit),
        ))

    def log_goal_saved(self, goal_id: str, name: str) -> None:
        self.log(AuditEventBuilder.goal_saved(goal_id=goal_id, name=name))

    def log_goal_funded(self, goal_id: str, amount: Decimal, new_total: Decimal) -> None:
        self.log(AuditEventBuilder.goal_funded(
            goal_id=goal_id,
            amount=str(amount),
            new_total=str(new_total),
        ))

    def log_goal_deleted(self, goal_id: str) -> None:
        self.log(AuditEventBuilder.goal_deleted(goal_id=goal_id))

    def log_storage_error(self, operation: str, error_message: str) -> None:
        """Log a failed storage operation."""
        self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a session or user action.
    Pass it through all subsequent operations.
    """
    return uuid4()
