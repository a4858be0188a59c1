"""
Audit Models for Expenzo

Every mutation the core performs against the ledger is logged:
transactions added by the user, recurring occurrences the generator
materializes, budget alerts it requests.

This provides:
1. Traceability of automatically generated records
2. Debugging information when a recurrence or alert looks wrong
3. Ability to reconstruct what happened in a session

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Transactions
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"

    # Recurrence
    RECURRING_GENERATED = "recurring_generated"
    RECURRING_SKIPPED = "recurring_skipped"
    RECURRING_MIGRATED = "recurring_migrated"

    # Budgets
    BUDGET_SAVED = "budget_saved"
    BUDGET_ALERT_REQUESTED = "budget_alert_requested"

    # Goals
    GOAL_SAVED = "goal_saved"
    GOAL_FUNDED = "goal_funded"
    GOAL_DELETED = "goal_deleted"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'budget', 'goal')"
    )
    entity_id: Optional[str] = None

    # Correlation - groups the events of one session or user action
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction_id, ...)
        event = AuditEventBuilder.recurring_generated(new_id, source_id, ...)
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        category: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Transaction added: {amount} in {category}",
            details={"category": category, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Transaction replaced",
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description="Transaction deleted",
            is_user_action=True,
        )

    @staticmethod
    def recurring_generated(
        transaction_id: str,
        source_id: str,
        occurrence_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_GENERATED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Recurring occurrence generated for {occurrence_date}",
            details={"source_id": source_id, "date": occurrence_date},
        )

    @staticmethod
    def recurring_skipped(
        source_id: str,
        occurrence_date: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_SKIPPED,
            severity=AuditSeverity.DEBUG,
            entity_type="transaction",
            entity_id=source_id,
            correlation_id=correlation_id,
            description=f"Occurrence on {occurrence_date} already exists",
            details={"date": occurrence_date},
        )

    @staticmethod
    def recurring_migrated(
        migrated_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECURRING_MIGRATED,
            entity_type="transaction",
            correlation_id=correlation_id,
            description=f"Assigned default interval to {migrated_count} recurring transactions",
            details={"migrated_count": migrated_count},
        )

    @staticmethod
    def budget_saved(
        budget_id: str,
        category: str,
        month: str,
        limit: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_SAVED,
            entity_type="budget",
            entity_id=budget_id,
            correlation_id=correlation_id,
            description=f"Budget for {category} ({month}) set to {limit}",
            details={"category": category, "month": month, "limit": limit},
            is_user_action=True,
        )

    @staticmethod
    def budget_alert_requested(
        category: str,
        spent_amount: str,
        limit: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_ALERT_REQUESTED,
            severity=AuditSeverity.WARNING,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"{category} spend {spent_amount} reached alert threshold of {limit}",
            details={
                "category": category,
                "spent_amount": spent_amount,
                "limit": limit,
            },
        )

    @staticmethod
    def goal_saved(
        goal_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_SAVED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description=f"Savings goal saved: {name}",
            is_user_action=True,
        )

    @staticmethod
    def goal_funded(
        goal_id: str,
        amount: str,
        new_total: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_FUNDED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description=f"Added {amount} to goal",
            details={"amount": amount, "current_amount": new_total},
            is_user_action=True,
        )

    @staticmethod
    def goal_deleted(
        goal_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.GOAL_DELETED,
            entity_type="goal",
            entity_id=goal_id,
            correlation_id=correlation_id,
            description="Savings goal deleted",
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Storage operation failed: {operation}",
            details={"operation": operation},
            error_message=error_message,
        )
