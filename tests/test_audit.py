"""
Tests for the audit logger and notifiers.
"""

from decimal import Decimal
from uuid import uuid4

from expenzo.audit import AuditLogger, create_correlation_id
from expenzo.models.audit import AuditEventBuilder, AuditEventType
from expenzo.models.insights import BudgetAlert
from expenzo.services.notifications import CollectingNotifier, LogNotifier
from expenzo.services.storage import AuditStorageInterface


class BrokenAuditStorage(AuditStorageInterface):
    def append_event(self, event):
        raise OSError("read-only file system")

    def get_recent_events(self, limit=100):
        return []


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_local_only_logging_succeeds(self):
        """Test logging without storage reports success."""
        assert AuditLogger().log(AuditEventBuilder.goal_deleted(goal_id="g1")) is True

    def test_persists_to_storage(self, audit_logger, audit_storage):
        """Test events reach the audit store."""
        audit_logger.log_transaction_added("t1", "Travel", Decimal("12.50"))

        [event] = audit_storage.get_recent_events()
        assert event.event_type == AuditEventType.TRANSACTION_ADDED
        assert event.details == {"category": "Travel", "amount": "12.50"}

    def test_storage_failure_is_swallowed(self):
        """Test a failing audit store never breaks the caller."""
        logger = AuditLogger(BrokenAuditStorage())
        assert logger.log(AuditEventBuilder.goal_deleted(goal_id="g1")) is False

    def test_default_correlation_id_is_stamped(self, audit_storage):
        """Test events without a correlation id get the logger's."""
        correlation_id = create_correlation_id()
        logger = AuditLogger(audit_storage, correlation_id=correlation_id)
        logger.log_goal_saved("g1", "Car")

        assert audit_storage.get_recent_events()[0].correlation_id == correlation_id

    def test_explicit_correlation_id_is_kept(self, audit_storage):
        """Test an event's own correlation id wins."""
        own = uuid4()
        logger = AuditLogger(audit_storage, correlation_id=uuid4())
        logger.log(AuditEventBuilder.goal_deleted(goal_id="g1", correlation_id=own))

        assert audit_storage.get_recent_events()[0].correlation_id == own


class TestNotifiers:
    """Tests for notification collaborators."""

    def test_collecting_notifier_keeps_order(self):
        """Test alerts are kept in request order."""
        notifier = CollectingNotifier()
        first = BudgetAlert(category="A", spent_amount=Decimal("8"), limit=Decimal("10"))
        second = BudgetAlert(category="B", spent_amount=Decimal("9"), limit=Decimal("10"))
        notifier.request_budget_alert(first)
        notifier.request_budget_alert(second)

        assert notifier.alerts == [first, second]
        notifier.clear()
        assert notifier.alerts == []

    def test_log_notifier_does_not_raise(self):
        """Test the log notifier accepts an alert."""
        alert = BudgetAlert(category="Travel", spent_amount=Decimal("90"), limit=Decimal("100"))
        assert LogNotifier().request_budget_alert(alert) is None
