"""
Integration tests for the ledger and analytics services.

Flows run end to end against in-memory storage and a collecting notifier.
"""

import logging
from datetime import date
from decimal import Decimal

import pytest

from expenzo.config import Settings
from expenzo.models.audit import AuditEventType
from expenzo.models.ledger import RecurringInterval, TransactionType
from expenzo.orchestrator import AnalyticsService, LedgerService, create_app_components
from expenzo.services.notifications import CollectingNotifier
from expenzo.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    NotFoundError,
)


@pytest.fixture
def service(storage, notifier, audit_logger) -> LedgerService:
    return LedgerService(storage, notifier, audit_logger)


@pytest.fixture
def analytics(storage) -> AnalyticsService:
    return AnalyticsService(storage)


class TestLedgerService:
    """Tests for ledger mutations."""

    def test_start_session_migrates_then_generates(self, storage, service, make_transaction):
        """Test a legacy recurring record is migrated and advanced."""
        storage.append_transaction(make_transaction(
            "200",
            id="rent",
            category="Bills & Utilities",
            description="Rent",
            day=date(2026, 2, 10),
            is_recurring=True,
        ))

        generated = service.start_session(today=date(2026, 3, 15))

        assert [t.date for t in generated] == [date(2026, 3, 10)]
        by_id = {t.id: t for t in storage.list_transactions()}
        assert by_id["rent"].recurring_interval == RecurringInterval.MONTHLY

    def test_start_session_seeds_demo_data(self, storage, notifier, audit_logger):
        """Test demo seeding when enabled."""
        service = LedgerService(storage, notifier, audit_logger, seed_demo=True)
        generated = service.start_session(today=date(2026, 3, 1))

        assert len(storage.list_goals()) == 2
        # Salary on Feb 1 is due on Mar 1; the Feb 10 and Feb 5 bills aren't yet
        assert [t.description for t in generated] == ["Monthly Salary"]

    def test_add_transaction_triggers_alert(self, storage, service, notifier, make_transaction, make_budget):
        """Test persist-then-alert on add."""
        storage.append_budget(make_budget(limit="100"))
        alert = service.add_transaction(make_transaction("95"))

        assert alert is not None
        assert len(storage.list_transactions()) == 1
        assert notifier.alerts == [alert]

    def test_update_transaction_triggers_alert(self, storage, service, notifier, make_transaction, make_budget):
        """Test persist-then-alert on update."""
        storage.append_budget(make_budget(limit="100"))
        t = make_transaction("10")
        service.add_transaction(t)

        alert = service.update_transaction(t.id, t.model_copy(update={"amount": Decimal("90")}))

        assert alert.spent_amount == Decimal("90")
        assert len(notifier.alerts) == 1

    def test_update_unknown_transaction(self, service, make_transaction):
        """Test updates of missing ids raise."""
        with pytest.raises(NotFoundError):
            service.update_transaction("missing", make_transaction(id="missing"))

    def test_delete_transaction(self, service, audit_storage, make_transaction):
        """Test deletion is audited and reported."""
        t = make_transaction()
        service.add_transaction(t)

        assert service.delete_transaction(t.id) is True
        assert service.delete_transaction(t.id) is False
        types = [e.event_type for e in audit_storage.get_recent_events()]
        assert types.count(AuditEventType.TRANSACTION_DELETED) == 1

    def test_set_budget_creates_with_current_spend(self, storage, service, make_transaction):
        """Test a new budget is seeded with this month's spend."""
        storage.append_transaction(make_transaction("120", category="Shopping"))
        storage.append_transaction(make_transaction("80", category="Shopping", day=date(2026, 2, 1)))

        budget = service.set_budget("Shopping", Decimal("300"), today=date(2026, 3, 20))

        assert budget.month == "2026-03"
        assert budget.spent == Decimal("120")
        assert storage.list_budgets() == [budget]

    def test_set_budget_updates_existing_limit(self, storage, service, make_budget):
        """Test the (category, month) budget is updated in place."""
        existing = make_budget("Shopping", limit="100", spent="40")
        storage.append_budget(existing)

        updated = service.set_budget("Shopping", Decimal("250"), today=date(2026, 3, 20))

        assert updated.id == existing.id
        assert updated.limit == Decimal("250")
        assert updated.spent == Decimal("40")
        assert len(storage.list_budgets()) == 1

    def test_refresh_budget_spent(self, storage, service, make_transaction, make_budget):
        """Test cached spend is recomputed from the ledger."""
        storage.append_budget(make_budget(limit="500", spent="0"))
        storage.append_budget(make_budget("Travel", limit="500", spent="0"))
        storage.append_transaction(make_transaction("75"))

        changed = service.refresh_budget_spent()

        assert [b.category for b in changed] == ["Food & Dining"]
        spent = {b.category: b.spent for b in storage.list_budgets()}
        assert spent == {"Food & Dining": Decimal("75"), "Travel": Decimal("0")}

    def test_add_funds(self, storage, service, make_goal):
        """Test funding a goal raises its current amount."""
        goal = service.add_goal(make_goal(target="1000", current="100"))

        funded = service.add_funds(goal.id, Decimal("100"))

        assert funded.current_amount == Decimal("200")
        assert storage.list_goals()[0].current_amount == Decimal("200")

    def test_add_funds_float_keeps_json_ledger_readable(self, tmp_path, notifier, audit_logger, make_goal):
        """Test a float amount is stored at cent precision and reloads."""
        storage = JsonFileLedgerStorage(tmp_path / "ledger.json")
        service = LedgerService(storage, notifier, audit_logger)
        goal = service.add_goal(make_goal(target="1000", current="0"))

        funded = service.add_funds(goal.id, 10.1)

        assert funded.current_amount == Decimal("10.1")
        [reloaded] = storage.list_goals()
        assert reloaded.current_amount == Decimal("10.1")

    def test_add_funds_rejects_sub_cent_amounts(self, service, make_goal):
        """Test the funded goal is validated before it is saved."""
        goal = service.add_goal(make_goal(target="1000", current="0"))
        with pytest.raises(ValueError):
            service.add_funds(goal.id, Decimal("0.001"))
        assert service.storage.list_goals()[0].current_amount == Decimal("0")

    def test_add_funds_validation(self, service, make_goal):
        """Test non-positive amounts and unknown goals are rejected."""
        goal = service.add_goal(make_goal())
        with pytest.raises(ValueError):
            service.add_funds(goal.id, Decimal("0"))
        with pytest.raises(NotFoundError):
            service.add_funds("missing", Decimal("10"))

    def test_delete_goal(self, storage, service, make_goal):
        """Test goal deletion."""
        goal = service.add_goal(make_goal())
        assert service.delete_goal(goal.id) is True
        assert storage.list_goals() == []


class TestAnalyticsService:
    """Tests for the read-only analytics facade."""

    def test_health_score(self, storage, analytics, make_transaction, today):
        """Test the facade reads the ledger snapshot."""
        storage.append_transaction(make_transaction("5000", type=TransactionType.INCOME, category="Salary"))
        storage.append_transaction(make_transaction("3500", category="Bills & Utilities"))

        assert analytics.health_score(today).score == 60

    def test_suggest_budget_default(self, analytics, today):
        """Test the default suggestion via the facade."""
        assert analytics.suggest_budget("Travel", today) == 500

    def test_monthly_trend_uses_configured_months(self, storage, today):
        """Test the trend length comes from settings."""
        analytics = AnalyticsService(storage, trend_months=4)
        assert len(analytics.monthly_trend(today=today)) == 4
        assert len(analytics.monthly_trend(months=2, today=today)) == 2

    def test_expenses_by_category_for_month(self, storage, analytics, make_transaction):
        """Test the month filter on the breakdown."""
        storage.append_transaction(make_transaction("10", day=date(2026, 3, 1)))
        storage.append_transaction(make_transaction("20", day=date(2026, 2, 1)))

        assert analytics.expenses_by_category("2026-03") == {"Food & Dining": Decimal("10")}
        assert analytics.expenses_by_category() == {"Food & Dining": Decimal("30")}

    def test_budget_statuses_and_goal_progress(self, storage, analytics, make_budget, make_goal, today):
        """Test derived progress for every budget and goal."""
        storage.append_budget(make_budget(limit="100", spent="90"))
        storage.append_goal(make_goal(target="1000", current="500"))

        [status] = analytics.budget_statuses("2026-03")
        [progress] = analytics.goal_progress(today)

        assert status.state.value == "near_limit"
        assert progress.percent == Decimal("50")

    def test_spikes_and_waste(self, storage, analytics, make_transaction, today):
        """Test detectors via the facade."""
        storage.append_transaction(make_transaction("100", category="Shopping", day=date(2026, 2, 1)))
        storage.append_transaction(make_transaction("200", category="Shopping"))
        storage.append_transaction(make_transaction("301", category="Entertainment"))

        assert len(analytics.spending_spikes(today)) == 1
        assert [w.category for w in analytics.wasteful_expenses(today)] == ["Entertainment"]

    def test_export_csv(self, storage, tmp_path, make_transaction, today):
        """Test the export writes newest first."""
        analytics = AnalyticsService(storage, export_dir=tmp_path)
        storage.append_transaction(make_transaction("1", description="old", day=date(2026, 1, 1)))
        storage.append_transaction(make_transaction("2", description="new", day=date(2026, 3, 1)))

        path = analytics.export_csv(today=today)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert path.name == "expenzo_transactions_2026-03-15.csv"
        assert lines[1].startswith("2026-03-01")
        assert lines[2].startswith("2026-01-01")


class TestCreateAppComponents:
    """Tests for the component factory."""

    def test_in_memory_by_default(self, monkeypatch):
        """Test no ledger path gives an in-memory ledger."""
        monkeypatch.delenv("EXPENZO_LEDGER_PATH", raising=False)
        notifier = CollectingNotifier()

        ledger_service, analytics_service, audit_logger = create_app_components(
            Settings(), notifier=notifier,
        )

        assert isinstance(ledger_service.storage, InMemoryLedgerStorage)
        assert audit_logger.correlation_id is not None

    def test_json_ledger_when_path_configured(self, monkeypatch, tmp_path):
        """Test the configured path selects the JSON file ledger."""
        monkeypatch.setenv("EXPENZO_LEDGER_PATH", str(tmp_path / "ledger.json"))
        monkeypatch.setenv("EXPENZO_SEED_DEMO_DATA", "true")

        ledger_service, analytics_service, _ = create_app_components(Settings())
        ledger_service.start_session(today=date(2026, 2, 20))

        assert isinstance(ledger_service.storage, JsonFileLedgerStorage)
        assert (tmp_path / "ledger.json").exists()
        assert len(analytics_service.goal_progress(date(2026, 2, 20))) == 2

    def test_debug_mode_sets_root_log_level(self, monkeypatch):
        """Test debug mode lowers the root logger to DEBUG."""
        monkeypatch.delenv("EXPENZO_LEDGER_PATH", raising=False)
        monkeypatch.setenv("EXPENZO_DEBUG_MODE", "true")
        root = logging.getLogger()
        monkeypatch.setattr(root, "level", root.level)

        create_app_components(Settings(), notifier=CollectingNotifier())

        assert root.level == logging.DEBUG
