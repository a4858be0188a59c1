"""
Main Orchestrator for Expenzo

This module ties together all the components and defines the
end-to-end flows for:
1. Session start (migrate → generate recurring occurrences)
2. Ledger mutations (persist → check budget alert)
3. Analytics (snapshot → aggregate → score / detect / suggest)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Analytics never mutate the ledger
- Every mutation goes through storage, then the alert trigger
- Every step is audited

This is the "glue" the screens call into; everything below it is either
a pure function or a collaborator behind an interface.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Optional

import structlog

from expenzo.alerts import BudgetAlertTrigger
from expenzo.analytics import (
    budget_status,
    calculate_financial_health_score,
    current_month_key,
    detect_spending_spikes,
    detect_wasteful_expenses,
    expenses_by_category,
    goal_progress,
    monthly_trend,
    suggest_budget,
    transactions_in_month,
)
from expenzo.audit import AuditLogger, configure_logging, create_correlation_id
from expenzo.config import Settings, get_settings
from expenzo.export import export_transactions_csv
from expenzo.models.insights import (
    BudgetAlert,
    BudgetStatus,
    FinancialHealthScore,
    GoalProgress,
    MonthlyTrendPoint,
    WastefulExpense,
)
from expenzo.models.ledger import Budget, SavingsGoal, Transaction
from expenzo.recurrence import RecurrenceGenerator, migrate_recurring_intervals
from expenzo.services.notifications import LogNotifier, NotificationInterface
from expenzo.services.storage import (
    InMemoryAuditStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
    open_ledger,
    seed_demo_data,
)


logger = structlog.get_logger(__name__)


class LedgerService:
    """
    Mutations of the ledger.

    Flow for a transaction write:
    1. Persist → append or replace in storage
    2. Audit → record what changed
    3. Alert → the Budget Alert Trigger recomputes spend and may notify

    Storage errors are audited and re-raised; the caller decides what the
    user sees.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        notifier: NotificationInterface,
        audit_logger: Optional[AuditLogger] = None,
        seed_demo: bool = False,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._alert_trigger = BudgetAlertTrigger(storage, notifier, self._audit_logger)
        self._generator = RecurrenceGenerator(storage, self._audit_logger)
        self._seed_demo = seed_demo

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def start_session(self, today: Optional[date] = None) -> list[Transaction]:
        """
        Prepare the ledger before anything is rendered.

        Seeds the demo ledger when enabled, migrates recurring records
        without an interval, then generates due recurring occurrences.

        Returns:
            Transactions generated by the recurrence run
        """
        if self._seed_demo:
            seeded = seed_demo_data(self._storage)
            if any(seeded.values()):
                logger.info("demo_data_seeded", **seeded)

        migrate_recurring_intervals(self._storage, self._audit_logger)
        return self._generator.run(today)

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(self, transaction: Transaction) -> Optional[BudgetAlert]:
        """
        Persist a new transaction and check its budget.

        Returns:
            The budget alert requested, if any
        """
        try:
            self._storage.append_transaction(transaction)
        except StorageError as e:
            self._audit_logger.log_storage_error("append_transaction", str(e))
            raise

        self._audit_logger.log_transaction_added(
            transaction_id=transaction.id,
            category=transaction.category,
            amount=transaction.amount,
        )
        return self._alert_trigger.check(transaction)

    def update_transaction(
        self,
        transaction_id: str,
        transaction: Transaction,
    ) -> Optional[BudgetAlert]:
        """
        Replace a transaction by id and check its budget.

        Raises:
            NotFoundError: If no transaction has that id
        """
        try:
            self._storage.replace_transaction(transaction_id, transaction)
        except NotFoundError:
            raise
        except StorageError as e:
            self._audit_logger.log_storage_error("replace_transaction", str(e))
            raise

        self._audit_logger.log_transaction_updated(transaction_id)
        return self._alert_trigger.check(transaction)

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction. Deleting never triggers an alert."""
        removed = self._storage.remove_transaction(transaction_id)
        if removed:
            self._audit_logger.log_transaction_deleted(transaction_id)
        return removed

    # -------------------------------------------------------------------------
    # Budgets
    # -------------------------------------------------------------------------

    def set_budget(
        self,
        category: str,
        limit: Decimal,
        today: Optional[date] = None,
    ) -> Budget:
        """
        Create or update the current month's budget for a category.

        An existing (category, month) budget only gets its limit replaced.
        A new budget starts with `spent` seeded from this month's expenses.
        """
        month = current_month_key(today)
        existing = next(
            (b for b in self._storage.list_budgets()
             if b.category == category and b.month == month),
            None,
        )

        if existing:
            budget = Budget.model_validate({**existing.model_dump(), "limit": limit})
            self._storage.replace_budget(existing.id, budget)
        else:
            spent = expenses_by_category(
                transactions_in_month(self._storage.list_transactions(), month)
            ).get(category, Decimal("0"))
            budget = Budget(category=category, limit=limit, month=month, spent=spent)
            self._storage.append_budget(budget)

        self._audit_logger.log_budget_saved(
            budget_id=budget.id,
            category=budget.category,
            month=budget.month,
            limit=budget.limit,
        )
        return budget

    def refresh_budget_spent(self) -> list[Budget]:
        """
        Recompute the cached `spent` of every budget from the ledger.

        Returns:
            The budgets whose cached value changed
        """
        transactions = self._storage.list_transactions()
        changed = []
        for budget in self._storage.list_budgets():
            spent = expenses_by_category(
                transactions_in_month(transactions, budget.month)
            ).get(budget.category, Decimal("0"))
            if spent != budget.spent:
                refreshed = budget.model_copy(update={"spent": spent})
                self._storage.replace_budget(budget.id, refreshed)
                changed.append(refreshed)
        return changed

    # -------------------------------------------------------------------------
    # Goals
    # -------------------------------------------------------------------------

    def add_goal(self, goal: SavingsGoal) -> SavingsGoal:
        self._storage.append_goal(goal)
        self._audit_logger.log_goal_saved(goal_id=goal.id, name=goal.name)
        return goal

    def add_funds(self, goal_id: str, amount: Decimal) -> SavingsGoal:
        """
        Add money to a goal. The only way `current_amount` changes.

        Raises:
            ValueError: If amount is not positive
            NotFoundError: If no goal has that id
        """
        amount = Decimal(str(amount))
        if amount <= 0:
            raise ValueError("Amount added to a goal must be positive")

        goal = next((g for g in self._storage.list_goals() if g.id == goal_id), None)
        if goal is None:
            raise NotFoundError(f"Goal not found: {goal_id}")

        funded = SavingsGoal.model_validate({
            **goal.model_dump(),
            "current_amount": goal.current_amount + amount,
        })
        self._storage.replace_goal(goal_id, funded)
        self._audit_logger.log_goal_funded(
            goal_id=goal_id,
            amount=amount,
            new_total=funded.current_amount,
        )
        return funded

    def delete_goal(self, goal_id: str) -> bool:
        removed = self._storage.remove_goal(goal_id)
        if removed:
            self._audit_logger.log_goal_deleted(goal_id)
        return removed


class AnalyticsService:
    """
    Read-only analytics over a fresh ledger snapshot.

    Each call pulls the collections it needs and delegates to the pure
    functions in `expenzo.analytics`. Nothing here writes.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        trend_months: int = 6,
        export_dir: Path = Path("exports"),
    ):
        self._storage = storage
        self._trend_months = trend_months
        self._export_dir = export_dir

    def health_score(self, today: Optional[date] = None) -> FinancialHealthScore:
        return calculate_financial_health_score(
            self._storage.list_transactions(),
            self._storage.list_budgets(),
            self._storage.list_goals(),
            today=today,
        )

    def spending_spikes(self, today: Optional[date] = None) -> list[str]:
        return detect_spending_spikes(self._storage.list_transactions(), today)

    def wasteful_expenses(self, today: Optional[date] = None) -> list[WastefulExpense]:
        return detect_wasteful_expenses(self._storage.list_transactions(), today)

    def suggest_budget(self, category: str, today: Optional[date] = None) -> int:
        return suggest_budget(self._storage.list_transactions(), category, today)

    def monthly_trend(
        self,
        months: Optional[int] = None,
        today: Optional[date] = None,
    ) -> list[MonthlyTrendPoint]:
        return monthly_trend(
            self._storage.list_transactions(),
            months or self._trend_months,
            today,
        )

    def expenses_by_category(self, month: Optional[str] = None) -> dict[str, Decimal]:
        """Category breakdown for one month (`YYYY-MM`), or all time when omitted."""
        transactions = self._storage.list_transactions()
        if month:
            transactions = transactions_in_month(transactions, month)
        return expenses_by_category(transactions)

    def budget_statuses(self, month: Optional[str] = None) -> list[BudgetStatus]:
        budgets = self._storage.list_budgets()
        if month:
            budgets = [b for b in budgets if b.month == month]
        return [budget_status(b) for b in budgets]

    def goal_progress(self, today: Optional[date] = None) -> list[GoalProgress]:
        return [goal_progress(g, today) for g in self._storage.list_goals()]

    def export_csv(
        self,
        directory: Optional[Path] = None,
        today: Optional[date] = None,
    ) -> Path:
        """Write all transactions, newest first, to a dated CSV file."""
        transactions = sorted(
            self._storage.list_transactions(),
            key=lambda t: t.date,
            reverse=True,
        )
        return export_transactions_csv(transactions, directory or self._export_dir, today)


def create_app_components(
    settings: Optional[Settings] = None,
    notifier: Optional[NotificationInterface] = None,
) -> tuple[LedgerService, AnalyticsService, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to wire from. Defaults to `get_settings()`.
        notifier: Alert delivery. Defaults to structured log warnings.

    Returns:
        (ledger_service, analytics_service, audit_logger)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    ledger_settings = settings.ledger

    configure_logging(app_settings.effective_log_level)

    storage = open_ledger(ledger_settings.path, indent=ledger_settings.indent)
    audit_logger = AuditLogger(
        InMemoryAuditStorage(),
        correlation_id=create_correlation_id(),
    )

    ledger_service = LedgerService(
        storage=storage,
        notifier=notifier or LogNotifier(),
        audit_logger=audit_logger,
        seed_demo=app_settings.seed_demo_data,
    )
    analytics_service = AnalyticsService(
        storage,
        trend_months=app_settings.trend_months,
        export_dir=app_settings.export_dir,
    )

    logger.info(
        "app_components_created",
        environment=app_settings.app_environment,
        ledger_path=str(ledger_settings.path) if ledger_settings.path else None,
    )
    return ledger_service, analytics_service, audit_logger
