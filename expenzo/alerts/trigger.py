"""
Budget Alert Trigger

Evaluated after every transaction create/update. When an expense brings
its category's spend for the month to 80% of the budget or more, a
BudgetAlert is handed to the notifier.

CRITICAL: Spend is recomputed from the ledger. The budget's cached
`spent` is never trusted for the threshold check.

There is no de-duplication: every qualifying mutation alerts again.
"""

from decimal import Decimal
from typing import Optional

from expenzo.analytics.aggregation import ZERO, transactions_in_month
from expenzo.audit.logger import AuditLogger
from expenzo.models.insights import BudgetAlert
from expenzo.models.ledger import Budget, Transaction
from expenzo.services.notifications import NotificationInterface
from expenzo.services.storage import LedgerStorageInterface


ALERT_RATIO = Decimal("0.8")


class BudgetAlertTrigger:
    """Checks a mutated transaction against its category's monthly budget."""

    def __init__(
        self,
        storage: LedgerStorageInterface,
        notifier: NotificationInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._notifier = notifier
        self._audit = audit_logger or AuditLogger()

    def _find_budget(self, transaction: Transaction) -> Optional[Budget]:
        for budget in self._storage.list_budgets():
            if budget.category == transaction.category and budget.month == transaction.month_key:
                return budget
        return None

    def check(self, transaction: Transaction) -> Optional[BudgetAlert]:
        """
        Request an alert if `transaction` pushed its budget past the threshold.

        Returns:
            The alert that was requested, or None
        """
        if not transaction.is_expense:
            return None

        budget = self._find_budget(transaction)
        if budget is None:
            return None

        with self._storage.transactions_lock():
            month = transactions_in_month(self._storage.list_transactions(), budget.month)
            spent = sum(
                (t.amount for t in month
                 if t.is_expense and t.category == budget.category),
                ZERO,
            )

        if spent < budget.limit * ALERT_RATIO:
            return None

        alert = BudgetAlert(category=budget.category, spent_amount=spent, limit=budget.limit)
        self._audit.log_budget_alert_requested(
            category=alert.category,
            spent_amount=alert.spent_amount,
            limit=alert.limit,
        )
        self._notifier.request_budget_alert(alert)
        return alert
