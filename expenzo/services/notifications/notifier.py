"""
Notification Service

DESIGN DECISION: The core never shows anything to the user itself.
It hands a BudgetAlert to a notifier and moves on (fire-and-forget).
How the alert reaches the user is up to the notifier.

Failures raised by a notifier propagate to the caller. There is no retry.
"""

from abc import ABC, abstractmethod

import structlog

from expenzo.models.insights import BudgetAlert


class NotificationInterface(ABC):
    """Receives budget alert requests from the rules engine."""

    @abstractmethod
    def request_budget_alert(self, alert: BudgetAlert) -> None:
        pass


class LogNotifier(NotificationInterface):
    """Delivers alerts as structured warning logs."""

    def __init__(self):
        self._logger = structlog.get_logger(__name__)

    def request_budget_alert(self, alert: BudgetAlert) -> None:
        self._logger.warning(
            "budget_alert",
            category=alert.category,
            spent_amount=str(alert.spent_amount),
            limit=str(alert.limit),
            message=alert.message(),
        )


class CollectingNotifier(NotificationInterface):
    """Keeps every requested alert in memory, in request order."""

    def __init__(self):
        self.alerts: list[BudgetAlert] = []

    def request_budget_alert(self, alert: BudgetAlert) -> None:
        self.alerts.append(alert)

    def clear(self) -> None:
        self.alerts.clear()
