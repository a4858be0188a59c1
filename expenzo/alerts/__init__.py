"""Budget alerting."""

from expenzo.alerts.trigger import ALERT_RATIO, BudgetAlertTrigger

__all__ = ["ALERT_RATIO", "BudgetAlertTrigger"]
