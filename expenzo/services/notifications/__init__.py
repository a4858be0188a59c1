"""Notification services package."""

from expenzo.services.notifications.notifier import (
    CollectingNotifier,
    LogNotifier,
    NotificationInterface,
)

__all__ = [
    "CollectingNotifier",
    "LogNotifier",
    "NotificationInterface",
]
