"""Recurring transaction generation."""

from expenzo.recurrence.generator import (
    RecurrenceGenerator,
    migrate_recurring_intervals,
    next_occurrence,
)

__all__ = [
    "RecurrenceGenerator",
    "migrate_recurring_intervals",
    "next_occurrence",
]
