"""
Recurrence Generator

Materializes the next occurrence of every recurring transaction once it
is due. Runs once per session, before anything reads the ledger.

RULES:
1. Next occurrence = the source's own date plus one interval
   (monthly when the source has none)
2. Only due occurrences are created (next date on or before today)
3. At most ONE step per source per run - missed periods are caught up
   gradually by later runs, never in a burst
4. An occurrence is skipped when a transaction with the same description,
   amount, type and date already exists
5. Every generated transaction is itself recurring, so chains continue

The whole history is scanned on every run. Lookups go through an index of
(description, amount, type, date) built once from the ledger as it was
before the run. Entries created during the run are not added to it, so
identical sources each produce their own occurrence.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

import structlog
from dateutil.relativedelta import relativedelta

from expenzo.audit.logger import AuditLogger
from expenzo.models.ledger import (
    DEFAULT_RECURRING_INTERVAL,
    RecurringInterval,
    Transaction,
    TransactionType,
    new_entity_id,
)
from expenzo.services.storage import LedgerStorageInterface


logger = structlog.get_logger(__name__)

OccurrenceKey = tuple[str, Decimal, TransactionType, date]


def next_occurrence(day: date, interval: Optional[RecurringInterval]) -> date:
    """
    One interval after `day`.

    Month and year steps clamp to the end of a shorter month
    (Jan 31 -> Feb 28, Feb 29 -> Feb 28 of the next year). They never
    overflow into the following month the way a day-of-month carry would
    (Jan 31 -> Mar 3).
    """
    interval = interval or DEFAULT_RECURRING_INTERVAL
    if interval == RecurringInterval.DAILY:
        return day + timedelta(days=1)
    if interval == RecurringInterval.WEEKLY:
        return day + timedelta(weeks=1)
    if interval == RecurringInterval.MONTHLY:
        return day + relativedelta(months=1)
    if interval == RecurringInterval.YEARLY:
        return day + relativedelta(years=1)
    raise ValueError(f"Unknown recurring interval: {interval}")


def _occurrence_key(description: str, amount: Decimal, type: TransactionType, day: date) -> OccurrenceKey:
    return (description, amount, type, day)


class RecurrenceGenerator:
    """
    Appends due recurring occurrences to the ledger.

    The whole check-then-append holds the ledger's transaction lock.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit = audit_logger or AuditLogger()

    def run(self, today: Optional[date] = None) -> list[Transaction]:
        """
        Generate every due occurrence.

        Returns:
            The transactions appended by this run, in source order
        """
        today = today or date.today()
        generated: list[Transaction] = []

        with self._storage.transactions_lock():
            transactions = self._storage.list_transactions()
            existing = {
                _occurrence_key(t.description, t.amount, t.type, t.date)
                for t in transactions
            }

            for source in transactions:
                if not source.is_recurring:
                    continue

                interval = source.effective_interval
                next_date = next_occurrence(source.date, interval)
                if next_date > today:
                    continue

                key = _occurrence_key(source.description, source.amount, source.type, next_date)
                if key in existing:
                    self._audit.log_recurring_skipped(
                        source_id=source.id,
                        occurrence_date=next_date.isoformat(),
                    )
                    continue

                occurrence = source.model_copy(update={
                    "id": new_entity_id(),
                    "date": next_date,
                    "is_recurring": True,
                    "recurring_interval": interval,
                })
                self._storage.append_transaction(occurrence)
                generated.append(occurrence)

                self._audit.log_recurring_generated(
                    transaction_id=occurrence.id,
                    source_id=source.id,
                    occurrence_date=next_date.isoformat(),
                )

        if generated:
            logger.info("recurring_transactions_generated", count=len(generated))
        return generated


def migrate_recurring_intervals(
    storage: LedgerStorageInterface,
    audit_logger: Optional[AuditLogger] = None,
) -> int:
    """
    Give recurring transactions without an interval the default (monthly).

    Older ledgers stored recurring records before intervals existed.

    Returns:
        Number of transactions rewritten
    """
    migrated = 0
    with storage.transactions_lock():
        for t in storage.list_transactions():
            if t.is_recurring and t.recurring_interval is None:
                storage.replace_transaction(
                    t.id,
                    t.model_copy(update={"recurring_interval": DEFAULT_RECURRING_INTERVAL}),
                )
                migrated += 1

    if migrated:
        (audit_logger or AuditLogger()).log_recurring_migrated(migrated_count=migrated)
    return migrated
