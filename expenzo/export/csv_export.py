"""
CSV Export

Flattens transactions into a spreadsheet-friendly CSV, one row per
transaction in the order given.
"""

import csv
import io
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional

import structlog

from expenzo.models.ledger import Transaction


logger = structlog.get_logger(__name__)

CSV_HEADERS = ["Date", "Type", "Category", "Description", "Amount", "Recurring"]


def _transaction_to_row(t: Transaction) -> list[str]:
    return [
        t.date.isoformat(),
        t.type.value,
        t.category,
        t.description,
        str(t.amount.quantize(Decimal("0.01"))),
        "Yes" if t.is_recurring else "No",
    ]


def transactions_to_csv(transactions: Iterable[Transaction]) -> str:
    """Render transactions as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for t in transactions:
        writer.writerow(_transaction_to_row(t))
    return buffer.getvalue()


def export_filename(today: Optional[date] = None) -> str:
    return f"expenzo_transactions_{(today or date.today()).isoformat()}.csv"


def export_transactions_csv(
    transactions: Iterable[Transaction],
    directory: Path,
    today: Optional[date] = None,
) -> Path:
    """
    Write the CSV export into `directory` (created if missing).

    Returns:
        Path of the written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(today)

    transactions = list(transactions)
    path.write_text(transactions_to_csv(transactions), encoding="utf-8")

    logger.info("transactions_exported", path=str(path), count=len(transactions))
    return path
