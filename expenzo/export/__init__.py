"""Ledger export package."""

from expenzo.export.csv_export import (
    CSV_HEADERS,
    export_filename,
    export_transactions_csv,
    transactions_to_csv,
)

__all__ = [
    "CSV_HEADERS",
    "export_filename",
    "export_transactions_csv",
    "transactions_to_csv",
]
