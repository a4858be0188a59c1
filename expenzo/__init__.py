"""
Expenzo - Finance Core Package

The analytics and rules engine of a personal expense tracker: health
scoring, budget alerts, spending-spike and waste detection, budget
suggestions and recurring-transaction generation.

DESIGN PRINCIPLES:
1. Analytics are pure functions over a ledger snapshot
2. Associations are computed by matching values, never stored
3. Recurrence is idempotent and advances one step per run
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expenzo Team"
