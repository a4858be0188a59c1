"""Query execution package."""

from expenzo.queries.executor import QueryExecutor, matches_search

__all__ = ["QueryExecutor", "matches_search"]
