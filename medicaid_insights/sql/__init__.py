"""
SQL Query Module.

Read-only queries over the precomputed aggregate tables that back the
Aggregate Store when DATABASE_URL is configured.

Example usage:
    from medicaid_insights.sql import SLICE_QUERIES, TOTAL_SPENDING_QUERY
"""

from medicaid_insights.sql.aggregate_queries import (
    SLICE_QUERIES,
    TOTAL_SPENDING_QUERY,
    TOP_K,
    TOP_CITIES_LIMIT,
)

__all__ = [
    'SLICE_QUERIES',
    'TOTAL_SPENDING_QUERY',
    'TOP_K',
    'TOP_CITIES_LIMIT',
]
