"""
Core infrastructure package for the Medicaid Insights backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL connectivity via asyncpg for the precomputed aggregate tables

FastAPI dependencies live in medicaid_insights.core.dependencies and are imported
from there directly (they depend on the services layer, which itself imports
this package).

Usage Examples:
    from medicaid_insights.core import get_settings
    settings = get_settings()

    # Database pool lifecycle (in FastAPI lifespan)
    from medicaid_insights.core import init_db, close_db
"""

# =============================================================================
# Re-exports from medicaid_insights.core.config
# =============================================================================
from medicaid_insights.core.config import Settings, get_settings

# =============================================================================
# Re-exports from medicaid_insights.core.database
# =============================================================================
from medicaid_insights.core.database import init_db, close_db, get_db_pool, execute_query


__all__ = [
    # Configuration management (from config.py)
    'Settings',
    'get_settings',
    # Database pool lifecycle (from database.py)
    'init_db',
    'close_db',
    'get_db_pool',
    'execute_query',
]
