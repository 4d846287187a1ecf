"""
FastAPI dependency injection module for the Medicaid Insights backend.

Provides reusable dependencies for configuration access, the application-wide
Aggregate Store, and the engine configuration structures derived from Settings.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_aggregate_store: Returns the store loaded at startup
- get_outlier_config: OutlierConfig built from Settings
- get_insight_config: InsightConfig with the published defaults
- SettingsDep / StoreDep / OutlierConfigDep / InsightConfigDep: Annotated aliases

Usage Examples:
    @router.get("/charts")
    async def get_charts(store: StoreDep) -> AggregateSnapshot:
        return store.get_snapshot()

    # In tests
    app.dependency_overrides[get_aggregate_store] = lambda: AggregateStore(snapshot)
"""

from typing import Annotated, Optional

from fastapi import Depends

from medicaid_insights.core.config import Settings, get_settings
from medicaid_insights.models import InsightConfig, OutlierConfig
from medicaid_insights.services.aggregate_store import AggregateStore


# =============================================================================
# Aggregate Store Singleton
# =============================================================================

# Replaced by the lifespan handler once a source has been loaded
_store: Optional[AggregateStore] = None


def set_aggregate_store(store: Optional[AggregateStore]) -> None:
    global _store
    _store = store


def get_aggregate_store() -> AggregateStore:
    """
    Return the application-wide Aggregate Store.

    An empty store is created on first use when startup has not loaded one,
    so every endpoint still answers (with rules silent).
    """
    global _store

    if _store is None:
        _store = AggregateStore()

    return _store


# =============================================================================
# Settings and Engine Configuration
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can use
    app.dependency_overrides[get_settings_dependency].
    """
    return get_settings()


def get_outlier_config(settings: Annotated[Settings, Depends(get_settings_dependency)]) -> OutlierConfig:
    return settings.outlier_config()


def get_insight_config() -> InsightConfig:
    return InsightConfig()


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

StoreDep = Annotated[AggregateStore, Depends(get_aggregate_store)]

OutlierConfigDep = Annotated[OutlierConfig, Depends(get_outlier_config)]

InsightConfigDep = Annotated[InsightConfig, Depends(get_insight_config)]
