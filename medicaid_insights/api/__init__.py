"""
API package initialization.

This package contains FastAPI router modules for the Medicaid Insights engine:
- charts: the current Aggregate Store snapshot
- insights: narrative insights over the current or a posted snapshot
- outliers: curated and computed z-score outliers, ad-hoc detection
- federal: FMAP, expansion status and congressional district analysis
"""

from fastapi import APIRouter

from medicaid_insights.api.charts import router as charts_router
from medicaid_insights.api.insights import router as insights_router
from medicaid_insights.api.outliers import router as outliers_router
from medicaid_insights.api.federal import router as federal_router

# Every router carries its own prefix
api_router = APIRouter()
api_router.include_router(charts_router)
api_router.include_router(insights_router)
api_router.include_router(outliers_router)
api_router.include_router(federal_router)

__all__ = [
    "api_router",
    "charts_router",
    "insights_router",
    "outliers_router",
    "federal_router",
]
