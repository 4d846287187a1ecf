"""
FastAPI router for narrative insights.

Endpoints:
- GET /insights: run the 14-rule catalog over the current snapshot
- POST /insights: run the catalog over a posted snapshot (what-if and tests)

Both return InsightsResponse: the insights in catalog order plus per-category
counts for the executive summary.
"""

import logging

from fastapi import APIRouter, HTTPException

from medicaid_insights.core.dependencies import InsightConfigDep, StoreDep
from medicaid_insights.models import AggregateSnapshot, InsightsResponse
from medicaid_insights.services.insights import build_insights_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("", response_model=InsightsResponse)
async def get_insights(store: StoreDep, config: InsightConfigDep) -> InsightsResponse:
    """
    Generate insights for the current snapshot.

    Rules whose minimum-data precondition is unmet are left out, so an empty
    store yields an empty list rather than an error.

    Raises:
        HTTPException 500: If insight generation fails
    """
    try:
        return build_insights_response(store.get_snapshot(), config)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating insights: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error generating insights: {str(e)}",
        )


@router.post("", response_model=InsightsResponse)
async def generate_insights_for_snapshot(
    snapshot: AggregateSnapshot,
    config: InsightConfigDep,
) -> InsightsResponse:
    """Generate insights for a posted snapshot (malformed bodies are rejected with 422)."""
    try:
        return build_insights_response(snapshot, config)
    except Exception as e:
        logger.error(f"Error generating insights for posted snapshot: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error generating insights: {str(e)}",
        )
