"""
FastAPI router for the chart payload.

GET /charts returns the current Aggregate Store snapshot unchanged: every slice
the dashboard charts render, in upstream ranking order.
"""

import logging

from fastapi import APIRouter, HTTPException

from medicaid_insights.core.dependencies import StoreDep
from medicaid_insights.models import AggregateSnapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/charts", tags=["charts"])


@router.get("", response_model=AggregateSnapshot)
async def get_charts(store: StoreDep) -> AggregateSnapshot:
    """
    Return the current snapshot.

    Raises:
        HTTPException 500: If the store cannot provide a snapshot
    """
    try:
        return store.get_snapshot()
    except Exception as e:
        logger.error(f"Error reading aggregate snapshot: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error reading aggregate snapshot: {str(e)}",
        )
