"""
FastAPI router for federal funding analysis.

Endpoints:
- GET /federal: FMAP ranking, expansion comparison, congressional district
  spending and district outliers
- GET /federal/quartiles: states grouped by FY2024 FMAP quartile with average
  per-capita spending
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from medicaid_insights.core.dependencies import OutlierConfigDep, StoreDep
from medicaid_insights.models import FederalResponse, FmapQuartile
from medicaid_insights.services.federal import build_federal_response, fmap_quartiles

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/federal", tags=["federal"])


@router.get("", response_model=FederalResponse)
async def get_federal(store: StoreDep, config: OutlierConfigDep) -> FederalResponse:
    """
    District spending is the snapshot's state spending split evenly across
    each state's districts.

    Raises:
        HTTPException 500: If the analysis fails
    """
    try:
        return build_federal_response(store.get_snapshot().topStates, config)
    except Exception as e:
        logger.error(f"Error building federal analysis: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error building federal analysis: {str(e)}",
        )


@router.get("/quartiles", response_model=List[FmapQuartile])
async def get_fmap_quartiles(store: StoreDep) -> List[FmapQuartile]:
    try:
        return fmap_quartiles(store.get_snapshot().topStates)
    except Exception as e:
        logger.error(f"Error computing FMAP quartiles: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error computing FMAP quartiles: {str(e)}",
        )
