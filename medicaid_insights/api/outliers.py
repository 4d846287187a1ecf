"""
FastAPI router for statistical outliers.

Endpoints:
- GET /outliers?source=curated|computed: the editorial catalog, or runtime
  detection over the snapshot's provider and procedure code populations
- POST /outliers/detect: classify an arbitrary posted candidate population

Detection uses population mean and standard deviation with a strict
z > threshold (3.0 unless configured otherwise).
"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Query

from medicaid_insights.core.dependencies import OutlierConfigDep, StoreDep
from medicaid_insights.models import (
    DetectOutliersRequest,
    OutlierEntry,
    OutlierReport,
    OutlierSource,
)
from medicaid_insights.services.outliers import (
    computed_outlier_report,
    curated_outlier_report,
    detect_outliers,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/outliers", tags=["outliers"])


@router.get("", response_model=OutlierReport)
async def get_outliers(
    store: StoreDep,
    config: OutlierConfigDep,
    source: OutlierSource = Query(
        default=OutlierSource.CURATED,
        description="curated catalog or runtime detection over the snapshot",
    ),
) -> OutlierReport:
    """
    Return outliers per population.

    Both sources produce the same report shape; `source` on the report and on
    every entry tells them apart.

    Raises:
        HTTPException 500: If outlier classification fails
    """
    try:
        if source == OutlierSource.COMPUTED:
            return computed_outlier_report(store.get_snapshot(), config)
        return curated_outlier_report(config)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error building {source.value} outlier report: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error building outlier report: {str(e)}",
        )


@router.post("/detect", response_model=List[OutlierEntry])
async def detect_outliers_endpoint(
    request: DetectOutliersRequest,
    config: OutlierConfigDep,
) -> List[OutlierEntry]:
    """
    Classify a posted candidate population.

    An empty or zero-variance population returns an empty list.

    Raises:
        HTTPException 400: If the threshold override is not positive
        HTTPException 500: If classification fails
    """
    if request.threshold is not None and request.threshold <= 0:
        raise HTTPException(status_code=400, detail="threshold must be positive")

    try:
        if request.threshold is not None:
            config = config.model_copy(update={"threshold": request.threshold})
        return detect_outliers(request.candidates, request.population, config)
    except Exception as e:
        logger.error(f"Error detecting outliers: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error detecting outliers: {str(e)}",
        )
