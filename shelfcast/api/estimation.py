import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from shelfcast.models.estimation import EstimationResult, InvalidEstimationInput
from shelfcast.schemas.estimation import (
    BatchEstimationRequest,
    BatchEstimationResponse,
    CategoryDefaultResponse,
    EstimationRequest,
    EstimationResponse,
)
from shelfcast.services.date_estimator import DateEstimator
from shelfcast.services.expiry_status import expiry_status
from shelfcast.services.rule_table import CATEGORY_RULES

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/estimation", tags=["Estimation"])


def get_estimator(request: Request) -> DateEstimator:
    """Estimator created in the app lifespan (shares one HTTP client)"""
    estimator = getattr(request.app.state, "estimator", None)
    if estimator is None:
        estimator = DateEstimator()
    return estimator


def _to_response(result: EstimationResult, include_status: bool, today: Optional[date]) -> EstimationResponse:
    status = expiry_status(result, today=today) if include_status else None
    return EstimationResponse.from_result(result, status)


@router.post("/estimate", response_model=EstimationResponse, response_model_exclude_none=True)
async def estimate_item(
    request: EstimationRequest,
    include_status: bool = Query(False, description="Attach expiring-soon / restock-due flags"),
    today: Optional[date] = Query(None, description="Reference date for status (defaults to today)"),
    estimator: DateEstimator = Depends(get_estimator)
):
    """
    Estimate expiration and restock dates for one purchased item.
    Oracle outages only show up as source == "heuristic".
    """
    try:
        result = await estimator.estimate(request.to_input())
    except InvalidEstimationInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    return _to_response(result, include_status, today)


@router.post("/estimate/batch", response_model=BatchEstimationResponse, response_model_exclude_none=True)
async def estimate_batch(
    request: BatchEstimationRequest,
    include_status: bool = Query(False),
    today: Optional[date] = Query(None),
    estimator: DateEstimator = Depends(get_estimator)
):
    """Estimate every item of a receipt; results keep the request order"""
    logger.info(f"Batch estimation request: {len(request.items)} items")

    try:
        items = [item.to_input() for item in request.items]
    except InvalidEstimationInput as e:
        raise HTTPException(status_code=422, detail=str(e))

    results = await estimator.estimate_batch(items)

    return BatchEstimationResponse(
        results=[_to_response(result, include_status, today) for result in results]
    )


@router.get("/categories", response_model=List[CategoryDefaultResponse])
def list_categories():
    """Known categories with their default horizons, in rule-table order"""
    return [
        CategoryDefaultResponse(
            category=rule.category,
            shelf_life_days=rule.default.shelf_life_days,
            restock_days=rule.default.restock_days,
            keywords=[keyword for keyword, _ in rule.keyword_overrides]
        )
        for rule in CATEGORY_RULES
    ]
