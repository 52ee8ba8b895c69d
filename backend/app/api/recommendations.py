"""Crop recommendation endpoint"""
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request

from app.api.deps import get_estimator, get_history, get_ledger_store
from app.middleware.monitoring import record_ledger_size, record_recommendation
from app.middleware.rate_limit import rate_limit
from app.schemas.recommendation import RecommendationRequest, RecommendationResponse
from app.utils.crops import SEASONS, SOIL_TYPES, lookup_key, resolve_crops
from app.utils.estimation import EstimationProvider
from app.utils.logger import logger

router = APIRouter(prefix="/api", tags=["recommendations"])


def build_recommendation(
    crops: List[str], factors: RecommendationRequest, estimator: EstimationProvider
) -> Dict[str, Any]:
    """Attach mock estimates to each crop and echo the factors."""
    return {
        "recommendations": [
            {
                "name": crop,
                "confidence": estimator.confidence(),
                "expected_yield": estimator.expected_yield(),
                "estimated_profit": estimator.estimated_profit(),
            }
            for crop in crops
        ],
        "factors": {
            "location": factors.location,
            "season": factors.season,
            "soil_type": factors.soil_type,
            "land_size": factors.land_size,
        },
    }


def _metric_label(value: Any, known) -> str:
    key = lookup_key(value)
    if key is None:
        return "none"
    return key if key in known else "other"


async def read_factors(request: Request) -> RecommendationRequest:
    """
    Recommendation factors from the request body.

    Only JSON bodies are read. A missing or unparseable body, or one that is
    not a JSON object, counts as no factors at all.
    """
    if "json" not in request.headers.get("content-type", "").lower():
        return RecommendationRequest()
    try:
        body = await request.json()
    except ValueError:
        return RecommendationRequest()
    if not isinstance(body, dict):
        return RecommendationRequest()
    return RecommendationRequest.model_validate(body)


@router.post("/recommend-crop", response_model=RecommendationResponse)
@rate_limit("recommend")
def recommend_crop(
    request: Request,
    factors: RecommendationRequest = Depends(read_factors),
    estimator: EstimationProvider = Depends(get_estimator),
    history: List[Dict[str, Any]] = Depends(get_history),
    ledger=Depends(get_ledger_store),
):
    """
    Recommend up to three crops for a season and soil type.

    Unknown or missing factors fall back to a default crop list instead of
    failing. The selected crop names are appended to the ledger before the
    response is returned, so the entry is visible to the next read.
    """
    crops, fallback = resolve_crops(factors.season, factors.soil_type)
    result = build_recommendation(crops, factors, estimator)

    history.append({**result, "timestamp": datetime.now(timezone.utc)})
    entry = ledger.append([crop["name"] for crop in result["recommendations"]])

    season = _metric_label(factors.season, SEASONS)
    soil_type = _metric_label(factors.soil_type, SOIL_TYPES)
    record_recommendation(season, soil_type, fallback)
    record_ledger_size(entry.id)

    logger.info(
        "Crop recommendation served",
        extra={"entry_id": entry.id, "season": season, "soil_type": soil_type},
    )

    return result
