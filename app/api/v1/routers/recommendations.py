# app/api/v1/routers/recommendations.py
from fastapi import APIRouter, Depends, Query, status
from typing import Annotated
import time
import logging

from app.api.deps import recommendation_service_dep
from app.api.v1.schemas.reco import RecoResultOut
from app.core.config import get_settings
from app.core.session import resolve_session_id
from app.domain.services.recommendation_svc import RecommendationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])

settings = get_settings()

SessionDep = Annotated[str, Depends(resolve_session_id)]
ServiceDep = Annotated[RecommendationService, Depends(recommendation_service_dep)]


@router.get("/products/{product_code}/recommendations", response_model=RecoResultOut)
async def product_recommendations(
    product_code: str,
    session_id: SessionDep,
    svc: ServiceDep,
    limit: int = Query(settings.recommendation_limit_default, ge=0, le=settings.recommendation_limit_max),
) -> RecoResultOut:
    """
    Related products for a product page.
    Session is resolved from X-Session-Id (or the session_id cookie).
    Pipeline: similarity table (2 x limit) → history filter → catalog join → top-N,
    or the rule-based fallback when the table has nothing. Never fails.
    """
    logger.info("Request: recommendations product_code=%s, limit=%s, session=%s", product_code, limit, session_id)
    start_time = time.perf_counter()

    res = await svc.get_recommendations(product_code, session_id, limit)

    elapsed_time = time.perf_counter() - start_time
    logger.info(
        "Response: recommendations product_code=%s, count=%s, fallback=%s, elapsed_time=%.4fs",
        product_code, res.count, res.is_fallback, elapsed_time,
    )
    return RecoResultOut.from_result(res)


@router.post("/products/{product_code}/recommendations/click", status_code=status.HTTP_202_ACCEPTED)
async def recommendation_click(
    product_code: str,
    session_id: SessionDep,
    svc: ServiceDep,
):
    """Track a click on a recommended product. Best-effort, returns immediately."""
    logger.info("Request: recommendation_click product_code=%s, session=%s", product_code, session_id)
    svc.record_click(product_code, session_id)
    return {"accepted": True}
