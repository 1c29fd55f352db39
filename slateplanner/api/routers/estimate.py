"""Credit estimation and plan recommendation endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from slateplanner.api import schemas
from slateplanner.api.dependencies import get_plan_catalog
from slateplanner.core.logging import get_logger
from slateplanner.core.observability import get_recommendation_metrics
from slateplanner.core.plans import PlanCatalog
from slateplanner.services.calculator import calculate

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["estimate"])


@router.post("/estimate", response_model=schemas.EstimateResponse)
def estimate_plan(
    payload: schemas.EstimateRequest | None = None,
    catalog: PlanCatalog = Depends(get_plan_catalog),
) -> schemas.EstimateResponse:
    config = (payload or schemas.EstimateRequest()).to_configuration()
    result = calculate(config, catalog)
    recommendation = result.recommendation
    get_recommendation_metrics().observe(
        recommendation.plan.name, recommendation.needs_add_on, result.estimate.ongoing_total
    )
    logger.info(
        "estimate_computed",
        features=list(config.enabled_features()),
        ongoing_total=result.ongoing_total,
        plan=recommendation.plan.name,
        needs_add_on=recommendation.needs_add_on,
        add_on_credits=result.add_on_credits,
    )
    return schemas.EstimateResponse.from_result(result)
