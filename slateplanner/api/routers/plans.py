"""Plan catalog and feature reference endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from slateplanner.api import schemas
from slateplanner.api.dependencies import get_plan_catalog
from slateplanner.core.features import FEATURES
from slateplanner.core.plans import PlanCatalog, UnknownPlanError

router = APIRouter(prefix="/api/v1", tags=["plans"])


@router.get("/plans", response_model=schemas.CatalogResponse)
def list_plans(catalog: PlanCatalog = Depends(get_plan_catalog)) -> schemas.CatalogResponse:
    return schemas.CatalogResponse(
        plans=[schemas.PlanResponse.from_tier(tier) for tier in catalog.tiers()],
        add_ons=[schemas.AddOnPackageResponse.from_tier(package) for package in catalog.add_on_tiers()],
    )


@router.get("/plans/{name}", response_model=schemas.PlanResponse)
def get_plan(name: str, catalog: PlanCatalog = Depends(get_plan_catalog)) -> schemas.PlanResponse:
    try:
        tier = catalog.tier(name)
    except UnknownPlanError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Plan not found") from exc
    return schemas.PlanResponse.from_tier(tier)


@router.get("/features", response_model=list[schemas.FeatureResponse])
def list_features() -> list[schemas.FeatureResponse]:
    return [schemas.FeatureResponse.from_info(feature) for feature in FEATURES]
