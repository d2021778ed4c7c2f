"""
Plans API Routes
Plan catalog reads, admin-only mutations and prorated upgrade quotes
"""
from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import (
    get_plan_catalog,
    get_pricing_engine,
    require_admin,
)
from app.core.exceptions import ValidationError
from app.models import User
from app.schemas.plan import (
    MutationResponse,
    PlanCreate,
    PlanOut,
    PlanUpdate,
    ProratedPriceResponse,
)
from app.services.plan_catalog import PlanCatalog
from app.services.pricing import PricingEngine

router = APIRouter()


@router.get("/", response_model=List[PlanOut])
async def list_plans(catalog: PlanCatalog = Depends(get_plan_catalog)):
    """
    List all plans
    """
    result = await catalog.get_all_plans()
    return result.unwrap()


# require_admin resolves before the body is validated: non-admins always get 403.
@router.post("/", response_model=MutationResponse)
async def create_plan(
    payload: PlanCreate,
    admin: User = Depends(require_admin("create")),
    catalog: PlanCatalog = Depends(get_plan_catalog),
) -> MutationResponse:
    plan = (await catalog.create_plan(payload.name, payload.price)).unwrap()
    return MutationResponse(success=True, id=plan.id)


@router.get(
    "/prorated-upgrade-price",
    response_model=ProratedPriceResponse,
    response_model_by_alias=True,
)
async def calculate_prorated_upgrade_price(
    current_plan_id: int = Query(..., alias="currentPlanId"),
    new_plan_id: int = Query(..., alias="newPlanId"),
    remaining_days: int = Query(..., alias="remainingDays"),
    engine: PricingEngine = Depends(get_pricing_engine),
) -> ProratedPriceResponse:
    """
    Price delta for switching from the current plan to a new one mid-cycle
    """
    result = await engine.calculate_prorated_upgrade_price(
        current_plan_id, new_plan_id, remaining_days
    )
    return ProratedPriceResponse(prorated_price=result.unwrap())


@router.get("/{plan_id}", response_model=PlanOut)
async def get_plan(plan_id: int, catalog: PlanCatalog = Depends(get_plan_catalog)):
    """
    Get plan details
    """
    result = await catalog.get_plan_by_id(plan_id)
    return result.unwrap()


@router.put("/{plan_id}", response_model=MutationResponse)
async def update_plan(
    plan_id: int,
    payload: PlanUpdate,
    admin: User = Depends(require_admin("update")),
    catalog: PlanCatalog = Depends(get_plan_catalog),
) -> MutationResponse:
    if payload.id is not None and payload.id != plan_id:
        raise ValidationError("Body id does not match the plan id in the path")
    (await catalog.update_plan(plan_id, payload.name, payload.price)).unwrap()
    return MutationResponse(success=True, id=plan_id)
