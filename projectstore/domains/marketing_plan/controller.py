"""Marketing plan API controller."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Request

from projectstore.core.dependencies import get_marketing_plan_service
from projectstore.domains.marketing_plan.service import MarketingPlanService
from projectstore.schemas.base import ResponseSchema
from projectstore.schemas.marketing_plan import (
    MarketingPlanCreate,
    MarketingPlanStatus,
    MarketingPlanUpdate,
)

router = APIRouter(
    prefix="/api/local/projects/{project_id}/marketing-plans",
    tags=["marketing-plans"],
)


@router.get("/", response_model=ResponseSchema)
async def get_marketing_plans(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    status: Optional[MarketingPlanStatus] = Query(None),
    service: MarketingPlanService = Depends(get_marketing_plan_service),
):
    plans = await service.fetch(project_id, status=status)

    return ResponseSchema(
        status="success",
        message="Marketing plans retrieved successfully",
        data=[p.model_dump(mode="json") for p in plans],
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_marketing_plan(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    plan_data: MarketingPlanCreate = Body(...),
    service: MarketingPlanService = Depends(get_marketing_plan_service),
):
    plan = await service.create(project_id, plan_data)

    return ResponseSchema(
        status="success",
        message="Marketing plan created successfully",
        data=plan.model_dump(mode="json"),
    )


@router.patch("/{plan_id}", response_model=ResponseSchema)
async def update_marketing_plan(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    plan_id: str = Path(..., description="Marketing plan ID"),
    plan_data: MarketingPlanUpdate = Body(...),
    service: MarketingPlanService = Depends(get_marketing_plan_service),
):
    plan = await service.update(project_id, plan_id, plan_data)

    return ResponseSchema(
        status="success",
        message="Marketing plan updated successfully",
        data=plan.model_dump(mode="json"),
    )


@router.delete("/{plan_id}", response_model=ResponseSchema)
async def delete_marketing_plan(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    plan_id: str = Path(..., description="Marketing plan ID"),
    service: MarketingPlanService = Depends(get_marketing_plan_service),
):
    await service.delete(project_id, plan_id)

    return ResponseSchema(
        status="success", message="Marketing plan deleted successfully", data=None
    )
