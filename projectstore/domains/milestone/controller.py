"""Milestone API controller."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Request

from projectstore.core.dependencies import get_milestone_service
from projectstore.domains.milestone.service import MilestoneService
from projectstore.schemas.base import ResponseSchema
from projectstore.schemas.milestone import MilestoneCreate, MilestoneStatus, MilestoneUpdate

router = APIRouter(prefix="/api/local/projects/{project_id}/milestones", tags=["milestones"])


@router.get("/", response_model=ResponseSchema)
async def get_milestones(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    status: Optional[MilestoneStatus] = Query(None),
    service: MilestoneService = Depends(get_milestone_service),
):
    milestones = await service.fetch(project_id, status=status)

    return ResponseSchema(
        status="success",
        message="Milestones retrieved successfully",
        data=[m.model_dump(mode="json") for m in milestones],
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_milestone(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    milestone_data: MilestoneCreate = Body(...),
    service: MilestoneService = Depends(get_milestone_service),
):
    milestone = await service.create(project_id, milestone_data)

    return ResponseSchema(
        status="success",
        message="Milestone created successfully",
        data=milestone.model_dump(mode="json"),
    )


@router.patch("/{milestone_id}", response_model=ResponseSchema)
async def update_milestone(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    milestone_id: str = Path(..., description="Milestone ID"),
    milestone_data: MilestoneUpdate = Body(...),
    service: MilestoneService = Depends(get_milestone_service),
):
    milestone = await service.update(project_id, milestone_id, milestone_data)

    return ResponseSchema(
        status="success",
        message="Milestone updated successfully",
        data=milestone.model_dump(mode="json"),
    )


@router.delete("/{milestone_id}", response_model=ResponseSchema)
async def delete_milestone(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    milestone_id: str = Path(..., description="Milestone ID"),
    service: MilestoneService = Depends(get_milestone_service),
):
    await service.delete(project_id, milestone_id)

    return ResponseSchema(status="success", message="Milestone deleted successfully", data=None)
