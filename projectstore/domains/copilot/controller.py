"""AI copilot API controller."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Request

from projectstore.core.dependencies import get_copilot_service
from projectstore.domains.copilot.service import CopilotService
from projectstore.schemas.base import ResponseSchema
from projectstore.schemas.copilot import MarketingPlanRequest, SuggestionRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/local/projects/{project_id}/copilot", tags=["copilot"])


@router.post("/suggest-todos", response_model=ResponseSchema)
async def suggest_todos(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    payload: Optional[SuggestionRequest] = Body(None),
    service: CopilotService = Depends(get_copilot_service),
):
    """Ask the backend for todo suggestions."""
    suggestions = await service.suggest_tasks(project_id, payload.context if payload else None)

    return ResponseSchema(
        status="success",
        message="Todo suggestions generated",
        data={"suggestions": suggestions},
    )


@router.post("/suggest-milestones", response_model=ResponseSchema)
async def suggest_milestones(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    payload: Optional[SuggestionRequest] = Body(None),
    service: CopilotService = Depends(get_copilot_service),
):
    """Ask the backend for milestone suggestions."""
    suggestions = await service.suggest_milestones(project_id, payload.context if payload else None)

    return ResponseSchema(
        status="success",
        message="Milestone suggestions generated",
        data={"suggestions": suggestions},
    )


@router.post("/generate-marketing-plan", response_model=ResponseSchema)
async def generate_marketing_plan(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    payload: Optional[MarketingPlanRequest] = Body(None),
    service: CopilotService = Depends(get_copilot_service),
):
    """Ask the backend to draft a marketing plan."""
    plan = await service.generate_marketing_plan(project_id, payload.goals if payload else None)

    return ResponseSchema(
        status="success",
        message="Marketing plan generated",
        data=plan.model_dump(mode="json"),
    )
