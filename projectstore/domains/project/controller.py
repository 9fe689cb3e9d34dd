"""Project API controller with FastAPI endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Request

from projectstore.core.dependencies import get_migration_service, get_project_service
from projectstore.domains.migration.service import MigrationService
from projectstore.domains.project.service import ProjectService
from projectstore.schemas.base import ResponseSchema
from projectstore.schemas.project import ProjectCreate, ProjectStatus, ProjectUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/local/projects", tags=["projects"])


@router.get("/", response_model=ResponseSchema)
async def get_projects(
    _request: Request,
    status: Optional[ProjectStatus] = Query(None),
    page: int = Query(1, ge=1),
    service: ProjectService = Depends(get_project_service),
):
    """Get local projects merged with the backend's list."""
    projects = await service.fetch_projects(status=status, page=page)

    return ResponseSchema(
        status="success",
        message="Projects retrieved successfully",
        data=[p.model_dump(mode="json") for p in projects],
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_project(
    _request: Request,
    project_data: ProjectCreate,
    service: ProjectService = Depends(get_project_service),
):
    """Create a new project."""
    project = await service.create_project(project_data)

    return ResponseSchema(
        status="success",
        message="Project created successfully",
        data=project.model_dump(mode="json"),
    )


@router.post("/upload", response_model=ResponseSchema)
async def upload_local_projects(
    _request: Request,
    service: MigrationService = Depends(get_migration_service),
):
    """Upload every local project to the backend."""
    id_map = await service.upload_local_projects()

    return ResponseSchema(
        status="success",
        message=f"Uploaded {len(id_map)} local projects",
        data={"id_map": id_map},
    )


@router.get("/{project_id}", response_model=ResponseSchema)
async def get_project(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    service: ProjectService = Depends(get_project_service),
):
    """Open a project together with its tasks, milestones and marketing plans."""
    result = await service.fetch_project(project_id)

    return ResponseSchema(
        status="success",
        message="Project retrieved successfully",
        data=result.model_dump(mode="json"),
    )


@router.patch("/{project_id}", response_model=ResponseSchema)
async def update_project(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    project_data: ProjectUpdate = Body(...),
    service: ProjectService = Depends(get_project_service),
):
    """Update a specific project."""
    project = await service.update_project(project_id, project_data)

    return ResponseSchema(
        status="success",
        message="Project updated successfully",
        data=project.model_dump(mode="json"),
    )


@router.delete("/{project_id}", response_model=ResponseSchema)
async def delete_project(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    service: ProjectService = Depends(get_project_service),
):
    """Delete a specific project."""
    await service.delete_project(project_id)

    return ResponseSchema(status="success", message="Project deleted successfully", data=None)
