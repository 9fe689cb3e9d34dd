"""Todo API controller with FastAPI endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query, Request

from projectstore.core.dependencies import get_task_service
from projectstore.domains.todo.service import TaskService
from projectstore.schemas.base import ResponseSchema
from projectstore.schemas.todo import TaskCreate, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/local/projects/{project_id}/todos", tags=["todos"])


@router.get("/", response_model=ResponseSchema)
async def get_todos(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    status: Optional[TaskStatus] = Query(None),
    service: TaskService = Depends(get_task_service),
):
    """Get the effective todos of a project."""
    todos = await service.fetch(project_id, status=status)

    return ResponseSchema(
        status="success",
        message="Todos retrieved successfully",
        data=[t.model_dump(mode="json") for t in todos],
    )


@router.post("/", response_model=ResponseSchema, status_code=201)
async def create_todo(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    todo_data: TaskCreate = Body(...),
    service: TaskService = Depends(get_task_service),
):
    """Create a new todo."""
    todo = await service.create(project_id, todo_data)

    return ResponseSchema(
        status="success",
        message="Todo created successfully",
        data=todo.model_dump(mode="json"),
    )


@router.patch("/{todo_id}", response_model=ResponseSchema)
async def update_todo(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    todo_id: str = Path(..., description="Todo ID"),
    todo_data: TaskUpdate = Body(...),
    service: TaskService = Depends(get_task_service),
):
    """Update a specific todo."""
    todo = await service.update(project_id, todo_id, todo_data)

    return ResponseSchema(
        status="success",
        message="Todo updated successfully",
        data=todo.model_dump(mode="json"),
    )


@router.post("/{todo_id}/toggle", response_model=ResponseSchema)
async def toggle_todo_status(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    todo_id: str = Path(..., description="Todo ID"),
    service: TaskService = Depends(get_task_service),
):
    """Advance a todo to the next status."""
    todo = await service.get(project_id, todo_id)
    todo = await service.toggle_task_status(project_id, todo)

    return ResponseSchema(
        status="success",
        message=f"Todo status changed to {todo.status.value}",
        data=todo.model_dump(mode="json"),
    )


@router.delete("/{todo_id}", response_model=ResponseSchema)
async def delete_todo(
    _request: Request,
    project_id: str = Path(..., description="Project ID"),
    todo_id: str = Path(..., description="Todo ID"),
    service: TaskService = Depends(get_task_service),
):
    """Delete a specific todo."""
    await service.delete(project_id, todo_id)

    return ResponseSchema(status="success", message="Todo deleted successfully", data=None)
