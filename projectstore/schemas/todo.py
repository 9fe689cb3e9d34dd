"""Task (todo) schemas for storage and backend serialization."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import BaseSchema, RecordSchema, UpdateSchema


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    blocked = "blocked"
    cancelled = "cancelled"
    review = "review"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


# Order in which a toggle advances a task; other statuses re-enter at the start.
STATUS_CYCLE: tuple[TaskStatus, ...] = (
    TaskStatus.pending,
    TaskStatus.in_progress,
    TaskStatus.completed,
)


def next_status(status: TaskStatus | str) -> TaskStatus:
    """Return the status one step after ``status`` in the toggle cycle."""
    try:
        index = STATUS_CYCLE.index(TaskStatus(status))
    except ValueError:
        index = -1
    return STATUS_CYCLE[(index + 1) % len(STATUS_CYCLE)]


class Task(RecordSchema):
    """Task item within a project."""

    project_id: str
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.pending
    priority: TaskPriority = TaskPriority.medium
    due_date: datetime | None = None
    assignee_id: str | None = None
    created_by: str | None = None


class TaskCreate(BaseSchema):
    """Schema for creating a new task."""

    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None


class TaskUpdate(UpdateSchema):
    """Schema for updating a task."""

    required_fields = ("title", "status", "priority")

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    assignee_id: str | None = None
