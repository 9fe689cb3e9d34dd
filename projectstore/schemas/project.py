"""Project schemas for storage and backend serialization."""

from __future__ import annotations

from enum import Enum

from pydantic import Field, field_validator

from .base import BaseSchema, RecordSchema, UpdateSchema


class ProjectStatus(str, Enum):
    active = "active"
    completed = "completed"
    archived = "archived"


class ProjectTag(BaseSchema):
    """Project tag with name and color."""

    name: str
    color: str = "primary"


class Project(RecordSchema):
    """Project entity.

    The three counters are derived from the project's children and are
    recomputed by whichever store currently owns them.
    """

    name: str
    description: str | None = None
    status: ProjectStatus = ProjectStatus.active
    owner_id: str | None = None
    is_system: bool = False
    tags: list[ProjectTag] = Field(default_factory=list)
    todo_count: int = 0
    completed_todo_count: int = 0
    milestone_count: int = 0


class ProjectBase(BaseSchema):
    """Base project schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate and clean the project name."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or only whitespace")
        return v


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""

    tags: list[ProjectTag] | None = None


class ProjectUpdate(UpdateSchema):
    """Schema for updating a project."""

    required_fields = ("name", "status", "tags")

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus | None = None
    tags: list[ProjectTag] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        """Validate and clean the project name."""
        if v is not None and isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or only whitespace")
        return v


class ProjectCounts(BaseSchema):
    """Derived child counters of one project."""

    todo_count: int = 0
    completed_todo_count: int = 0
    milestone_count: int = 0


class ProjectWithChildren(BaseSchema):
    """Schema for a project together with its effective child records."""

    project: Project
    todos: list[Task] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    marketing_plans: list[MarketingPlan] = Field(default_factory=list)


# Import child schemas at the end to avoid circular imports
from .marketing_plan import MarketingPlan  # noqa: E402, I001
from .milestone import Milestone  # noqa: E402
from .todo import Task  # noqa: E402

# Rebuild the model to resolve forward references
ProjectWithChildren.model_rebuild()
