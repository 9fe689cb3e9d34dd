"""Persisted payload schemas for the durable local store and the session overlay."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import Field, field_serializer, field_validator

from .base import BaseSchema
from .marketing_plan import MarketingPlan
from .milestone import Milestone
from .project import Project
from .todo import Task

LOCAL_STORE_VERSION = 1


class LocalStoreV1(BaseSchema):
    """Version 1 of the durable local store payload."""

    version: Literal[1] = 1
    projects: list[Project] = Field(default_factory=list)
    tasks_by_project: dict[str, list[Task]] = Field(
        default_factory=dict, alias="todosByProject"
    )
    milestones_by_project: dict[str, list[Milestone]] = Field(default_factory=dict)
    marketing_plans_by_project: dict[str, list[MarketingPlan]] = Field(default_factory=dict)

    def find_project(self, project_id: str) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)

    def has_project(self, project_id: str) -> bool:
        return self.find_project(project_id) is not None


# Every payload version that has ever been written, keyed by its ``version``.
# Only LOCAL_STORE_VERSION is accepted on load; older entries are discarded.
PAYLOAD_VERSIONS: dict[int, type[BaseSchema]] = {
    1: LocalStoreV1,
}

LocalStoreData = Union[LocalStoreV1]


class OverlayData(BaseSchema):
    """Session-scoped deltas applied on top of shared (system) projects."""

    tasks_by_project: dict[str, list[Task]] = Field(
        default_factory=dict, alias="todosByProject"
    )
    milestones_by_project: dict[str, list[Milestone]] = Field(default_factory=dict)
    marketing_plans_by_project: dict[str, list[MarketingPlan]] = Field(default_factory=dict)
    deleted_tasks: dict[str, set[str]] = Field(default_factory=dict, alias="deletedTodos")
    deleted_milestones: dict[str, set[str]] = Field(default_factory=dict)
    deleted_marketing_plans: dict[str, set[str]] = Field(default_factory=dict)

    @field_validator(
        "tasks_by_project",
        "milestones_by_project",
        "marketing_plans_by_project",
        "deleted_tasks",
        "deleted_milestones",
        "deleted_marketing_plans",
        mode="before",
    )
    @classmethod
    def default_missing(cls, v):
        return {} if v is None else v

    @field_serializer("deleted_tasks", "deleted_milestones", "deleted_marketing_plans")
    def serialize_tombstones(self, value: dict[str, set[str]]) -> dict[str, list[str]]:
        return {project_id: sorted(ids) for project_id, ids in value.items()}
