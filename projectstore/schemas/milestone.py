"""Milestone schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from .base import BaseSchema, RecordSchema, UpdateSchema


class MilestoneStatus(str, Enum):
    upcoming = "upcoming"
    in_progress = "in_progress"
    completed = "completed"
    missed = "missed"


class Milestone(RecordSchema):
    """Milestone within a project."""

    project_id: str
    title: str
    description: str | None = None
    target_date: datetime | None = None
    status: MilestoneStatus = MilestoneStatus.upcoming


class MilestoneCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=500)
    description: str | None = None
    target_date: datetime | None = None


class MilestoneUpdate(UpdateSchema):
    required_fields = ("title", "status")

    title: str | None = Field(None, min_length=1, max_length=500)
    description: str | None = None
    status: MilestoneStatus | None = None
    target_date: datetime | None = None
