"""Marketing plan schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from .base import BaseSchema, RecordSchema, UpdateSchema


class MarketingPlanStatus(str, Enum):
    draft = "draft"
    active = "active"
    completed = "completed"


class MarketingPlan(RecordSchema):
    """Marketing plan within a project; ``content`` is a free-form blob."""

    project_id: str
    title: str
    content: dict[str, Any] | None = None
    status: MarketingPlanStatus = MarketingPlanStatus.draft
    budget: float | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_by: str | None = None


class MarketingPlanCreate(BaseSchema):
    title: str = Field(..., min_length=1, max_length=500)
    content: dict[str, Any] | None = None
    budget: float | None = Field(None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None


class MarketingPlanUpdate(UpdateSchema):
    required_fields = ("title", "status")

    title: str | None = Field(None, min_length=1, max_length=500)
    content: dict[str, Any] | None = None
    status: MarketingPlanStatus | None = None
    budget: float | None = Field(None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
