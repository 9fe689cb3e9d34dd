"""Request schemas for the AI copilot endpoints."""

from typing import Optional

from pydantic import Field

from .base import BaseSchema


class SuggestionRequest(BaseSchema):
    context: Optional[str] = Field(None, max_length=2000)


class MarketingPlanRequest(BaseSchema):
    goals: Optional[str] = Field(None, max_length=2000)
