"""Base schemas for the application."""

from datetime import datetime, timezone
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema class with common configuration.

    Fields are snake_case in Python and in backend payloads; the persisted
    browser-compatible payloads use the camelCase aliases.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class RecordSchema(BaseSchema):
    """Base schema for stored records."""

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def normalize_timestamp(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Normalize datetime to UTC timezone-aware format."""
        if v is None:
            return None
        # If datetime is timezone-naive, assume it's UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class ResponseSchema(BaseModel):
    """Standard API response schema."""

    status: str
    message: Optional[str] = None
    data: Optional[dict | list] = None


class UpdateSchema(BaseSchema):
    """Base schema for partial updates.

    Fields listed in ``required_fields`` may be omitted but not sent as null,
    since the stored record cannot hold a null there.
    """

    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        nulled = sorted(
            name
            for name in self.model_fields_set
            if name in self.required_fields and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self
