"""Session (sign-in state) schemas."""

from pydantic import Field

from .base import BaseSchema


class SignInRequest(BaseSchema):
    """Access token issued by the host's authentication provider."""

    access_token: str = Field(..., min_length=1)


class SessionStatus(BaseSchema):
    is_authenticated: bool
    local_projects_count: int
    has_local_projects: bool
