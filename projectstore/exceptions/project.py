"""Project and child-record exceptions."""

from typing import Any

from .base import BaseAppException, NotFoundError


class ProjectNotFoundError(NotFoundError):
    """Raised when a project is not found."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, error_code="PROJECT_NOT_FOUND")


class TaskNotFoundError(NotFoundError):
    """Raised when a task is not found."""

    def __init__(self, message: str = "Todo not found"):
        super().__init__(message=message, error_code="TODO_NOT_FOUND")


class MilestoneNotFoundError(NotFoundError):
    """Raised when a milestone is not found."""

    def __init__(self, message: str = "Milestone not found"):
        super().__init__(message=message, error_code="MILESTONE_NOT_FOUND")


class MarketingPlanNotFoundError(NotFoundError):
    """Raised when a marketing plan is not found."""

    def __init__(self, message: str = "Marketing plan not found"):
        super().__init__(message=message, error_code="MARKETING_PLAN_NOT_FOUND")


class MigrationError(BaseAppException):
    """Raised when uploading local projects stops part-way through."""

    def __init__(
        self,
        message: str = "Failed to upload local projects",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            status_code=502,
            error_code="MIGRATION_FAILED",
            details=details,
        )


class ReadOnlyProjectError(BaseAppException):
    """Raised when a shared system project itself is modified."""

    def __init__(self, message: str = "System projects are read-only"):
        super().__init__(message=message, status_code=403, error_code="PROJECT_READ_ONLY")
