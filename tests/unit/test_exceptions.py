"""
Unit tests for Exception classes.
"""

from fastapi import HTTPException

from projectstore.exceptions.base import (
    AuthenticationRequiredError,
    BackendError,
    BaseAppException,
    NotFoundError,
)
from projectstore.exceptions.project import (
    MarketingPlanNotFoundError,
    MigrationError,
    MilestoneNotFoundError,
    ProjectNotFoundError,
    ReadOnlyProjectError,
    TaskNotFoundError,
)


class TestBaseAppException:
    """Test cases for BaseAppException."""

    def test_base_exception_default_values(self):
        exc = BaseAppException("Test error")

        assert isinstance(exc, HTTPException)
        assert exc.message == "Test error"
        assert exc.status_code == 500
        assert exc.error_code == "INTERNAL_ERROR"
        assert exc.details == {}
        assert exc.detail["message"] == "Test error"
        assert exc.detail["error_code"] == "INTERNAL_ERROR"
        assert str(exc) == "Test error"

    def test_base_exception_with_details(self):
        exc = BaseAppException("Boom", status_code=418, error_code="TEAPOT", details={"a": 1})

        assert exc.status_code == 418
        assert exc.details == {"a": 1}
        assert exc.detail["details"] == {"a": 1}


class TestStoreExceptions:
    def test_not_found_defaults(self):
        exc = NotFoundError()

        assert exc.status_code == 404
        assert exc.error_code == "NOT_FOUND"
        assert exc.message == "Resource not found"

    def test_not_found_subclasses(self):
        cases = [
            (ProjectNotFoundError(), "Project not found", "PROJECT_NOT_FOUND"),
            (TaskNotFoundError(), "Todo not found", "TODO_NOT_FOUND"),
            (MilestoneNotFoundError(), "Milestone not found", "MILESTONE_NOT_FOUND"),
            (
                MarketingPlanNotFoundError(),
                "Marketing plan not found",
                "MARKETING_PLAN_NOT_FOUND",
            ),
        ]
        for exc, message, code in cases:
            assert isinstance(exc, NotFoundError)
            assert exc.status_code == 404
            assert exc.message == message
            assert exc.error_code == code

    def test_authentication_required(self):
        exc = AuthenticationRequiredError()

        assert exc.status_code == 401
        assert exc.error_code == "AUTHENTICATION_REQUIRED"

    def test_backend_error_defaults(self):
        exc = BackendError()

        assert exc.status_code == 502
        assert exc.error_code == "UNKNOWN_ERROR"
        assert exc.message == "An error occurred"

    def test_migration_error_carries_progress(self):
        exc = MigrationError("Server down", details={"uploaded_projects": 2})

        assert exc.status_code == 502
        assert exc.error_code == "MIGRATION_FAILED"
        assert exc.details["uploaded_projects"] == 2

    def test_read_only_project(self):
        exc = ReadOnlyProjectError()

        assert exc.status_code == 403
        assert exc.error_code == "PROJECT_READ_ONLY"
