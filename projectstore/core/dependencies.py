# projectstore/core/dependencies.py
import logging

from fastapi import Depends, HTTPException, Request, status

from projectstore.core.context import StoreContext
from projectstore.domains.copilot.service import CopilotService
from projectstore.domains.marketing_plan.service import MarketingPlanService
from projectstore.domains.migration.service import MigrationService
from projectstore.domains.milestone.service import MilestoneService
from projectstore.domains.project.service import ProjectService
from projectstore.domains.todo.service import TaskService

logger = logging.getLogger(__name__)


def get_context(request: Request) -> StoreContext:
    """Return the store context created by the application lifespan.

    Raises:
        HTTPException: If the application has not finished starting up
    """
    ctx = getattr(request.app.state, "context", None)
    if ctx is None:
        logger.error("Store context requested before application startup")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Store is not initialized",
        )
    return ctx


def get_project_service(ctx: StoreContext = Depends(get_context)) -> ProjectService:
    return ProjectService(ctx)


def get_task_service(ctx: StoreContext = Depends(get_context)) -> TaskService:
    return TaskService(ctx)


def get_milestone_service(ctx: StoreContext = Depends(get_context)) -> MilestoneService:
    return MilestoneService(ctx)


def get_marketing_plan_service(
    ctx: StoreContext = Depends(get_context),
) -> MarketingPlanService:
    return MarketingPlanService(ctx)


def get_migration_service(ctx: StoreContext = Depends(get_context)) -> MigrationService:
    return MigrationService(ctx)


def get_copilot_service(ctx: StoreContext = Depends(get_context)) -> CopilotService:
    return CopilotService(ctx)
