"""Upload of locally-created projects to the backend after sign-in."""

import logging

from projectstore.domains.base import StoreService
from projectstore.domains.project.service import ProjectService
from projectstore.exceptions.base import (
    AuthenticationRequiredError,
    BackendError,
    LocalStorageError,
)
from projectstore.exceptions.project import MigrationError
from projectstore.schemas.marketing_plan import (
    MarketingPlanCreate,
    MarketingPlanStatus,
    MarketingPlanUpdate,
)
from projectstore.schemas.milestone import MilestoneCreate, MilestoneStatus, MilestoneUpdate
from projectstore.schemas.project import ProjectCreate, ProjectStatus, ProjectUpdate
from projectstore.schemas.storage import LocalStoreData
from projectstore.schemas.todo import TaskCreate, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)


class MigrationService(StoreService):
    """Re-creates every local project and its children on the backend.

    The backend assigns new ids, so local ids do not survive the upload.
    Creation endpoints take no status; a record whose status differs from
    the creation default gets a follow-up update.

    Uploads are not idempotent: if one fails part-way, the records created
    so far stay on the backend and the local store is kept, so retrying
    creates them a second time.
    """

    async def upload_local_projects(self) -> dict[str, str]:
        """Upload all local projects and return the local-to-remote id mapping."""
        if not self.ctx.auth.is_authenticated:
            raise AuthenticationRequiredError("Sign in to upload local projects")

        with self._recording_errors("Failed to upload local projects"):
            local = self._load_local()
            if not local.projects:
                logger.debug("No local projects to upload")
                return {}

            id_map: dict[str, str] = {}
            try:
                await self._upload_projects(local, id_map)
                for local_id, remote_id in id_map.items():
                    await self._upload_children(local, local_id, remote_id)
            except BackendError as e:
                logger.error(
                    "Upload stopped after %d of %d projects: %s",
                    len(id_map),
                    len(local.projects),
                    e,
                )
                raise MigrationError(
                    message=e.message,
                    details={"uploaded_projects": len(id_map), "status_code": e.status_code},
                ) from e

            current = self.state.current_project
            clear_current = current is not None and local.has_project(current.id)
            try:
                self.local_store.clear()
            except LocalStorageError as e:
                # Everything is on the backend, but the local copies remain
                raise MigrationError(
                    message="Projects were uploaded but local storage could not be cleared",
                    details={"uploaded_projects": len(id_map), "id_map": id_map},
                ) from e
            self.state.local_projects_count = 0
            if clear_current:
                self.state.clear_current_project()

            logger.info("Uploaded %d local projects", len(id_map))
            await ProjectService(self.ctx).fetch_projects(page=1)
            return id_map

    async def _upload_projects(self, local: LocalStoreData, id_map: dict[str, str]) -> None:
        for project in local.projects:
            created = await self.backend.projects.create(
                ProjectCreate(name=project.name, description=project.description)
            )
            id_map[project.id] = created.id

            if project.status != ProjectStatus.active:
                await self.backend.projects.update(
                    created.id, ProjectUpdate(status=project.status)
                )

    async def _upload_children(self, local: LocalStoreData, local_id: str, remote_id: str) -> None:
        for task in local.tasks_by_project.get(local_id, []):
            created = await self.backend.todos.create(
                remote_id,
                TaskCreate(
                    title=task.title,
                    description=task.description,
                    priority=task.priority,
                    due_date=task.due_date,
                ),
            )
            if task.status != TaskStatus.pending:
                await self.backend.todos.update(
                    remote_id, created.id, TaskUpdate(status=task.status)
                )

        for milestone in local.milestones_by_project.get(local_id, []):
            created = await self.backend.milestones.create(
                remote_id,
                MilestoneCreate(
                    title=milestone.title,
                    description=milestone.description,
                    target_date=milestone.target_date,
                ),
            )
            if milestone.status != MilestoneStatus.upcoming:
                await self.backend.milestones.update(
                    remote_id, created.id, MilestoneUpdate(status=milestone.status)
                )

        for plan in local.marketing_plans_by_project.get(local_id, []):
            created = await self.backend.marketing_plans.create(
                remote_id,
                MarketingPlanCreate(
                    title=plan.title,
                    content=plan.content,
                    budget=plan.budget,
                    start_date=plan.start_date,
                    end_date=plan.end_date,
                ),
            )
            if plan.status != MarketingPlanStatus.draft:
                await self.backend.marketing_plans.update(
                    remote_id, created.id, MarketingPlanUpdate(status=plan.status)
                )
