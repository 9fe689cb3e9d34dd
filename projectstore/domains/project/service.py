"""Project service layer: local-first project lifecycle."""

import asyncio
import logging
from typing import Optional

from projectstore.domains.base import StoreService
from projectstore.domains.marketing_plan.service import MarketingPlanService
from projectstore.domains.milestone.service import MilestoneService
from projectstore.domains.provenance import Provenance
from projectstore.domains.reconcile import merge_project_lists
from projectstore.domains.state import PaginationMeta
from projectstore.domains.todo.service import TaskService
from projectstore.exceptions.base import BackendError
from projectstore.exceptions.project import ReadOnlyProjectError
from projectstore.schemas.project import (
    Project,
    ProjectCreate,
    ProjectStatus,
    ProjectUpdate,
    ProjectWithChildren,
)
from projectstore.shared.ids import generate_id, utc_now

logger = logging.getLogger(__name__)


class ProjectService(StoreService):
    """Service class for project business logic."""

    async def fetch_projects(
        self, status: Optional[ProjectStatus] = None, page: int = 1
    ) -> list[Project]:
        """Local projects merged with the backend's list, newest first.

        Anonymous callers still ask the backend, to see the system projects,
        but a failure there only hides them. Signed-in callers get the error.
        """
        with self._recording_errors("Failed to fetch projects"):
            local = self._load_local()
            local_projects = [
                p for p in local.projects if status is None or p.status == status
            ]

            limit = self.state.meta.limit
            if self.ctx.auth.is_authenticated:
                remote = await self.backend.projects.list(status=status, page=page, limit=limit)
            else:
                try:
                    remote = await self.backend.projects.list(
                        status=status, page=page, limit=limit
                    )
                except BackendError as e:
                    logger.info("Could not fetch shared projects for guest: %s", e)
                    remote = []

            merged = merge_project_lists(local_projects, remote)
            self.state.projects = merged
            self.state.meta = PaginationMeta(page=page, limit=limit, total=len(merged))
            self._persist_local(local)

            logger.debug(
                "Fetched %d projects (%d local, %d remote)",
                len(merged),
                len(local_projects),
                len(remote),
            )
            return merged

    async def fetch_project(self, project_id: str) -> ProjectWithChildren:
        """Open a project and load its tasks, milestones and marketing plans."""
        with self._recording_errors("Failed to fetch project"):
            local = self._load_local()
            project = local.find_project(project_id)
            if project is None:
                project = await self.backend.projects.get(project_id)

            self.state.current_project = project
            tasks, milestones, plans = await asyncio.gather(
                TaskService(self.ctx).fetch(project_id),
                MilestoneService(self.ctx).fetch(project_id),
                MarketingPlanService(self.ctx).fetch(project_id),
            )

            return ProjectWithChildren(
                project=self.state.current_project or project,
                todos=tasks,
                milestones=milestones,
                marketing_plans=plans,
            )

    async def create_project(self, project_data: ProjectCreate) -> Project:
        """Create a project; signed-out users get a local one."""
        with self._recording_errors("Failed to create project"):
            if self.ctx.auth.is_authenticated:
                project = await self.backend.projects.create(project_data)
                self.state.projects = [project, *self.state.projects]
                return project

            now = utc_now()
            project = Project(
                id=generate_id("project"),
                name=project_data.name,
                description=project_data.description,
                status=ProjectStatus.active,
                is_system=False,
                tags=project_data.tags or [],
                created_at=now,
                updated_at=now,
            )

            local = self._load_local()
            local.projects.insert(0, project)
            local.tasks_by_project[project.id] = []
            local.milestones_by_project[project.id] = []
            local.marketing_plans_by_project[project.id] = []
            self._persist_local(local)

            self.state.projects = [project, *self.state.projects]
            self.state.current_project = project
            self.state.tasks = []
            self.state.milestones = []
            self.state.marketing_plans = []

            logger.info("Created local project %s", project.id)
            return project

    async def update_project(self, project_id: str, project_data: ProjectUpdate) -> Project:
        with self._recording_errors("Failed to update project"):
            local = self._load_local()
            provenance = self._classify(project_id, local)

            if provenance == Provenance.LOCAL_OWNED:
                index = next(i for i, p in enumerate(local.projects) if p.id == project_id)
                updated = self._apply_update(local.projects[index], project_data)
                local.projects[index] = updated
                self._persist_local(local)
                updated = local.projects[index]
            elif provenance == Provenance.SHARED_SYSTEM:
                raise ReadOnlyProjectError()
            else:
                updated = await self.backend.projects.update(project_id, project_data)

            self.state.replace_project(updated)
            return updated

    async def delete_project(self, project_id: str) -> None:
        with self._recording_errors("Failed to delete project"):
            local = self._load_local()
            provenance = self._classify(project_id, local)

            if provenance == Provenance.LOCAL_OWNED:
                local.projects = [p for p in local.projects if p.id != project_id]
                local.tasks_by_project.pop(project_id, None)
                local.milestones_by_project.pop(project_id, None)
                local.marketing_plans_by_project.pop(project_id, None)
                self._persist_local(local)
                logger.info("Deleted local project %s", project_id)
            elif provenance == Provenance.SHARED_SYSTEM:
                raise ReadOnlyProjectError()
            else:
                await self.backend.projects.delete(project_id)

            self.state.remove_project(project_id)

    def clear_demo_session(self) -> None:
        """Discard every change made to system projects in this session."""
        self.overlay.clear()
