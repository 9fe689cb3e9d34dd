"""
Unit tests for MigrationService (uploading local projects after sign-in).
"""

import pytest

from projectstore.domains.marketing_plan.service import MarketingPlanService
from projectstore.domains.migration.service import MigrationService
from projectstore.domains.milestone.service import MilestoneService
from projectstore.domains.project.service import ProjectService
from projectstore.domains.todo.service import TaskService
from projectstore.exceptions.base import AuthenticationRequiredError
from projectstore.exceptions.project import MigrationError
from projectstore.schemas.marketing_plan import (
    MarketingPlanCreate,
    MarketingPlanStatus,
    MarketingPlanUpdate,
)
from projectstore.schemas.milestone import MilestoneCreate, MilestoneStatus, MilestoneUpdate
from projectstore.schemas.project import ProjectCreate, ProjectStatus, ProjectUpdate
from projectstore.schemas.todo import TaskCreate, TaskStatus, TaskUpdate


async def build_local_project(ctx, name="Offline work"):
    project = await ProjectService(ctx).create_project(
        ProjectCreate(name=name, description="Made while signed out")
    )
    tasks = TaskService(ctx)
    await tasks.create(project.id, TaskCreate(title="Still pending"))
    done = await tasks.create(project.id, TaskCreate(title="Finished"))
    await tasks.update(project.id, done.id, TaskUpdate(status=TaskStatus.completed))

    milestones = MilestoneService(ctx)
    milestone = await milestones.create(project.id, MilestoneCreate(title="Beta"))
    await milestones.update(
        project.id, milestone.id, MilestoneUpdate(status=MilestoneStatus.in_progress)
    )

    plans = MarketingPlanService(ctx)
    plan = await plans.create(project.id, MarketingPlanCreate(title="Launch", budget=250))
    await plans.update(project.id, plan.id, MarketingPlanUpdate(status=MarketingPlanStatus.active))
    return project


class TestUploadLocalProjects:
    @pytest.mark.asyncio
    async def test_requires_authentication(self, ctx):
        await build_local_project(ctx)

        with pytest.raises(AuthenticationRequiredError):
            await MigrationService(ctx).upload_local_projects()

        assert len(ctx.local_store.load().projects) == 1

    @pytest.mark.asyncio
    async def test_empty_store_is_noop(self, ctx, signed_in, mock_backend):
        id_map = await MigrationService(ctx).upload_local_projects()

        assert id_map == {}
        assert mock_backend.calls == []

    @pytest.mark.asyncio
    async def test_uploads_projects_and_children(self, ctx, auth, mock_backend):
        local = await build_local_project(ctx)
        auth.sign_in("token")

        id_map = await MigrationService(ctx).upload_local_projects()

        remote_id = id_map[local.id]
        assert remote_id != local.id
        remote = mock_backend.projects[remote_id]
        assert remote["name"] == "Offline work"
        assert remote["description"] == "Made while signed out"
        assert {t["title"]: t["status"] for t in mock_backend.records("todos", remote_id)} == {
            "Still pending": "pending",
            "Finished": "completed",
        }
        assert [m["status"] for m in mock_backend.records("milestones", remote_id)] == ["in_progress"]
        plans = mock_backend.records("marketing-plans", remote_id)
        assert [(p["status"], p["budget"]) for p in plans] == [("active", 250.0)]

    @pytest.mark.asyncio
    async def test_status_updates_only_when_not_default(self, ctx, auth, mock_backend):
        await build_local_project(ctx)
        auth.sign_in("token")

        await MigrationService(ctx).upload_local_projects()

        # project stays active; one todo, the milestone and the plan need a follow-up
        assert len(mock_backend.calls_to("PATCH")) == 3
        assert mock_backend.calls_to("PATCH", "/projects/remote-") == mock_backend.calls_to("PATCH")

    @pytest.mark.asyncio
    async def test_non_default_project_status_is_preserved(self, ctx, auth, mock_backend):
        project = await ProjectService(ctx).create_project(ProjectCreate(name="Done already"))
        await ProjectService(ctx).update_project(
            project.id, ProjectUpdate(status=ProjectStatus.completed)
        )
        auth.sign_in("token")

        id_map = await MigrationService(ctx).upload_local_projects()

        assert mock_backend.projects[id_map[project.id]]["status"] == "completed"

    @pytest.mark.asyncio
    async def test_success_clears_local_state_and_refetches(self, ctx, auth, mock_backend):
        local = await build_local_project(ctx)
        auth.sign_in("token")

        id_map = await MigrationService(ctx).upload_local_projects()

        assert ctx.local_store.load().projects == []
        assert ctx.state.local_projects_count == 0
        assert ctx.state.current_project is None
        assert [p.id for p in ctx.state.projects] == [id_map[local.id]]

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_local_state(self, ctx, auth, mock_backend):
        local = await build_local_project(ctx)
        before = ctx.local_store.load()
        auth.sign_in("token")
        mock_backend.fail("POST", "/todos", skip=1, status_code=500, body={"message": "Backend down"})

        with pytest.raises(MigrationError) as exc_info:
            await MigrationService(ctx).upload_local_projects()

        assert exc_info.value.message == "Backend down"
        assert exc_info.value.details["uploaded_projects"] == 1
        assert ctx.state.error == "Backend down"
        after = ctx.local_store.load()
        assert after == before
        assert len(after.tasks_by_project[local.id]) == 2
        assert ctx.state.current_project.id == local.id

    @pytest.mark.asyncio
    async def test_retry_after_failure_creates_duplicates(self, ctx, auth, mock_backend):
        await build_local_project(ctx)
        auth.sign_in("token")
        mock_backend.fail("POST", "/milestones", times=1)

        with pytest.raises(MigrationError):
            await MigrationService(ctx).upload_local_projects()
        await MigrationService(ctx).upload_local_projects()

        names = [p["name"] for p in mock_backend.projects.values()]
        assert names == ["Offline work", "Offline work"]

    @pytest.mark.asyncio
    async def test_failed_clear_is_reported(self, ctx, auth, durable_storage, monkeypatch):
        local = await ProjectService(ctx).create_project(ProjectCreate(name="Offline"))
        auth.sign_in("token")

        def broken_set(key, value):
            raise OSError("disk full")

        monkeypatch.setattr(durable_storage, "set", broken_set)

        with pytest.raises(MigrationError) as exc_info:
            await MigrationService(ctx).upload_local_projects()

        details = exc_info.value.details
        assert details["uploaded_projects"] == 1
        assert local.id in details["id_map"]
        assert ctx.state.error == exc_info.value.message
        assert [p.name for p in ctx.state.projects] == ["Offline"]
        assert [p.id for p in ctx.local_store.load().projects] == [local.id]
