"""
Integration tests for end-to-end local-first flows.

These wire every service to the real BackendClient, the in-process mock
backend and SQL-backed durable storage, and follow a user from guest
usage through sign-in and upload.
"""

import httpx
import pytest
import pytest_asyncio

from factories import ProjectFactory, TaskFactory, as_backend_record
from projectstore.core.context import build_context
from projectstore.domains.migration.service import MigrationService
from projectstore.domains.project.service import ProjectService
from projectstore.domains.todo.service import TaskService
from projectstore.exceptions.project import MigrationError
from projectstore.schemas.project import ProjectCreate
from projectstore.schemas.todo import TaskCreate, TaskStatus


@pytest_asyncio.fixture
async def sql_ctx(test_settings, auth, sql_storage, session_storage, mock_backend):
    """Context whose local projects live in SQLite."""
    context = build_context(
        test_settings,
        auth=auth,
        durable_storage=sql_storage,
        session_storage=session_storage,
        transport=httpx.ASGITransport(app=mock_backend.app),
    )
    try:
        yield context
    finally:
        await context.aclose()


class TestGuestWorkflow:
    @pytest.mark.asyncio
    async def test_toggle_twice_completes_task(self, sql_ctx):
        project = await ProjectService(sql_ctx).create_project(ProjectCreate(name="Demo"))
        tasks = TaskService(sql_ctx)
        task = await tasks.create(project.id, TaskCreate(title="Write landing page"))

        task = await tasks.toggle_task_status(project.id, task)
        task = await tasks.toggle_task_status(project.id, task)

        assert task.status == TaskStatus.completed
        stored = sql_ctx.local_store.load().find_project(project.id)
        assert (stored.todo_count, stored.completed_todo_count) == (1, 1)
        assert sql_ctx.state.find_project(project.id).completed_todo_count == 1

    @pytest.mark.asyncio
    async def test_three_toggles_return_to_start(self, sql_ctx):
        project = await ProjectService(sql_ctx).create_project(ProjectCreate(name="Demo"))
        tasks = TaskService(sql_ctx)
        task = await tasks.create(project.id, TaskCreate(title="Cycle"))

        for _ in range(3):
            task = await tasks.toggle_task_status(project.id, task)

        assert task.status == TaskStatus.pending
        assert sql_ctx.local_store.load().find_project(project.id).completed_todo_count == 0

    @pytest.mark.asyncio
    async def test_local_projects_survive_a_new_context(
        self, test_settings, auth, sql_storage, sql_ctx, mock_backend
    ):
        project = await ProjectService(sql_ctx).create_project(ProjectCreate(name="Kept"))
        await TaskService(sql_ctx).create(project.id, TaskCreate(title="Remember me"))

        reopened = build_context(
            test_settings,
            auth=auth,
            durable_storage=sql_storage,
            transport=httpx.ASGITransport(app=mock_backend.app),
        )
        try:
            opened = await ProjectService(reopened).fetch_project(project.id)
        finally:
            await reopened.aclose()

        assert [t.title for t in opened.todos] == ["Remember me"]
        assert opened.project.todo_count == 1


class TestSystemProjectSession:
    @pytest.mark.asyncio
    async def test_deleted_task_stays_hidden_after_backend_changes(
        self, ctx, mock_backend, system_project
    ):
        await ProjectService(ctx).fetch_projects()
        tasks = TaskService(ctx)
        fetched = await tasks.fetch(system_project.id)
        task_a = next(t for t in fetched if t.title == "Task A")

        await tasks.delete(system_project.id, task_a.id)
        mock_backend.add_child(
            "todos", system_project.id, as_backend_record(TaskFactory(title="Task C"))
        )
        refetched = await tasks.fetch(system_project.id)

        assert [t.title for t in refetched] == ["Task B", "Task C"]
        assert [t.title for t in mock_backend.records("todos", system_project.id)] == [
            "Task A",
            "Task B",
            "Task C",
        ]

    @pytest.mark.asyncio
    async def test_clearing_the_session_restores_upstream(self, ctx, system_project):
        await ProjectService(ctx).fetch_projects()
        tasks = TaskService(ctx)
        fetched = await tasks.fetch(system_project.id)
        await tasks.delete(system_project.id, fetched[0].id)
        await tasks.create(system_project.id, TaskCreate(title="Mine"))

        ProjectService(ctx).clear_demo_session()

        assert [t.title for t in await tasks.fetch(system_project.id)] == ["Task A", "Task B"]


class TestSignInAndUpload:
    @pytest.mark.asyncio
    async def test_upload_replaces_local_project(self, sql_ctx, auth, mock_backend):
        local = await ProjectService(sql_ctx).create_project(ProjectCreate(name="Demo"))
        await TaskService(sql_ctx).create(local.id, TaskCreate(title="Ship it"))

        auth.sign_in("token")
        id_map = await MigrationService(sql_ctx).upload_local_projects()

        assert sql_ctx.local_store.load().projects == []
        assert sql_ctx.state.has_local_projects is False
        remote_id = id_map[local.id]
        assert remote_id != local.id
        assert [p.id for p in sql_ctx.state.projects] == [remote_id]
        assert [t["title"] for t in mock_backend.records("todos", remote_id)] == ["Ship it"]

    @pytest.mark.asyncio
    async def test_failed_upload_keeps_everything_local(self, sql_ctx, auth, mock_backend):
        local = await ProjectService(sql_ctx).create_project(ProjectCreate(name="Demo"))
        tasks = TaskService(sql_ctx)
        await tasks.create(local.id, TaskCreate(title="First"))
        await tasks.create(local.id, TaskCreate(title="Second"))
        auth.sign_in("token")
        mock_backend.fail("POST", "/todos", skip=1)

        with pytest.raises(MigrationError):
            await MigrationService(sql_ctx).upload_local_projects()

        stored = sql_ctx.local_store.load()
        assert [p.id for p in stored.projects] == [local.id]
        assert [t.title for t in stored.tasks_by_project[local.id]] == ["First", "Second"]
        assert sql_ctx.state.local_projects_count == 1

    @pytest.mark.asyncio
    async def test_local_and_remote_projects_are_merged(self, ctx, auth, mock_backend):
        remote = ProjectFactory(name="From the cloud")
        remote.updated_at = remote.updated_at.replace(year=remote.updated_at.year - 1)
        mock_backend.add_project(as_backend_record(remote))
        local = await ProjectService(ctx).create_project(ProjectCreate(name="Made offline"))
        auth.sign_in("token")

        projects = await ProjectService(ctx).fetch_projects()
        again = await ProjectService(ctx).fetch_projects()

        assert [p.id for p in projects] == [local.id, remote.id]
        assert [p.id for p in again] == [local.id, remote.id]
