"""
Unit tests for the durable local store.
"""

import json
import logging
from unittest.mock import MagicMock

import pytest

from factories import MilestoneFactory, ProjectFactory, TaskFactory
from projectstore.exceptions.base import LocalStorageError
from projectstore.schemas.storage import LocalStoreV1
from projectstore.schemas.todo import TaskStatus
from projectstore.storage.kv import MemoryKeyValueStorage
from projectstore.storage.local_store import LocalStore

KEY = "synthstack_local_projects_v1"


def make_store(storage=None):
    return LocalStore(storage or MemoryKeyValueStorage(), KEY)


def sample_data() -> LocalStoreV1:
    project = ProjectFactory(name="Demo")
    data = LocalStoreV1(projects=[project])
    data.tasks_by_project[project.id] = [
        TaskFactory(project_id=project.id),
        TaskFactory(project_id=project.id, status=TaskStatus.completed),
    ]
    data.milestones_by_project[project.id] = [MilestoneFactory(project_id=project.id)]
    data.marketing_plans_by_project[project.id] = []
    return data


class TestLoad:
    def test_missing_payload_gives_empty_store(self):
        data = make_store().load()

        assert data.version == 1
        assert data.projects == []
        assert data.tasks_by_project == {}

    def test_corrupt_json_gives_empty_store(self, caplog):
        storage = MemoryKeyValueStorage()
        storage.set(KEY, "{not json")

        with caplog.at_level(logging.WARNING):
            data = make_store(storage).load()

        assert data.projects == []
        assert "corrupt" in caplog.text

    def test_version_mismatch_discards_payload(self, caplog):
        storage = MemoryKeyValueStorage()
        payload = json.loads(sample_data().model_dump_json(by_alias=True))
        payload["version"] = 2
        storage.set(KEY, json.dumps(payload))

        with caplog.at_level(logging.WARNING):
            data = make_store(storage).load()

        assert data.projects == []
        assert "version mismatch" in caplog.text

    def test_wrongly_shaped_payload_gives_empty_store(self):
        storage = MemoryKeyValueStorage()
        storage.set(KEY, json.dumps({"version": 1, "projects": [{"name": 3}]}))

        assert make_store(storage).load().projects == []

    def test_non_object_payload_gives_empty_store(self):
        storage = MemoryKeyValueStorage()
        storage.set(KEY, "[1, 2, 3]")

        assert make_store(storage).load().projects == []

    def test_read_failure_gives_empty_store(self):
        storage = MagicMock()
        storage.get.side_effect = OSError("disk gone")

        assert make_store(storage).load().projects == []


class TestSave:
    def test_round_trip(self):
        store = make_store()
        original = sample_data()

        store.save(original)
        loaded = store.load()

        assert loaded == original

    def test_save_of_load_is_idempotent(self):
        storage = MemoryKeyValueStorage()
        store = make_store(storage)
        store.save(sample_data())

        store.save(store.load())
        once = storage.get(KEY)
        store.save(store.load())
        twice = storage.get(KEY)

        assert once == twice

    def test_persisted_keys_are_camel_case(self):
        storage = MemoryKeyValueStorage()
        data = sample_data()
        make_store(storage).save(data)

        payload = json.loads(storage.get(KEY))

        assert set(payload) == {
            "version",
            "projects",
            "todosByProject",
            "milestonesByProject",
            "marketingPlansByProject",
        }
        project = payload["projects"][0]
        assert {"isSystem", "createdAt", "updatedAt", "todoCount"} <= set(project)
        task = payload["todosByProject"][data.projects[0].id][0]
        assert "projectId" in task

    def test_write_failure_is_logged_not_raised(self, caplog):
        storage = MagicMock()
        storage.set.side_effect = OSError("quota exceeded")

        with caplog.at_level(logging.ERROR):
            make_store(storage).save(sample_data())

        assert "Failed to save local projects" in caplog.text

    def test_clear(self):
        storage = MemoryKeyValueStorage()
        store = make_store(storage)
        store.save(sample_data())

        store.clear()

        assert store.load().projects == []

    def test_clear_failure_is_raised(self):
        storage = MagicMock()
        storage.set.side_effect = OSError("disk full")

        with pytest.raises(LocalStorageError):
            make_store(storage).clear()


class TestCounts:
    def test_recompute_counts_updates_project(self):
        data = sample_data()
        project_id = data.projects[0].id

        counts = make_store().recompute_counts(data, project_id)

        assert (counts.todo_count, counts.completed_todo_count, counts.milestone_count) == (2, 1, 1)
        assert data.projects[0].todo_count == 2
        assert data.projects[0].completed_todo_count == 1
        assert data.projects[0].milestone_count == 1

    def test_counts_of_project_without_children(self):
        project = ProjectFactory(todo_count=5)
        data = LocalStoreV1(projects=[project])

        make_store().recompute_all(data)

        assert data.projects[0].todo_count == 0
