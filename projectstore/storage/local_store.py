"""Durable store for projects created while signed out."""

import json
import logging

from pydantic import ValidationError

from projectstore.exceptions.base import LocalStorageError
from projectstore.schemas.project import ProjectCounts
from projectstore.schemas.storage import (
    LOCAL_STORE_VERSION,
    PAYLOAD_VERSIONS,
    LocalStoreData,
    LocalStoreV1,
)
from projectstore.schemas.todo import TaskStatus
from projectstore.storage.kv import KeyValueStorage

logger = logging.getLogger(__name__)


class LocalStore:
    """Versioned container of locally-owned projects and their children.

    ``load`` and ``save`` never raise: a payload that cannot be read is
    replaced by an empty store, and a failed write is logged and dropped.
    """

    def __init__(self, storage: KeyValueStorage, key: str):
        self.storage = storage
        self.key = key

    @staticmethod
    def empty() -> LocalStoreData:
        return LocalStoreV1()

    def load(self) -> LocalStoreData:
        """Read the persisted payload, or an empty store when it is unusable."""
        try:
            raw = self.storage.get(self.key)
        except Exception:
            logger.exception("Failed to read local projects from storage")
            return self.empty()

        if not raw:
            logger.debug("No local projects payload found")
            return self.empty()

        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning("Discarding corrupt local projects payload: %s", e)
            return self.empty()

        version = parsed.get("version") if isinstance(parsed, dict) else None
        if version != LOCAL_STORE_VERSION or version not in PAYLOAD_VERSIONS:
            logger.warning(
                "Local projects version mismatch, expected %s got %r; starting empty",
                LOCAL_STORE_VERSION,
                version,
            )
            return self.empty()

        try:
            data = PAYLOAD_VERSIONS[version].model_validate(parsed)
        except ValidationError as e:
            logger.warning("Discarding invalid local projects payload: %s", e)
            return self.empty()

        logger.debug("Loaded %d local projects", len(data.projects))
        return data

    def save(self, data: LocalStoreData) -> None:
        """Serialize and persist ``data``; failures are logged, not raised."""
        try:
            payload = data.model_dump_json(by_alias=True)
            self.storage.set(self.key, payload)
        except Exception:
            logger.exception("Failed to save local projects to storage")
            return
        logger.debug("Saved %d local projects (%d bytes)", len(data.projects), len(payload))

    def clear(self) -> None:
        """Empty the store; unlike ``save``, a failed write is raised."""
        try:
            self.storage.set(self.key, self.empty().model_dump_json(by_alias=True))
        except Exception as e:
            logger.exception("Failed to clear local projects storage")
            raise LocalStorageError(details={"reason": str(e)}) from e
        logger.info("Local projects storage cleared")

    @staticmethod
    def compute_counts(data: LocalStoreData, project_id: str) -> ProjectCounts:
        tasks = data.tasks_by_project.get(project_id, [])
        milestones = data.milestones_by_project.get(project_id, [])
        return ProjectCounts(
            todo_count=len(tasks),
            completed_todo_count=sum(1 for t in tasks if t.status == TaskStatus.completed),
            milestone_count=len(milestones),
        )

    def recompute_counts(self, data: LocalStoreData, project_id: str) -> ProjectCounts:
        """Derive the counters of one project and write them onto its record."""
        counts = self.compute_counts(data, project_id)
        for index, project in enumerate(data.projects):
            if project.id == project_id:
                data.projects[index] = project.model_copy(update=counts.model_dump())
        return counts

    def recompute_all(self, data: LocalStoreData) -> LocalStoreData:
        for project in list(data.projects):
            self.recompute_counts(data, project.id)
        return data
