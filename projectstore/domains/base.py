"""Shared plumbing for the entity services."""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Generic, Iterator, Optional, TypeVar

from pydantic import BaseModel

from projectstore.core.context import StoreContext
from projectstore.domains.provenance import Provenance, classify_provenance
from projectstore.exceptions.base import BaseAppException, NotFoundError
from projectstore.schemas.base import RecordSchema
from projectstore.schemas.storage import LocalStoreData
from projectstore.services.backend_client import ChildResource
from projectstore.shared.ids import generate_id, utc_now
from projectstore.shared.kinds import EntityKind

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=RecordSchema)


class StoreService:
    """Base class giving services access to the session's stores."""

    def __init__(self, ctx: StoreContext):
        self.ctx = ctx
        self.state = ctx.state
        self.backend = ctx.backend
        self.local_store = ctx.local_store
        self.overlay = ctx.overlay

    @contextmanager
    def _recording_errors(self, fallback: str) -> Iterator[None]:
        """Mirror a failure's message into ``state.error`` and re-raise it."""
        self.state.error = None
        try:
            yield
        except BaseAppException as e:
            self.state.error = e.message or fallback
            raise

    def _load_local(self) -> LocalStoreData:
        data = self.local_store.recompute_all(self.local_store.load())
        self.state.local_projects_count = len(data.projects)
        return data

    def _persist_local(self, data: LocalStoreData) -> None:
        self.local_store.save(self.local_store.recompute_all(data))
        self.state.local_projects_count = len(data.projects)

    def _classify(self, project_id: str, local: LocalStoreData) -> Provenance:
        return classify_provenance(project_id, local, self.state)

    @staticmethod
    def _apply_update(record: R, data: BaseModel) -> R:
        """Return ``record`` with the fields set on ``data``, validated as a whole."""
        changes = {name: getattr(data, name) for name in data.model_fields_set}
        changes["updated_at"] = utc_now()
        return type(record).model_validate({**record.model_dump(), **changes})


class ChildRecordService(StoreService, Generic[R]):
    """Create/update/delete of one child kind, routed by project provenance.

    Local projects are written to the durable store, system projects to the
    session overlay, and everything else goes through the backend, whose
    response becomes the record kept in memory.
    """

    kind: EntityKind
    record_schema: type[R]
    not_found_error: type[NotFoundError] = NotFoundError

    def _resource(self) -> ChildResource:
        raise NotImplementedError

    def _build(self, project_id: str, record_id: str, data: BaseModel, now: datetime) -> R:
        """Construct a new local or overlay record from creation data."""
        raise NotImplementedError

    def _local_records(self, local: LocalStoreData, project_id: str) -> list[R]:
        return list(getattr(local, self.kind.collection).get(project_id, []))

    def _set_local_records(self, local: LocalStoreData, project_id: str, records: list[R]):
        getattr(local, self.kind.collection)[project_id] = records

    def _commit_local(self, local: LocalStoreData, project_id: str) -> None:
        counts = self.local_store.recompute_counts(local, project_id)
        self._persist_local(local)
        self.state.apply_counts(project_id, counts)

    @staticmethod
    def _matches(record: R, status: Optional[Any]) -> bool:
        return status is None or getattr(record, "status", None) == status

    def _in_view(self, project_id: str, record_id: str) -> Optional[R]:
        for record in self.state.children(self.kind):
            if record.id == record_id and record.project_id == project_id:
                return record
        return None

    async def get(self, project_id: str, record_id: str) -> R:
        """Return a record from the current view, loading the project's records if needed."""
        record = self._in_view(project_id, record_id)
        if record is None:
            await self.fetch(project_id)
            record = self._in_view(project_id, record_id)
        if record is None:
            raise self.not_found_error()
        return record

    async def fetch(self, project_id: str, status: Optional[Any] = None) -> list[R]:
        """Load the effective records of a project into the view.

        Failures are recorded in ``state.error`` and leave the view as it was.
        """
        try:
            local = self._load_local()
            provenance = self._classify(project_id, local)

            if provenance == Provenance.LOCAL_OWNED:
                records = self._local_records(local, project_id)
                counts = self.local_store.recompute_counts(local, project_id)
                self._persist_local(local)
                self.state.apply_counts(project_id, counts)
            else:
                upstream = await self._resource().list(project_id, status=status)
                if provenance == Provenance.SHARED_SYSTEM:
                    records = self.ctx.projector.project(self.kind, project_id, upstream)
                else:
                    records = upstream
        except BaseAppException as e:
            logger.error("Failed to fetch %ss for project %s: %s", self.kind.value, project_id, e)
            self.state.error = e.message or f"Failed to fetch {self.kind.label.lower()}s"
            return []

        records = [r for r in records if self._matches(r, status)]
        self.state.set_children(self.kind, records)
        return records

    async def create(self, project_id: str, data: BaseModel) -> R:
        with self._recording_errors(f"Failed to create {self.kind.label.lower()}"):
            local = self._load_local()
            provenance = self._classify(project_id, local)

            if provenance == Provenance.LOCAL_OWNED:
                record = self._build(
                    project_id, generate_id(self.kind.id_prefix), data, utc_now()
                )
                self._set_local_records(
                    local, project_id, [*self._local_records(local, project_id), record]
                )
                self._commit_local(local, project_id)
            elif provenance == Provenance.SHARED_SYSTEM:
                record = self._build(
                    project_id, generate_id(f"demo_{self.kind.id_prefix}"), data, utc_now()
                )
                self.overlay.upsert(project_id, self.kind, record)
            else:
                record = await self._resource().create(project_id, data)

            self.state.add_child(self.kind, record)
            logger.debug(
                "Created %s %s in %s project %s",
                self.kind.value,
                record.id,
                provenance.value,
                project_id,
            )
            return record

    async def update(self, project_id: str, record_id: str, data: BaseModel) -> R:
        with self._recording_errors(f"Failed to update {self.kind.label.lower()}"):
            local = self._load_local()
            provenance = self._classify(project_id, local)

            if provenance == Provenance.LOCAL_OWNED:
                records = self._local_records(local, project_id)
                index = next((i for i, r in enumerate(records) if r.id == record_id), None)
                if index is None:
                    raise self.not_found_error()
                updated = self._apply_update(records[index], data)
                records[index] = updated
                self._set_local_records(local, project_id, records)
                self._commit_local(local, project_id)
            elif provenance == Provenance.SHARED_SYSTEM:
                existing = self._find_shared(project_id, record_id)
                updated = self._apply_update(existing, data)
                self.overlay.upsert(project_id, self.kind, updated)
            else:
                updated = await self._resource().update(project_id, record_id, data)

            self.state.replace_child(self.kind, updated)
            return updated

    async def delete(self, project_id: str, record_id: str) -> None:
        with self._recording_errors(f"Failed to delete {self.kind.label.lower()}"):
            local = self._load_local()
            provenance = self._classify(project_id, local)

            if provenance == Provenance.LOCAL_OWNED:
                records = self._local_records(local, project_id)
                self._set_local_records(
                    local, project_id, [r for r in records if r.id != record_id]
                )
                self._commit_local(local, project_id)
            elif provenance == Provenance.SHARED_SYSTEM:
                self.overlay.record_deletion(project_id, self.kind, record_id)
            else:
                await self._resource().delete(project_id, record_id)

            self.state.remove_child(self.kind, record_id)

    def _find_shared(self, project_id: str, record_id: str) -> R:
        record = self._in_view(project_id, record_id)
        if record is not None:
            return record
        for record in self.overlay.records(project_id, self.kind):
            if record.id == record_id:
                return record
        raise self.not_found_error()
