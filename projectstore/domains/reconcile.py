"""Merging of local and remote records into the views shown to the user."""

from datetime import datetime, timezone
from typing import Iterable, Sequence, TypeVar

from projectstore.schemas.base import RecordSchema
from projectstore.schemas.project import Project
from projectstore.shared.kinds import EntityKind
from projectstore.storage.session_overlay import SessionOverlayStore

R = TypeVar("R", bound=RecordSchema)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def effective_timestamp(project: Project) -> datetime:
    return project.updated_at or project.created_at or _EPOCH


def merge_project_lists(
    local_projects: Iterable[Project], remote_projects: Iterable[Project]
) -> list[Project]:
    """Combine both lists, one entry per id, most recently updated first.

    A later duplicate replaces the earlier value but keeps its position,
    so equal timestamps keep the input order.
    """
    by_id: dict[str, Project] = {}
    for project in [*local_projects, *remote_projects]:
        by_id[project.id] = project

    return sorted(by_id.values(), key=effective_timestamp, reverse=True)


class OverlayProjector:
    """Applies the session overlay to records fetched for a system project."""

    def __init__(self, overlay: SessionOverlayStore):
        self.overlay = overlay

    def project(self, kind: EntityKind, project_id: str, upstream: Sequence[R]) -> list[R]:
        deleted = self.overlay.tombstones(project_id, kind)
        session_records = self.overlay.records(project_id, kind)
        overrides = {record.id: record for record in session_records}

        effective: list[R] = []
        seen: set[str] = set()
        for record in upstream:
            if record.id in deleted or record.id in seen:
                continue
            seen.add(record.id)
            override = overrides.get(record.id)
            if override is not None:
                record = record.model_copy(update=override.model_dump(exclude_unset=True))
            effective.append(record)

        upstream_ids = {record.id for record in upstream}
        for record in session_records:
            if record.id in upstream_ids or record.id in deleted or record.id in seen:
                continue
            seen.add(record.id)
            effective.append(record)

        return effective
