"""Session-scoped overlay of changes made to shared (system) projects."""

import logging

from pydantic import ValidationError

from projectstore.schemas.base import RecordSchema
from projectstore.schemas.storage import OverlayData
from projectstore.shared.kinds import EntityKind
from projectstore.storage.kv import KeyValueStorage

logger = logging.getLogger(__name__)


class SessionOverlayStore:
    """Holds creations, updates and tombstones for system projects.

    One instance lives for the whole session and is shared by every
    service. Session storage is read once, on first use; from then on the
    in-memory copy is authoritative and every write is mirrored back.
    A failed mirror write is logged and the in-memory change stands.

    Only records of system projects may be written here; routing records
    of local or remote projects into the overlay is a caller bug.
    """

    def __init__(self, storage: KeyValueStorage, key: str):
        self.storage = storage
        self.key = key
        self._data = OverlayData()
        self._loaded = False

    def load(self) -> OverlayData:
        """Return the overlay, reading session storage on first use only."""
        if self._loaded:
            return self._data
        self._loaded = True

        try:
            raw = self.storage.get(self.key)
        except Exception:
            logger.exception("Failed to read demo session from storage")
            return self._data

        if raw:
            try:
                self._data = OverlayData.model_validate_json(raw)
            except ValidationError as e:
                logger.warning("Discarding unreadable demo session: %s", e)
                self._data = OverlayData()
        return self._data

    def save(self, data: OverlayData | None = None) -> None:
        if data is not None:
            self._data = data
            self._loaded = True
        try:
            self.storage.set(self.key, self._data.model_dump_json(by_alias=True))
        except Exception:
            logger.exception("Failed to save demo session to storage")

    def records(self, project_id: str, kind: EntityKind) -> list:
        return list(getattr(self.load(), kind.collection).get(project_id, []))

    def tombstones(self, project_id: str, kind: EntityKind) -> set[str]:
        return set(getattr(self.load(), kind.tombstones).get(project_id, set()))

    def upsert(self, project_id: str, kind: EntityKind, record: RecordSchema) -> RecordSchema:
        """Store ``record``, replacing the overlay entry with the same id."""
        data = self.load()
        collection = getattr(data, kind.collection)
        items = list(collection.get(project_id, []))
        for index, existing in enumerate(items):
            if existing.id == record.id:
                items[index] = record
                break
        else:
            items.append(record)
        collection[project_id] = items
        self.save(data)
        return record

    def record_deletion(self, project_id: str, kind: EntityKind, record_id: str) -> None:
        """Tombstone ``record_id`` and drop any overlay entry for it."""
        data = self.load()
        getattr(data, kind.tombstones).setdefault(project_id, set()).add(record_id)

        collection = getattr(data, kind.collection)
        if project_id in collection:
            collection[project_id] = [r for r in collection[project_id] if r.id != record_id]

        self.save(data)
        logger.debug("Tombstoned %s %s in project %s", kind.value, record_id, project_id)

    def clear(self) -> None:
        self._data = OverlayData()
        self._loaded = True
        try:
            self.storage.remove(self.key)
        except Exception:
            logger.exception("Failed to clear demo session storage")
            return
        logger.info("Demo session cleared")
