"""Key-value storage backends used by the local and session stores."""

from typing import Optional, Protocol

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from projectstore.database import create_session_factory
from projectstore.models import KeyValueEntry


class KeyValueStorage(Protocol):
    """String-to-string storage; implementations may raise on write."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryKeyValueStorage:
    """Process-lifetime storage, used for session-scoped data."""

    def __init__(self):
        self._items: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()


class SqlKeyValueStorage:
    """Durable storage in a single ``kv_entries`` table."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory: sessionmaker = create_session_factory(engine)

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session, session.begin():
            entry = session.get(KeyValueEntry, key)
            if entry is None:
                session.add(KeyValueEntry(key=key, value=value))
            else:
                entry.value = value

    def remove(self, key: str) -> None:
        with self._session_factory() as session, session.begin():
            entry = session.get(KeyValueEntry, key)
            if entry is not None:
                session.delete(entry)
