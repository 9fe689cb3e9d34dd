# projectstore/core/context.py
"""The single object graph shared by every service in a session."""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from projectstore.core.config import Settings, settings as default_settings
from projectstore.core.security import AuthState
from projectstore.database import create_local_engine
from projectstore.domains.reconcile import OverlayProjector
from projectstore.domains.state import PaginationMeta, ProjectsState
from projectstore.services.backend_client import BackendClient
from projectstore.storage.kv import KeyValueStorage, MemoryKeyValueStorage, SqlKeyValueStorage
from projectstore.storage.local_store import LocalStore
from projectstore.storage.session_overlay import SessionOverlayStore

logger = logging.getLogger(__name__)


@dataclass
class StoreContext:
    """Stores, backend client, auth and view state for one session.

    Built once per process and passed by reference to the services; the
    overlay store in particular must not be duplicated, since it holds the
    session's only in-memory copy of the overlay.
    """

    settings: Settings
    auth: AuthState
    backend: BackendClient
    local_store: LocalStore
    overlay: SessionOverlayStore
    projector: OverlayProjector
    state: ProjectsState

    async def aclose(self) -> None:
        await self.backend.aclose()


def build_context(
    settings: Optional[Settings] = None,
    *,
    auth: Optional[AuthState] = None,
    durable_storage: Optional[KeyValueStorage] = None,
    session_storage: Optional[KeyValueStorage] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> StoreContext:
    settings = settings or default_settings
    auth = auth or AuthState()

    if durable_storage is None:
        engine = create_local_engine(settings.local_database_url, echo=settings.debug)
        durable_storage = SqlKeyValueStorage(engine)
    if session_storage is None:
        session_storage = MemoryKeyValueStorage()

    overlay = SessionOverlayStore(session_storage, settings.demo_session_key)
    local_store = LocalStore(durable_storage, settings.local_projects_storage_key)
    state = ProjectsState(meta=PaginationMeta(limit=settings.page_size))
    state.local_projects_count = len(local_store.load().projects)

    backend = BackendClient(
        settings.backend_url,
        auth,
        timeout=settings.request_timeout,
        transport=transport,
    )
    logger.info(
        "Store context ready (backend=%s, local projects=%d)",
        settings.backend_url,
        state.local_projects_count,
    )

    return StoreContext(
        settings=settings,
        auth=auth,
        backend=backend,
        local_store=local_store,
        overlay=overlay,
        projector=OverlayProjector(overlay),
        state=state,
    )
