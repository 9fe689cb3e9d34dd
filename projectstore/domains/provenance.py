"""Classification of a project by the store that owns its records."""

import logging
from enum import Enum

from projectstore.domains.state import ProjectsState
from projectstore.schemas.storage import LocalStoreData

logger = logging.getLogger(__name__)


class Provenance(str, Enum):
    LOCAL_OWNED = "local_owned"
    SHARED_SYSTEM = "shared_system"
    REMOTE_OWNED = "remote_owned"


def classify_provenance(
    project_id: str, local: LocalStoreData, state: ProjectsState
) -> Provenance:
    """Decide which store handles writes to ``project_id`` and its children.

    Local projects stay local even after signing in, until they are uploaded.
    """
    if local.has_project(project_id):
        provenance = Provenance.LOCAL_OWNED
    else:
        known = state.find_project(project_id)
        if known is not None and known.is_system:
            provenance = Provenance.SHARED_SYSTEM
        else:
            provenance = Provenance.REMOTE_OWNED

    logger.debug("Project %s classified as %s", project_id, provenance.value)
    return provenance
