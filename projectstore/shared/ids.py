"""Identifier and timestamp helpers for locally-created records."""

import random
import string
import time
import uuid
from datetime import datetime, timezone

_BASE36 = string.digits + string.ascii_lowercase


def generate_id(prefix: str) -> str:
    """Return an identifier unique within this store's lifetime.

    Local ids only need to avoid collisions locally: every one of them is
    replaced by a backend id when the record is uploaded.
    """
    try:
        return str(uuid.uuid4())
    except (NotImplementedError, OSError):
        # No OS randomness source; fall back to time plus a random suffix.
        suffix = "".join(random.choices(_BASE36, k=8))
        return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
