"""Authentication state consulted before every local-vs-remote routing choice."""

import logging
import time
from typing import Optional

import jwt
from jwt import InvalidTokenError

logger = logging.getLogger(__name__)


class AuthState:
    """
    Holds the access credential handed over by the host's auth subsystem.

    The token has already been validated by whoever issued it, so it is only
    decoded here (without signature verification) to honour its ``exp``
    claim. Opaque, non-JWT tokens are trusted as long as they are present.

    :ivar access_token: Bearer token for the authoritative backend, if any.
    :type access_token: Optional[str]
    """

    def __init__(self, access_token: Optional[str] = None):
        self.access_token = access_token

    @property
    def is_authenticated(self) -> bool:
        if not self.access_token:
            return False
        expires_at = self._expiry(self.access_token)
        return expires_at is None or expires_at > time.time()

    def sign_in(self, access_token: str) -> None:
        self.access_token = access_token
        logger.info("Access token set; authenticated=%s", self.is_authenticated)

    def sign_out(self) -> None:
        self.access_token = None
        logger.info("Signed out")

    @staticmethod
    def _expiry(token: str) -> Optional[float]:
        try:
            payload = jwt.decode(
                token,
                key="",
                options={
                    "verify_signature": False,
                    "verify_aud": False,
                    "verify_exp": False,
                },
            )
        except InvalidTokenError:
            return None
        exp = payload.get("exp")
        return float(exp) if isinstance(exp, (int, float)) else None
