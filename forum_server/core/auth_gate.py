# forum_server/core/auth_gate.py

import logging

from forum_server.core.credentials import CredentialStore
from forum_server.core.errors import StaleIdentity, Unauthorized
from forum_server.core.tokens import Identity, SessionTokenCodec


logger = logging.getLogger(__name__)


class AuthGate:
    """
    Decides whether the token presented with a request identifies a live user.

    No token, or one that fails verification, is denied as Unauthorized.
    A valid token whose user no longer exists is denied as StaleIdentity.
    """

    def __init__(self, codec: SessionTokenCodec, credentials: CredentialStore):
        self.codec = codec
        self.credentials = credentials

    def authenticate(self, token: str | None) -> Identity:
        if not token:
            logger.info("Denied: no session token presented")
            raise Unauthorized()

        try:
            identity = self.codec.verify(token)
        except Unauthorized as exc:
            logger.warning("Denied: %s", type(exc).__name__)
            raise

        if self.credentials.find_by_id(identity.user_id) is None:
            logger.warning("Denied: token for missing user %s", identity.user_id)
            raise StaleIdentity()

        return identity
