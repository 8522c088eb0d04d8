# forum_server/core/accounts.py

import logging
from typing import Tuple

from forum_server.core.credentials import CredentialStore
from forum_server.core.tokens import SessionTokenCodec
from forum_server.models.user import User


logger = logging.getLogger(__name__)


class AccountService:
    """Registration and login; both hand back a fresh session token."""

    def __init__(self, credentials: CredentialStore, codec: SessionTokenCodec):
        self.credentials = credentials
        self.codec = codec

    def register(self, username: str, password: str) -> Tuple[User, str]:
        user = self.credentials.register(username, password)
        return user, self.codec.issue(user.id, user.username)

    def login(self, username: str, password: str) -> Tuple[User, str]:
        user = self.credentials.verify(username, password)
        logger.info("User %s logged in", user.username)
        return user, self.codec.issue(user.id, user.username)
