# forum_server/core/credentials.py

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from forum_server.core.errors import DuplicateUsername, InvalidCredentials, NotFound, ValidationError
from forum_server.database import store_errors, unit_of_work
from forum_server.models.user import User


logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6
# bcrypt ignores everything past this many bytes
PASSWORD_MAX_BYTES = 72

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class CredentialStore:
    """
    Persists users and checks their passwords.
    Only the salted bcrypt hash of a password is ever stored.
    """

    def __init__(self, db: Session):
        self.db = db

    def register(self, username: str, password: str) -> User:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Username and password are required")
        if len(username) < USERNAME_MIN_LENGTH:
            raise ValidationError(f"Username must be at least {USERNAME_MIN_LENGTH} characters")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        if "\x00" in password:
            raise ValidationError("Password must not contain NUL characters")

        if self.find_by_username(username) is not None:
            raise DuplicateUsername()

        user = User(username=username, hashed_password=get_password_hash(password))
        try:
            with unit_of_work(self.db):
                self.db.add(user)
        except IntegrityError as exc:
            # lost a race against a concurrent registration
            raise DuplicateUsername() from exc

        logger.info("Registered user %s (%s)", user.username, user.id)
        return user

    def verify(self, username: str, password: str) -> User:
        username = (username or "").strip()
        user = self.find_by_username(username)
        if user is None:
            raise NotFound(f"No user found with username {username}")
        password = password or ""
        if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise InvalidCredentials()
        try:
            matches = verify_password(password, user.hashed_password)
        except ValueError:
            # passlib rejects inputs bcrypt cannot hash, e.g. NUL bytes
            matches = False
        if not matches:
            raise InvalidCredentials()
        return user

    def find_by_id(self, user_id: str) -> User | None:
        with store_errors():
            return self.db.get(User, user_id)

    def find_by_username(self, username: str) -> User | None:
        with store_errors():
            return self.db.query(User).filter(User.username == username).first()
