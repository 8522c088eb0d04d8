# tests/conftest.py
import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from forum_server.config import Settings
from forum_server.core.auth_gate import AuthGate
from forum_server.core.content_service import ContentService
from forum_server.core.content_tree import ContentTreeStore
from forum_server.core.credentials import CredentialStore
from forum_server.core.tokens import SessionTokenCodec
from forum_server.database import create_session_factory, create_store_engine, init_db
from forum_server.main import create_app

SECRET = "test-secret"


@pytest.fixture
def db():
    """A session bound to a fresh in-memory store."""
    engine = create_store_engine("sqlite://")
    init_db(engine)
    session = create_session_factory(engine)()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def credentials(db):
    return CredentialStore(db)


@pytest.fixture
def codec():
    return SessionTokenCodec(SECRET)


@pytest.fixture
def gate(codec, credentials):
    return AuthGate(codec, credentials)


@pytest.fixture
def tree(db):
    return ContentTreeStore(db)


@pytest.fixture
def service(tree, gate):
    return ContentService(tree, gate)


@pytest.fixture
def alice(credentials):
    return credentials.register("alice", "secret123")


@pytest.fixture
def alice_token(codec, alice):
    return codec.issue(alice.id, alice.username)


@pytest.fixture
def settings():
    return Settings(jwt_secret_key=SECRET, database_url="sqlite://", cookie_secure=False)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
