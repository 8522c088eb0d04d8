# forum_server/api/deps.py

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from forum_server.config import Settings
from forum_server.core.accounts import AccountService
from forum_server.core.auth_gate import AuthGate
from forum_server.core.content_service import ContentService
from forum_server.core.content_tree import ContentTreeStore
from forum_server.core.credentials import CredentialStore
from forum_server.core.tokens import SessionTokenCodec
from forum_server.database import get_db


AUTH_COOKIE = "AuthToken"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_codec(settings: Settings = Depends(get_app_settings)) -> SessionTokenCodec:
    return SessionTokenCodec(settings.jwt_secret_key, settings.access_token_expire_minutes)


def get_session_token(request: Request, bearer: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    """The session token from the AuthToken cookie, else from the Authorization header."""
    return request.cookies.get(AUTH_COOKIE) or bearer


def get_credentials(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_account_service(
    credentials: CredentialStore = Depends(get_credentials),
    codec: SessionTokenCodec = Depends(get_codec),
) -> AccountService:
    return AccountService(credentials, codec)


def get_auth_gate(
    credentials: CredentialStore = Depends(get_credentials),
    codec: SessionTokenCodec = Depends(get_codec),
) -> AuthGate:
    return AuthGate(codec, credentials)


def get_content_service(
    db: Session = Depends(get_db),
    gate: AuthGate = Depends(get_auth_gate),
    settings: Settings = Depends(get_app_settings),
) -> ContentService:
    return ContentService(ContentTreeStore(db), gate, require_authorship=settings.require_authorship)
