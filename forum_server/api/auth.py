# forum_server/api/auth.py

from fastapi import APIRouter, Depends, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel

from forum_server.api.deps import (
    AUTH_COOKIE,
    get_account_service,
    get_auth_gate,
    get_session_token,
    get_app_settings,
)
from forum_server.config import Settings
from forum_server.core.accounts import AccountService
from forum_server.core.auth_gate import AuthGate


router = APIRouter(prefix="/auth", tags=["auth"])


class Credentials(BaseModel):
    username: str = ""
    password: str = ""


class Token(BaseModel):
    id: str
    access_token: str
    token_type: str


class Me(BaseModel):
    id: str
    username: str


def set_auth_cookie(response: Response, token: str, settings: Settings):
    response.set_cookie(
        AUTH_COOKIE,
        token,
        httponly=True,
        secure=settings.cookie_secure,
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
    )


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=Token)
def register(
    body: Credentials,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
):
    user, token = accounts.register(body.username, body.password)
    set_auth_cookie(response, token, settings)
    return {"id": user.id, "access_token": token, "token_type": "bearer"}


@router.post("/login", response_model=Token)
def login(
    body: Credentials,
    response: Response,
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
):
    user, token = accounts.login(body.username, body.password)
    set_auth_cookie(response, token, settings)
    return {"id": user.id, "access_token": token, "token_type": "bearer"}


@router.post("/token", response_model=Token)
def login_form(
    response: Response,
    form_data: OAuth2PasswordRequestForm = Depends(),
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_app_settings),
):
    user, token = accounts.login(form_data.username, form_data.password)
    set_auth_cookie(response, token, settings)
    return {"id": user.id, "access_token": token, "token_type": "bearer"}


@router.post("/logout", status_code=status.HTTP_201_CREATED)
def logout(response: Response):
    response.delete_cookie(AUTH_COOKIE, path="/")
    return {"message": "Logged out"}


@router.get("/me", response_model=Me)
def read_me(token: str | None = Depends(get_session_token), gate: AuthGate = Depends(get_auth_gate)):
    identity = gate.authenticate(token)
    return {"id": identity.user_id, "username": identity.username}
