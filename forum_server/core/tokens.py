# forum_server/core/tokens.py

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from forum_server.core.errors import BadSignature, TokenExpired, TokenMalformed


ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


@dataclass(frozen=True)
class Identity:
    user_id: str
    username: str


class SessionTokenCodec:
    """
    Issues and verifies signed session tokens.

    A token is an HS256 JWT whose claims are ``sub`` (user id), ``username``,
    ``iat`` and ``exp``.
    """

    def __init__(self, secret_key: str, expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue(self, user_id: str, username: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "sub": user_id,
            "username": username,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> Identity:
        try:
            jwt.get_unverified_header(token)
        except JWTError as exc:
            raise TokenMalformed() from exc

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
        except ExpiredSignatureError as exc:
            raise TokenExpired() from exc
        except JWTError as exc:
            raise BadSignature() from exc

        user_id = payload.get("sub")
        username = payload.get("username")
        if not user_id or not username:
            raise TokenMalformed()
        return Identity(user_id=user_id, username=username)
