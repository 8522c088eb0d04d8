# forum_server/core/errors.py

"""
Error kinds raised by the forum core.

Every error carries the HTTP status the transport layer answers with, so the
routers never have to translate them one by one.
"""


class ForumError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ForumError):
    status_code = 400
    default_message = "Invalid request"


class DuplicateUsername(ForumError):
    status_code = 409
    default_message = "Username already exists"


class NotFound(ForumError):
    status_code = 404
    default_message = "Not found"


class ParentNotFound(NotFound):
    default_message = "Post not found"


class InvalidCredentials(ForumError):
    status_code = 400
    default_message = "Invalid password"


class Unauthorized(ForumError):
    status_code = 401
    default_message = "Access Denied"


class TokenExpired(Unauthorized):
    default_message = "Token expired"


class TokenMalformed(Unauthorized):
    default_message = "Malformed token"


class BadSignature(Unauthorized):
    default_message = "Invalid token signature"


class StaleIdentity(Unauthorized):
    default_message = "User does not exist"


class Forbidden(ForumError):
    status_code = 403
    default_message = "Only the author may modify this post or comment"


class StoreUnavailable(ForumError):
    status_code = 500
    default_message = "Internal server error"
