"""Core module exports."""

from myflix.core.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from myflix.core.permissions import is_owner, require_owner
from myflix.core.security import (
    RejectionReason,
    TokenCodec,
    TokenPayload,
    TokenRejectedError,
    TokenType,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "RejectionReason",
    "TokenCodec",
    "TokenPayload",
    "TokenRejectedError",
    "TokenType",
    "ValidationError",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "is_owner",
    "require_owner",
    "verify_password",
]
