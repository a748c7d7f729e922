"""Security utilities for authentication.

This module provides:
- Password hashing using Argon2 (PHC winner, OWASP recommended)
- Signed, expiring JWT access tokens whose subject is the user's id
- Distinguishable token rejection reasons (malformed, bad signature, expired)
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING, Any
from uuid import UUID

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from pydantic import BaseModel

if TYPE_CHECKING:
    from myflix.config import Settings

DEFAULT_TOKEN_TTL = timedelta(days=7)


class TokenType(StrEnum):
    """JWT token types for differentiation."""

    ACCESS = "access"


class RejectionReason(StrEnum):
    """Why a presented token was not accepted."""

    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"


class TokenRejectedError(Exception):
    """Raised when a token fails structural, signature or expiry checks."""

    def __init__(self, reason: RejectionReason, detail: str = "") -> None:
        self.reason = reason
        self.detail = detail
        message = f"Token rejected: {reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


# Argon2 configuration (OWASP recommended parameters)
# - time_cost: Number of iterations (higher = slower but more secure)
# - memory_cost: Memory usage in KiB (higher = more GPU-resistant)
# - parallelism: Number of parallel threads
# - hash_len: Length of the hash in bytes
# - salt_len: Length of the random salt in bytes
_password_hasher = PasswordHasher(
    time_cost=3,  # 3 iterations
    memory_cost=65536,  # 64 MB
    parallelism=4,  # 4 threads
    hash_len=32,  # 32 bytes
    salt_len=16,  # 16 bytes
)


class TokenPayload(BaseModel):
    """Decoded JWT token payload."""

    sub: str  # Subject (user id as string)
    exp: datetime  # Expiration time
    iat: datetime  # Issued at
    type: TokenType  # Token type


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Every call draws a fresh salt, so hashing the same password twice
    gives two different strings that both verify.

    Args:
        password: Plain text password to hash.

    Returns:
        Argon2id hash string containing algorithm parameters and salt.

    Example:
        >>> hashed = hash_password("my_secure_password")
        >>> verify_password("my_secure_password", hashed)
        True
    """
    return _password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Uses constant-time comparison to prevent timing attacks. A malformed
    hash is reported as a mismatch rather than raised.

    Args:
        password: Plain text password to verify.
        hashed_password: Argon2id hash to verify against.

    Returns:
        True if password matches, False otherwise.
    """
    try:
        return _password_hasher.verify(hashed_password, password)
    except (VerificationError, InvalidHashError):
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash used to spend the same time on logins for unknown usernames."""
    return _password_hasher.hash("myflix-timing-equaliser")


def verify_dummy_password(password: str) -> bool:
    """Run a full verification against the dummy hash; always False."""
    return verify_password(password, dummy_password_hash())


def create_access_token(
    subject: str | UUID,
    secret_key: str,
    ttl: timedelta = DEFAULT_TOKEN_TTL,
    *,
    algorithm: str = "HS256",
    issued_at: datetime | None = None,
) -> str:
    """Create a signed JWT access token.

    Args:
        subject: Stable identity claim (the user's id).
        secret_key: Server-held signing secret.
        ttl: Token lifetime; expiry is ``issued_at + ttl``.
        algorithm: HMAC algorithm name.
        issued_at: Issue time, defaults to now.

    Returns:
        Encoded JWT access token string.
    """
    now = issued_at or datetime.now(UTC)

    payload: dict[str, Any] = {
        "sub": str(subject),
        "iat": now,
        "exp": now + ttl,
        "type": TokenType.ACCESS.value,
    }

    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret_key: str,
    *,
    algorithm: str = "HS256",
) -> TokenPayload:
    """Decode and validate a JWT access token.

    Args:
        token: JWT token string to decode.
        secret_key: Secret the token must be signed with.
        algorithm: Only algorithm accepted.

    Returns:
        Validated token payload.

    Raises:
        TokenRejectedError: With reason EXPIRED, BAD_SIGNATURE or MALFORMED.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenRejectedError(RejectionReason.EXPIRED) from e
    except jwt.InvalidSignatureError as e:
        raise TokenRejectedError(RejectionReason.BAD_SIGNATURE) from e
    except jwt.InvalidTokenError as e:
        raise TokenRejectedError(RejectionReason.MALFORMED, str(e)) from e

    if payload.get("type") != TokenType.ACCESS:
        raise TokenRejectedError(RejectionReason.MALFORMED, "not an access token")

    return TokenPayload(
        sub=payload["sub"],
        exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
        iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
        type=TokenType(payload["type"]),
    )


@dataclass(frozen=True)
class TokenCodec:
    """Issues and verifies access tokens with one fixed secret and lifetime.

    Built once from the application settings; the same instance signs at
    login and verifies on every protected request.
    """

    secret_key: str
    algorithm: str = "HS256"
    ttl: timedelta = DEFAULT_TOKEN_TTL

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenCodec":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=settings.access_token_ttl,
        )

    def issue(self, subject: str | UUID, *, issued_at: datetime | None = None) -> str:
        """Sign a token for ``subject`` expiring ``ttl`` after issue."""
        return create_access_token(
            subject,
            self.secret_key,
            self.ttl,
            algorithm=self.algorithm,
            issued_at=issued_at,
        )

    def verify(self, token: str) -> UUID:
        """Return the user id a valid token was issued for.

        Raises:
            TokenRejectedError: If the token is malformed, forged or expired.
        """
        payload = decode_access_token(token, self.secret_key, algorithm=self.algorithm)
        try:
            return UUID(payload.sub)
        except ValueError as e:
            raise TokenRejectedError(RejectionReason.MALFORMED, "subject is not a user id") from e
