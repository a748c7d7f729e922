"""Unit tests for password hashing and the token codec."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import jwt
import pytest

from myflix.core.security import (
    DEFAULT_TOKEN_TTL,
    RejectionReason,
    TokenCodec,
    TokenRejectedError,
    TokenType,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret-key-that-is-long-enough"
FOREIGN_SECRET = "some-other-deployment-secret-key-value"

# ─────────────────────────────────────────────────────────────────────────────
# Password Hasher
# ─────────────────────────────────────────────────────────────────────────────


def test_password_hashing() -> None:
    """Test password hashing and verification."""
    password = "SecurePassword123!"
    hashed = hash_password(password)

    # Hash should be different from original
    assert hashed != password
    assert password not in hashed

    assert verify_password(password, hashed) is True
    assert verify_password("WrongPassword", hashed) is False


def test_password_hash_is_salted() -> None:
    """Two hashes of one password differ but both verify."""
    first = hash_password("password1")
    second = hash_password("password1")

    assert first != second
    assert verify_password("password1", first)
    assert verify_password("password1", second)


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$argon2id$v=19$broken"])
def test_verify_password_malformed_hash_is_mismatch(bad_hash: str) -> None:
    """A corrupt stored hash is reported as a mismatch, never raised."""
    assert verify_password("password1", bad_hash) is False


# ─────────────────────────────────────────────────────────────────────────────
# Token Codec
# ─────────────────────────────────────────────────────────────────────────────


def test_access_token_round_trip() -> None:
    """A freshly issued token verifies back to its subject."""
    codec = TokenCodec(secret_key=SECRET)
    user_id = uuid4()

    assert codec.verify(codec.issue(user_id)) == user_id


def test_token_claims() -> None:
    """Issued tokens carry sub, iat, exp = iat + ttl and the access type."""
    issued_at = datetime(2024, 1, 1, tzinfo=UTC)
    token = create_access_token("abc", SECRET, issued_at=issued_at)

    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert claims["sub"] == "abc"
    assert claims["type"] == TokenType.ACCESS
    assert claims["exp"] - claims["iat"] == int(DEFAULT_TOKEN_TTL.total_seconds())


def test_default_ttl_is_seven_days() -> None:
    assert DEFAULT_TOKEN_TTL == timedelta(days=7)
    assert TokenCodec(secret_key=SECRET).ttl == timedelta(days=7)


def test_decode_returns_payload() -> None:
    token = create_access_token("subject", SECRET)

    payload = decode_access_token(token, SECRET)

    assert payload.sub == "subject"
    assert payload.type is TokenType.ACCESS
    assert payload.exp - payload.iat == DEFAULT_TOKEN_TTL


def test_expired_token_rejected() -> None:
    """A token issued eight days ago has expired."""
    codec = TokenCodec(secret_key=SECRET)
    token = codec.issue(uuid4(), issued_at=datetime.now(UTC) - timedelta(days=8))

    with pytest.raises(TokenRejectedError) as exc_info:
        codec.verify(token)

    assert exc_info.value.reason is RejectionReason.EXPIRED


def test_token_from_foreign_secret_rejected() -> None:
    """A token signed with another secret has a bad signature."""
    foreign = TokenCodec(secret_key=FOREIGN_SECRET)
    token = foreign.issue(uuid4())

    with pytest.raises(TokenRejectedError) as exc_info:
        TokenCodec(secret_key=SECRET).verify(token)

    assert exc_info.value.reason is RejectionReason.BAD_SIGNATURE


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "Bearer xyz"])
def test_garbage_token_is_malformed(garbage: str) -> None:
    with pytest.raises(TokenRejectedError) as exc_info:
        decode_access_token(garbage, SECRET)

    assert exc_info.value.reason is RejectionReason.MALFORMED


def test_token_missing_expiry_is_malformed() -> None:
    token = jwt.encode({"sub": str(uuid4()), "type": "access"}, SECRET, algorithm="HS256")

    with pytest.raises(TokenRejectedError) as exc_info:
        decode_access_token(token, SECRET)

    assert exc_info.value.reason is RejectionReason.MALFORMED


def test_token_of_other_type_is_malformed() -> None:
    now = datetime.now(UTC)
    token = jwt.encode(
        {"sub": str(uuid4()), "iat": now, "exp": now + timedelta(hours=1), "type": "refresh"},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(TokenRejectedError) as exc_info:
        decode_access_token(token, SECRET)

    assert exc_info.value.reason is RejectionReason.MALFORMED


def test_token_subject_must_be_user_id() -> None:
    """The codec only accepts tokens whose subject is a UUID."""
    token = create_access_token("JohnnyD1", SECRET)

    with pytest.raises(TokenRejectedError) as exc_info:
        TokenCodec(secret_key=SECRET).verify(token)

    assert exc_info.value.reason is RejectionReason.MALFORMED


def test_rejection_reasons_are_distinct() -> None:
    assert len({r.value for r in RejectionReason}) == 3


def test_codec_from_settings(settings) -> None:
    codec = TokenCodec.from_settings(settings)
    user_id = UUID("12345678-1234-5678-1234-567812345678")

    assert codec.secret_key == settings.secret_key
    assert codec.ttl == settings.access_token_ttl
    assert codec.verify(codec.issue(user_id)) == user_id
