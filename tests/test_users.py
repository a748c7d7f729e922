"""Tests for user profile endpoints."""

from uuid import UUID, uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from myflix.models import Movie, User, UserFavorite
from myflix.repositories.user import UserRepository

# ─────────────────────────────────────────────────────────────────────────────
# Read Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_users(
    authenticated_client: AsyncClient,
    test_user: User,
    other_user: User,
) -> None:
    """Users are listed by username without password hashes."""
    response = await authenticated_client.get("/users")

    assert response.status_code == 200
    data = response.json()
    assert [u["username"] for u in data] == sorted([test_user.username, other_user.username])
    assert all("hashed_password" not in u for u in data)


@pytest.mark.asyncio
async def test_get_user(authenticated_client: AsyncClient, other_user: User) -> None:
    """Any authenticated user may view another user's profile."""
    response = await authenticated_client.get(f"/users/{other_user.id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(other_user.id)
    assert data["username"] == other_user.username
    assert data["email"] == other_user.email
    assert data["favorites"] == []


@pytest.mark.asyncio
async def test_get_user_not_found(authenticated_client: AsyncClient) -> None:
    response = await authenticated_client.get(f"/users/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_user_invalid_id(authenticated_client: AsyncClient) -> None:
    response = await authenticated_client.get("/users/not-a-uuid")

    assert response.status_code == 422


# ─────────────────────────────────────────────────────────────────────────────
# Update Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_update_partial(authenticated_client: AsyncClient, test_user: User) -> None:
    """Only supplied fields change."""
    response = await authenticated_client.put(
        f"/users/{test_user.id}",
        json={"name": "Renamed Person"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Renamed Person"
    assert data["username"] == test_user.username
    assert data["email"] == "testuser@example.com"


@pytest.mark.asyncio
async def test_update_capitalised_keys(authenticated_client: AsyncClient, test_user: User) -> None:
    response = await authenticated_client.put(
        f"/users/{test_user.id}",
        json={"Email": "new@example.com", "Birthdate": "1985-06-15"},
    )

    assert response.status_code == 200
    assert response.json()["email"] == "new@example.com"
    assert response.json()["birthdate"] == "1985-06-15"


@pytest.mark.asyncio
async def test_update_other_user_forbidden(
    authenticated_client: AsyncClient,
    other_user: User,
) -> None:
    """A user may not update someone else's profile."""
    response = await authenticated_client.put(
        f"/users/{other_user.id}",
        json={"name": "Hijacked"},
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
    assert other_user.name == "Other User"


@pytest.mark.asyncio
async def test_update_password_is_rehashed(
    authenticated_client: AsyncClient,
    client: AsyncClient,
    test_user: User,
    test_user_password: str,
) -> None:
    response = await authenticated_client.put(
        f"/users/{test_user.id}",
        json={"password": "BrandNewPassword1"},
    )
    assert response.status_code == 200
    assert "BrandNewPassword1" not in response.text
    assert test_user.hashed_password != "BrandNewPassword1"

    old = await client.post(
        "/login",
        json={"username": test_user.username, "password": test_user_password},
    )
    new = await client.post(
        "/login",
        json={"username": test_user.username, "password": "BrandNewPassword1"},
    )
    assert old.status_code == 401
    assert new.status_code == 200


@pytest.mark.asyncio
async def test_update_username_taken(
    authenticated_client: AsyncClient,
    test_user: User,
    other_user: User,
) -> None:
    response = await authenticated_client.put(
        f"/users/{test_user.id}",
        json={"username": other_user.username},
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"


@pytest.mark.asyncio
async def test_update_username_taken_caught_by_index(
    authenticated_client: AsyncClient,
    test_user_id: UUID,
    other_user: User,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A rename that slips past the check still answers 409, not 500."""
    taken = other_user.username

    async def never_taken(
        self: UserRepository, username: str, *, exclude_id: UUID | None = None
    ) -> bool:
        return False

    monkeypatch.setattr(UserRepository, "username_exists", never_taken)

    response = await authenticated_client.put(f"/users/{test_user_id}", json={"username": taken})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_RESOURCE"


@pytest.mark.asyncio
async def test_update_username_to_own(authenticated_client: AsyncClient, test_user: User) -> None:
    """Re-submitting one's own username is not a conflict."""
    response = await authenticated_client.put(
        f"/users/{test_user.id}",
        json={"username": test_user.username},
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_token_survives_rename(authenticated_client: AsyncClient, test_user: User) -> None:
    """Tokens name the user id, so renaming does not invalidate them."""
    response = await authenticated_client.put(
        f"/users/{test_user.id}",
        json={"username": "renamedUser"},
    )
    assert response.status_code == 200

    response = await authenticated_client.get(f"/users/{test_user.id}")
    assert response.status_code == 200
    assert response.json()["username"] == "renamedUser"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"username": "abc"},
        {"username": "has space"},
        {"password": "short"},
        {"email": "nope"},
        {"username": None},
        {"name": ""},
    ],
)
async def test_update_invalid(
    authenticated_client: AsyncClient,
    test_user: User,
    body: dict[str, str | None],
) -> None:
    response = await authenticated_client.put(f"/users/{test_user.id}", json=body)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_clears_birthdate(
    authenticated_client: AsyncClient,
    test_user: User,
) -> None:
    await authenticated_client.put(f"/users/{test_user.id}", json={"birthdate": "1990-01-01"})

    response = await authenticated_client.put(f"/users/{test_user.id}", json={"birthdate": None})

    assert response.status_code == 200
    assert response.json()["birthdate"] is None


# ─────────────────────────────────────────────────────────────────────────────
# Delete Tests
# ─────────────────────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_delete_self(
    authenticated_client: AsyncClient,
    test_user: User,
    db_session: AsyncSession,
) -> None:
    username = test_user.username
    user_id = test_user.id

    response = await authenticated_client.delete(f"/users/{user_id}")

    assert response.status_code == 200
    assert response.json() == {"message": f"{username} was deleted from myFlix."}
    assert await db_session.get(User, user_id) is None

    # The token now names a user that does not exist
    response = await authenticated_client.get("/users")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_delete_removes_favorites(
    authenticated_client: AsyncClient,
    test_user: User,
    movies: dict[str, Movie],
    db_session: AsyncSession,
) -> None:
    await authenticated_client.post(f"/users/{test_user.id}/movies/{movies['inception'].id}")

    await authenticated_client.delete(f"/users/{test_user.id}")

    count = await db_session.scalar(select(func.count()).select_from(UserFavorite))
    assert count == 0


@pytest.mark.asyncio
async def test_delete_other_user_forbidden(
    authenticated_client: AsyncClient,
    other_user: User,
    db_session: AsyncSession,
) -> None:
    response = await authenticated_client.delete(f"/users/{other_user.id}")

    assert response.status_code == 403
    assert await db_session.get(User, other_user.id) is not None


@pytest.mark.asyncio
async def test_delete_requires_token(client: AsyncClient, test_user: User) -> None:
    response = await client.delete(f"/users/{test_user.id}")

    assert response.status_code == 401
