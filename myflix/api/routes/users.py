"""User profile and favorites endpoints."""

from uuid import UUID

from fastapi import APIRouter

from myflix.api.deps import CurrentUser, FavoritesServiceDep, UserServiceDep
from myflix.core.permissions import require_owner
from myflix.schemas.base import MessageResponse
from myflix.schemas.user import UserRead, UserUpdate

router = APIRouter()


@router.get(
    "",
    response_model=list[UserRead],
    summary="List users",
)
async def list_users(
    _user: CurrentUser,
    service: UserServiceDep,
) -> list[UserRead]:
    """List every user, ordered by username."""
    return await service.list_users()


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user",
)
async def get_user(
    user_id: UUID,
    _user: CurrentUser,
    service: UserServiceDep,
) -> UserRead:
    """Get one user's profile, including favorite movie ids."""
    return await service.get_by_id(user_id)


@router.get(
    "/{user_id}/favorites",
    response_model=list[str],
    summary="List favorite titles",
)
async def get_favorite_titles(
    user_id: UUID,
    _user: CurrentUser,
    service: UserServiceDep,
) -> list[str]:
    """Get the titles of a user's favorite movies, alphabetically."""
    return await service.get_favorite_titles(user_id)


@router.put(
    "/{user_id}",
    response_model=UserRead,
    summary="Update user",
    description="Partially update a profile. Only the profile's owner may do this.",
)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> UserRead:
    """Update a user's profile.

    Only provided fields will be updated. A new password is hashed before
    it is stored.
    """
    require_owner(current_user, user_id)
    return await service.update(user_id, data)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
)
async def delete_user(
    user_id: UUID,
    current_user: CurrentUser,
    service: UserServiceDep,
) -> MessageResponse:
    """Delete the caller's own account."""
    require_owner(current_user, user_id)
    username = await service.delete(user_id)
    return MessageResponse(message=f"{username} was deleted from myFlix.")


@router.post(
    "/{user_id}/movies/{movie_id}",
    response_model=UserRead,
    summary="Add favorite",
)
async def add_favorite(
    user_id: UUID,
    movie_id: UUID,
    current_user: CurrentUser,
    service: FavoritesServiceDep,
) -> UserRead:
    """Add a movie to the caller's favorites. Adding twice is a no-op."""
    require_owner(current_user, user_id)
    return await service.add(user_id, movie_id)


@router.delete(
    "/{user_id}/movies/{movie_id}",
    response_model=UserRead,
    summary="Remove favorite",
)
async def remove_favorite(
    user_id: UUID,
    movie_id: UUID,
    current_user: CurrentUser,
    service: FavoritesServiceDep,
) -> UserRead:
    """Remove a movie from the caller's favorites. Removing an absent movie is a no-op."""
    require_owner(current_user, user_id)
    return await service.remove(user_id, movie_id)
