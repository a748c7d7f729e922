"""User service for profile management."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from myflix.core.exceptions import ConflictError, ErrorCode, NotFoundError
from myflix.core.logging import get_logger
from myflix.core.security import hash_password
from myflix.models.user import User
from myflix.repositories.user import UserRepository
from myflix.schemas.user import UserRead, UserUpdate

logger = get_logger("users")


class UserService:
    """Service for user profile operations.

    Handles listing, viewing, partial updates and deletion. Ownership is
    checked by the caller before any mutating method runs.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user service.

        Args:
            session: Async database session.
        """
        self.session = session
        self.repository = UserRepository(session)

    async def list_users(self) -> list[UserRead]:
        """Get every user, alphabetically by username."""
        users = await self.repository.get_all(order_by=User.username)
        favorites = await self.repository.get_favorite_ids_for([u.id for u in users])
        return [UserRead.from_model(u, favorites.get(u.id)) for u in users]

    async def get_by_id(self, user_id: UUID) -> UserRead:
        """Get a user by ID.

        Args:
            user_id: User's UUID.

        Returns:
            User profile.

        Raises:
            NotFoundError: If user not found.
        """
        user = await self._get_or_404(user_id)
        favorites = await self.repository.get_favorite_ids(user.id)
        return UserRead.from_model(user, favorites)

    async def get_favorite_titles(self, user_id: UUID) -> list[str]:
        """Get the titles of a user's favorite movies.

        Raises:
            NotFoundError: If user not found.
        """
        await self._get_or_404(user_id)
        return await self.repository.get_favorite_titles(user_id)

    async def update(self, user_id: UUID, data: UserUpdate) -> UserRead:
        """Apply a partial profile update.

        Args:
            user_id: User's UUID.
            data: Fields to change; unset fields are left alone.

        Returns:
            Updated user profile.

        Raises:
            NotFoundError: If user not found.
            ConflictError: If the new username belongs to someone else.
        """
        user = await self._get_or_404(user_id)

        changes = data.model_dump(exclude_unset=True)
        if "username" in changes and await self.repository.username_exists(
            changes["username"], exclude_id=user.id
        ):
            raise ConflictError(resource="User", field="username", value=changes["username"])

        if "password" in changes:
            changes["hashed_password"] = await run_in_threadpool(
                hash_password, changes.pop("password")
            )

        if changes:
            try:
                user = await self.repository.update(user, **changes)
            except IntegrityError as e:
                # Lost a race for the username after the check above
                await self.session.rollback()
                raise ConflictError(
                    resource="User", field="username", value=changes.get("username")
                ) from e
            logger.info(
                "User updated",
                extra={"user_id": str(user.id), "fields": sorted(changes)},
            )

        favorites = await self.repository.get_favorite_ids(user.id)
        return UserRead.from_model(user, favorites)

    async def delete(self, user_id: UUID) -> str:
        """Delete a user account.

        Args:
            user_id: User's UUID.

        Returns:
            The deleted user's username.

        Raises:
            NotFoundError: If user not found.
        """
        user = await self._get_or_404(user_id)
        username = user.username
        await self.repository.delete_user(user)
        logger.info("User deleted", extra={"user_id": str(user_id)})
        return username

    async def _get_or_404(self, user_id: UUID) -> User:
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(
                resource="User",
                resource_id=user_id,
                code=ErrorCode.USER_NOT_FOUND,
            )
        return user
