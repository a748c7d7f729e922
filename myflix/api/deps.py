"""API dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from myflix.config import Settings
from myflix.core.exceptions import AuthenticationError, ErrorCode
from myflix.core.logging import get_logger
from myflix.core.security import RejectionReason, TokenCodec, TokenRejectedError
from myflix.database import get_db
from myflix.models.user import User
from myflix.repositories.user import UserRepository
from myflix.services.auth import AuthService
from myflix.services.favorites import FavoritesService
from myflix.services.movie import MovieService
from myflix.services.user import UserService

logger = get_logger("auth")

# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]

# HTTP Bearer security scheme
# auto_error=False allows us to handle missing tokens gracefully
bearer_scheme = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_token_codec(request: Request) -> TokenCodec:
    """Token codec built once at application start."""
    return request.app.state.token_codec


TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]


async def get_auth_service(
    session: DBSession,
    token_codec: TokenCodecDep,
) -> AsyncGenerator[AuthService, None]:
    """Get auth service instance.

    Args:
        session: Database session.
        token_codec: Codec that signs issued tokens.

    Yields:
        AuthService instance.
    """
    yield AuthService(session, token_codec)


async def get_user_service(
    session: DBSession,
) -> AsyncGenerator[UserService, None]:
    """Get user service instance.

    Args:
        session: Database session.

    Yields:
        UserService instance.
    """
    yield UserService(session)


async def get_favorites_service(
    session: DBSession,
) -> AsyncGenerator[FavoritesService, None]:
    """Get favorites service instance."""
    yield FavoritesService(session)


async def get_movie_service(
    session: DBSession,
) -> AsyncGenerator[MovieService, None]:
    """Get movie service instance."""
    yield MovieService(session)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: DBSession,
    token_codec: TokenCodecDep,
) -> User:
    """Resolve the authenticated user from the Bearer token.

    The token subject is the user's id, so a renamed user keeps working
    with a token issued before the rename. The resolved user is also
    stored on ``request.state.current_user``.

    Args:
        request: Incoming request.
        credentials: HTTP Bearer credentials from Authorization header.
        session: Database session.
        token_codec: Codec that verifies the token.

    Returns:
        The user the token was issued for.

    Raises:
        AuthenticationError: If the token is missing, rejected, or names
            a user that no longer exists.
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authentication required",
            code=ErrorCode.UNAUTHORIZED,
        )

    try:
        user_id = token_codec.verify(credentials.credentials)
    except TokenRejectedError as e:
        logger.info("Token rejected", extra={"reason": e.reason.value})
        if e.reason is RejectionReason.EXPIRED:
            raise AuthenticationError(
                message="Token has expired",
                code=ErrorCode.TOKEN_EXPIRED,
            ) from e
        raise AuthenticationError(
            message="Invalid token",
            code=ErrorCode.TOKEN_INVALID,
        ) from e

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise AuthenticationError(
            message="Invalid token",
            code=ErrorCode.TOKEN_INVALID,
        )

    request.state.current_user = user
    return user


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
FavoritesServiceDep = Annotated[FavoritesService, Depends(get_favorites_service)]
MovieServiceDep = Annotated[MovieService, Depends(get_movie_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
