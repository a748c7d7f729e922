"""Authentication service for registration and login."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from myflix.core.exceptions import AuthenticationError, ConflictError, ErrorCode
from myflix.core.logging import get_logger
from myflix.core.security import (
    TokenCodec,
    hash_password,
    verify_dummy_password,
    verify_password,
)
from myflix.repositories.user import UserRepository
from myflix.schemas.auth import LoginRequest, LoginResponse
from myflix.schemas.user import UserCreate, UserRead

logger = get_logger("auth")

# One message for every credential failure; it must not reveal which field was wrong.
LOGIN_FAILED_MESSAGE = "Invalid username or password"


class AuthService:
    """Service for authentication operations.

    Handles user registration and the login flow. Login is read-only:
    it looks the user up, checks the password and signs a token.
    """

    def __init__(self, session: AsyncSession, token_codec: TokenCodec) -> None:
        """Initialize auth service.

        Args:
            session: Async database session.
            token_codec: Codec that signs access tokens.
        """
        self.session = session
        self.token_codec = token_codec
        self.user_repository = UserRepository(session)

    async def register(self, data: UserCreate) -> UserRead:
        """Register a new user.

        Args:
            data: User registration data.

        Returns:
            Created user profile.

        Raises:
            ConflictError: If the username is already taken.
        """
        # Pre-check only; the unique index is the final arbiter under races
        if await self.user_repository.username_exists(data.username):
            raise ConflictError(
                resource="User",
                field="username",
                value=data.username,
            )

        hashed_password = await run_in_threadpool(hash_password, data.password)
        try:
            user = await self.user_repository.create_user(
                username=data.username,
                hashed_password=hashed_password,
                name=data.name,
                email=data.email,
                birthdate=data.birthdate,
            )
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(resource="User", field="username", value=data.username) from e

        logger.info("User registered", extra={"user_id": str(user.id)})
        return UserRead.from_model(user)

    async def login(self, data: LoginRequest) -> LoginResponse:
        """Authenticate user and issue an access token.

        Args:
            data: Login credentials.

        Returns:
            The user's profile and a signed token.

        Raises:
            AuthenticationError: If credentials are invalid.
        """
        user = await self.user_repository.get_by_username(data.username)
        if user is None:
            # Spend the same hashing time as a real check
            await run_in_threadpool(verify_dummy_password, data.password)
            logger.warning("Login failed", extra={"username": data.username})
            raise AuthenticationError(
                message=LOGIN_FAILED_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )

        if not await run_in_threadpool(verify_password, data.password, user.hashed_password):
            logger.warning("Login failed", extra={"username": data.username})
            raise AuthenticationError(
                message=LOGIN_FAILED_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )

        token = self.token_codec.issue(user.id)
        favorites = await self.user_repository.get_favorite_ids(user.id)

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return LoginResponse(
            user=UserRead.from_model(user, favorites),
            token=token,
            token_type="bearer",
            expires_in=int(self.token_codec.ttl.total_seconds()),
        )
