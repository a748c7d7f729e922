"""Owner-only authorization checks.

Authentication (who is calling) is settled by the access guard before a
route runs. This module answers the second question for user-scoped
routes: is the caller the owner of the resource being changed?
"""

from typing import TYPE_CHECKING
from uuid import UUID

from myflix.core.exceptions import AuthorizationError, ErrorCode

if TYPE_CHECKING:
    from myflix.models.user import User


def is_owner(current_user: "User", resource_owner_id: UUID) -> bool:
    """Check whether the authenticated user owns a resource.

    Args:
        current_user: User resolved from the bearer token.
        resource_owner_id: Id of the user the resource belongs to.

    Returns:
        True if the ids match.
    """
    return current_user.id == resource_owner_id


def require_owner(current_user: "User", resource_owner_id: UUID) -> None:
    """Require ownership, raising AuthorizationError otherwise.

    Args:
        current_user: User resolved from the bearer token.
        resource_owner_id: Id of the user the resource belongs to.

    Raises:
        AuthorizationError: If the caller is not the owner.
    """
    if not is_owner(current_user, resource_owner_id):
        raise AuthorizationError(
            message="Permission denied",
            code=ErrorCode.FORBIDDEN,
        )
