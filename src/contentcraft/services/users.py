"""Admin user management."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contentcraft.errors import AuthorizationError, NotFoundError, ValidationError
from contentcraft.models.user import UserRole
from contentcraft.services.authorization import Action, authorize

if TYPE_CHECKING:
    from contentcraft.database.repositories.users import UserRepository
    from contentcraft.models.user import User
    from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)


async def list_users(caller: Caller, users_repo: UserRepository) -> list[User]:
    authorize(caller, None, Action.ADMINISTER)
    return await users_repo.list_all()


async def update_user(
    caller: Caller,
    user_id: str,
    users_repo: UserRepository,
    *,
    role: str | None = None,
    is_banned: bool | None = None,
) -> User:
    """Change a user's role or ban flag. Admins cannot demote or ban themselves."""
    authorize(caller, None, Action.ADMINISTER)
    if role is None and is_banned is None:
        raise ValidationError("Provide role or is_banned")
    new_role: UserRole | None = None
    if role is not None:
        try:
            new_role = UserRole(role)
        except ValueError as exc:
            raise ValidationError(f"Invalid role '{role}'") from exc
    if user_id == caller.user_id and (
        (new_role is not None and new_role != UserRole.ADMIN) or is_banned
    ):
        raise AuthorizationError("Admins cannot demote or ban themselves")

    user = await users_repo.get(user_id, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")
    if new_role is not None:
        user.role = new_role
    if is_banned is not None:
        user.is_banned = is_banned
    await users_repo.update(user, user_id)
    logger.info(
        "User updated — user=%s role=%s banned=%s by=%s",
        user_id,
        user.role,
        user.is_banned,
        caller.user_id,
    )
    return user
