"""Central authorization check consulted by every campaign operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from contentcraft.errors import AuthorizationError
from contentcraft.models.user import UserRole

if TYPE_CHECKING:
    from contentcraft.models.campaign import Campaign


class Action(StrEnum):
    READ = "read"
    EDIT = "edit"
    DELETE = "delete"
    MODERATE = "moderate"
    ADMINISTER = "administer"


_ADMIN_ONLY = frozenset({Action.MODERATE, Action.ADMINISTER})


@dataclass(frozen=True)
class Caller:
    """The identity attached to a request."""

    user_id: str
    role: UserRole = UserRole.VIEWER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def authorize(caller: Caller, campaign: Campaign | None, action: Action) -> None:
    """Raise ``AuthorizationError`` unless ``caller`` may perform ``action``.

    Admins may do anything. Moderation and platform-wide views are admin only.
    Everything else requires owning the campaign.
    """
    if caller.is_admin:
        return
    if action in _ADMIN_ONLY:
        raise AuthorizationError("Admin access required")
    if campaign is None or campaign.owner_id != caller.user_id:
        target = campaign.id if campaign else "this campaign"
        raise AuthorizationError(f"Not permitted to {action} {target}")
