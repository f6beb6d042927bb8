"""Authentication dependencies — resolve the caller from the signed session cookie.

The identity provider writes ``{"id": ..., "role": ...}`` under the session's
``user`` key at sign-in.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, Request, status

from contentcraft.models.user import UserRole
from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)


def get_user(request: Request) -> dict[str, Any] | None:
    """Extract the authenticated user from the session, if present."""
    return request.session.get("user") if hasattr(request, "session") else None


def require_authenticated_user(request: Request) -> dict[str, Any]:
    """Return the authenticated user or raise HTTP 401."""
    user = get_user(request)
    if not user or not user.get("id"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user


def get_caller(request: Request) -> Caller:
    """FastAPI dependency yielding the request's ``Caller``."""
    user = require_authenticated_user(request)
    try:
        role = UserRole(user.get("role", UserRole.VIEWER))
    except ValueError:
        logger.warning("Unknown role in session — user=%s role=%s", user["id"], user.get("role"))
        role = UserRole.VIEWER
    return Caller(user_id=str(user["id"]), role=role)
