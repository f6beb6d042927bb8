"""User document model."""

from __future__ import annotations

from enum import StrEnum

from contentcraft.models.base import DocumentBase


class UserRole(StrEnum):
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


class User(DocumentBase):
    email: str
    name: str | None = None
    role: UserRole = UserRole.VIEWER
    is_banned: bool = False
