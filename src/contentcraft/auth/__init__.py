"""Authentication module — session-backed caller identity."""

from contentcraft.auth.middleware import get_caller, require_authenticated_user

__all__ = ["get_caller", "require_authenticated_user"]
