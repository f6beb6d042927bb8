"""Domain error taxonomy.

Every error carries the HTTP status and the stable ``code`` the request
boundary reports to callers.
"""

from __future__ import annotations


class ContentCraftError(Exception):
    """Base class for errors surfaced to callers."""

    status_code: int = 500
    code: str = "internal_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthorizationError(ContentCraftError):
    """Caller lacks permission for the target campaign or action."""

    status_code = 403
    code = "forbidden"


class NotFoundError(ContentCraftError):
    """Referenced campaign, content version or user does not exist."""

    status_code = 404
    code = "not_found"


class ValidationError(ContentCraftError):
    """Required input is missing or malformed."""

    status_code = 400
    code = "validation_error"


class ConflictError(ContentCraftError):
    """A uniqueness or concurrency precondition was violated."""

    status_code = 409
    code = "conflict"


class InvalidTransitionError(ConflictError):
    """The campaign's status does not accept the requested event."""

    code = "invalid_transition"


class GenerationError(ContentCraftError):
    """The completion service failed or returned data outside its schema."""

    status_code = 502
    code = "generation_failed"


class CompletionTimeoutError(ContentCraftError, TimeoutError):
    """The completion service did not answer within the configured timeout."""

    status_code = 504
    code = "generation_timeout"
