"""Feedback document model — thumbs up/down on one format of a campaign."""

from __future__ import annotations

import uuid
from typing import Literal

from contentcraft.models.base import DocumentBase

_FEEDBACK_NAMESPACE = uuid.UUID("6f1c0a52-4a0e-4d8e-9a57-2b8f3c6e1d20")


def feedback_id(user_id: str, campaign_id: str, version_id: str | None, content_format: str) -> str:
    """Derive the document id for a (user, campaign, version, format) tuple.

    A second submission for the same tuple collides on ``id`` inside the
    campaign partition, which the store rejects.
    """
    key = "|".join((user_id, campaign_id, version_id or "", content_format))
    return str(uuid.uuid5(_FEEDBACK_NAMESPACE, key))


class Feedback(DocumentBase):
    """A single rating submitted by a user."""

    campaign_id: str
    version_id: str | None = None
    content_format: str
    rating: Literal[1, -1]
    user_id: str
