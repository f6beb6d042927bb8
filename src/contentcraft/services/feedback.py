"""Feedback business logic — rate a generated format."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contentcraft.errors import NotFoundError, ValidationError
from contentcraft.models.feedback import Feedback, feedback_id
from contentcraft.services.authorization import Action
from contentcraft.services.campaigns import get_campaign

if TYPE_CHECKING:
    from contentcraft.database.repositories.campaigns import CampaignRepository
    from contentcraft.database.repositories.feedback import FeedbackRepository
    from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)


async def submit_feedback(
    caller: Caller,
    campaign_id: str,
    content_format: str,
    rating: object,
    campaigns_repo: CampaignRepository,
    feedback_repo: FeedbackRepository,
    *,
    version_id: str | None = None,
) -> Feedback:
    """Record one rating per user, campaign, version and format."""
    if not isinstance(rating, int) or isinstance(rating, bool) or rating not in (1, -1):
        raise ValidationError("rating must be 1 or -1")
    if not content_format or not content_format.strip():
        raise ValidationError("content_format is required")

    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.READ)
    if version_id is not None and campaign.find_version(version_id) is None:
        raise NotFoundError(f"Content version {version_id} not found")

    entry = Feedback(
        id=feedback_id(caller.user_id, campaign_id, version_id, content_format),
        campaign_id=campaign_id,
        version_id=version_id,
        content_format=content_format,
        rating=rating,
        user_id=caller.user_id,
    )
    await feedback_repo.create(entry)
    logger.info(
        "Feedback submitted — campaign=%s version=%s format=%s rating=%d",
        campaign_id,
        version_id,
        content_format,
        rating,
    )
    return entry


async def list_feedback(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    feedback_repo: FeedbackRepository,
) -> list[Feedback]:
    await get_campaign(caller, campaign_id, campaigns_repo, Action.READ)
    return await feedback_repo.list_by_campaign(campaign_id)
