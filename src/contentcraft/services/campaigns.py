"""Campaign business logic — create, read, edit, status changes, delete."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from contentcraft.errors import NotFoundError, ValidationError
from contentcraft.models.campaign import Campaign, ReferenceMaterial
from contentcraft.services.authorization import Action, authorize
from contentcraft.services.lifecycle import CampaignEvent, apply_event

if TYPE_CHECKING:
    from contentcraft.database.repositories.campaigns import CampaignRepository
    from contentcraft.database.repositories.feedback import FeedbackRepository
    from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "title",
        "brief",
        "target_audience",
        "tone",
        "content_goals",
        "reference_materials",
        "is_private",
    }
)

USER_STATUS_EVENTS = frozenset(
    {CampaignEvent.PUBLISH, CampaignEvent.ARCHIVE, CampaignEvent.REACTIVATE}
)


def _require_text(field: str, value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Campaign {field} is required")
    return value.strip()


async def create_campaign(
    caller: Caller,
    campaigns_repo: CampaignRepository,
    *,
    title: str,
    brief: str,
    target_audience: str | None = None,
    tone: str | None = None,
    content_goals: list[str] | None = None,
    reference_materials: list[ReferenceMaterial] | None = None,
    is_private: bool = False,
) -> Campaign:
    """Create a draft campaign owned by the caller."""
    campaign = Campaign(
        owner_id=caller.user_id,
        title=_require_text("title", title),
        brief=_require_text("brief", brief),
        target_audience=target_audience,
        tone=tone,
        content_goals=content_goals or [],
        reference_materials=reference_materials or [],
        is_private=is_private,
    )
    await campaigns_repo.create(campaign)
    logger.info("Campaign created — campaign=%s owner=%s", campaign.id, caller.user_id)
    return campaign


async def get_campaign(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    action: Action = Action.READ,
) -> Campaign:
    """Fetch a campaign the caller may act on, or raise."""
    campaign = await campaigns_repo.get(campaign_id, campaign_id)
    if campaign is None:
        raise NotFoundError(f"Campaign {campaign_id} not found")
    authorize(caller, campaign, action)
    return campaign


async def list_campaigns(caller: Caller, campaigns_repo: CampaignRepository) -> list[Campaign]:
    return await campaigns_repo.list_by_owner(caller.user_id)


async def list_all_campaigns(caller: Caller, campaigns_repo: CampaignRepository) -> list[Campaign]:
    authorize(caller, None, Action.ADMINISTER)
    return await campaigns_repo.list_all()


async def update_campaign(
    caller: Caller,
    campaign_id: str,
    changes: dict[str, Any],
    campaigns_repo: CampaignRepository,
) -> Campaign:
    """Apply direct field edits. Versions, debates and status are not editable here."""
    unknown = sorted(set(changes) - EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Fields cannot be edited directly: {', '.join(unknown)}")
    if "title" in changes:
        changes["title"] = _require_text("title", changes["title"])
    if "brief" in changes:
        changes["brief"] = _require_text("brief", changes["brief"])
    for field in ("content_goals", "reference_materials", "is_private"):
        if field in changes and changes[field] is None:
            raise ValidationError(f"Campaign {field} cannot be null")

    def _apply(campaign: Campaign) -> None:
        authorize(caller, campaign, Action.EDIT)
        for field, value in changes.items():
            setattr(campaign, field, value)

    campaign = await campaigns_repo.mutate(campaign_id, _apply)
    logger.info(
        "Campaign updated — campaign=%s fields=%s", campaign_id, ",".join(sorted(changes))
    )
    return campaign


async def change_status(
    caller: Caller,
    campaign_id: str,
    event: CampaignEvent,
    campaigns_repo: CampaignRepository,
) -> Campaign:
    """Apply an explicit publish, archive or reactivate request."""
    if event not in USER_STATUS_EVENTS:
        raise ValidationError(f"'{event}' cannot be requested directly")

    def _apply(campaign: Campaign) -> None:
        authorize(caller, campaign, Action.EDIT)
        apply_event(campaign, event)

    return await campaigns_repo.mutate(campaign_id, _apply)


async def delete_campaign(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    feedback_repo: FeedbackRepository,
) -> None:
    """Delete a campaign and every feedback record attached to it.

    Feedback goes first so a failed cascade leaves the campaign in place
    and the delete can be retried.
    """
    await get_campaign(caller, campaign_id, campaigns_repo, Action.DELETE)
    removed = await feedback_repo.delete_by_campaign(campaign_id)
    await campaigns_repo.delete(campaign_id, campaign_id)
    logger.info(
        "Campaign deleted — campaign=%s by=%s feedback_removed=%d",
        campaign_id,
        caller.user_id,
        removed,
    )
