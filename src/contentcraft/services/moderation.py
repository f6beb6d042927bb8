"""Moderation overlay — admin flags and notes on campaigns and content versions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel

from contentcraft.errors import NotFoundError, ValidationError
from contentcraft.services.authorization import Action, authorize

if TYPE_CHECKING:
    from contentcraft.database.repositories.campaigns import CampaignRepository
    from contentcraft.models.campaign import Campaign
    from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)


class FlaggedVersion(BaseModel):
    """A flagged content version enriched with its parent campaign."""

    campaign_id: str
    campaign_title: str
    campaign_owner_id: str
    version_id: str
    version_number: int
    actor_name: str
    change_summary: str
    timestamp: datetime
    is_flagged: bool
    admin_moderation_notes: str | None
    content_snapshot: dict[str, str]


def _resolve_notes(is_flagged: bool, notes: str | None, current: str | None) -> str | None:
    # Unflagging without notes clears them; explicit notes always win.
    if notes is not None:
        return notes
    if not is_flagged:
        return ""
    return current


def _check_flag(is_flagged: object) -> bool:
    if not isinstance(is_flagged, bool):
        raise ValidationError("is_flagged must be a boolean")
    return is_flagged


def set_campaign_flag(campaign: Campaign, is_flagged: bool, notes: str | None = None) -> None:
    flag = _check_flag(is_flagged)
    campaign.admin_moderation_notes = _resolve_notes(flag, notes, campaign.admin_moderation_notes)
    campaign.is_flagged = flag


def set_version_flag(
    campaign: Campaign,
    version_id: str,
    is_flagged: bool,
    notes: str | None = None,
) -> None:
    """Update the moderation fields of one version, leaving its content intact."""
    flag = _check_flag(is_flagged)
    for index, version in enumerate(campaign.content_versions):
        if version.id == version_id:
            campaign.content_versions[index] = version.model_copy(
                update={
                    "is_flagged": flag,
                    "admin_moderation_notes": _resolve_notes(
                        flag, notes, version.admin_moderation_notes
                    ),
                }
            )
            return
    raise NotFoundError(f"Content version {version_id} not found in campaign {campaign.id}")


async def flag_campaign(
    caller: Caller,
    campaign_id: str,
    is_flagged: bool,
    campaigns_repo: CampaignRepository,
    *,
    notes: str | None = None,
) -> Campaign:
    authorize(caller, None, Action.MODERATE)
    campaign = await campaigns_repo.mutate(
        campaign_id, lambda c: set_campaign_flag(c, is_flagged, notes)
    )
    logger.info(
        "Campaign moderation updated — campaign=%s flagged=%s by=%s",
        campaign_id,
        is_flagged,
        caller.user_id,
    )
    return campaign


async def flag_version(
    caller: Caller,
    campaign_id: str,
    version_id: str,
    is_flagged: bool,
    campaigns_repo: CampaignRepository,
    *,
    notes: str | None = None,
) -> Campaign:
    authorize(caller, None, Action.MODERATE)
    campaign = await campaigns_repo.mutate(
        campaign_id, lambda c: set_version_flag(c, version_id, is_flagged, notes)
    )
    logger.info(
        "Version moderation updated — campaign=%s version=%s flagged=%s by=%s",
        campaign_id,
        version_id,
        is_flagged,
        caller.user_id,
    )
    return campaign


def collect_flagged_versions(campaigns: list[Campaign]) -> list[FlaggedVersion]:
    """Gather flagged versions from ``campaigns``, newest version timestamp first."""
    flagged = [
        FlaggedVersion(
            campaign_id=campaign.id,
            campaign_title=campaign.title,
            campaign_owner_id=campaign.owner_id,
            version_id=version.id,
            version_number=version.version_number,
            actor_name=version.actor_name,
            change_summary=version.change_summary,
            timestamp=version.timestamp,
            is_flagged=version.is_flagged,
            admin_moderation_notes=version.admin_moderation_notes,
            content_snapshot=version.content_snapshot,
        )
        for campaign in campaigns
        for version in campaign.content_versions
        if version.is_flagged
    ]
    flagged.sort(key=lambda item: item.timestamp, reverse=True)
    return flagged


async def list_flagged_versions(
    caller: Caller,
    campaigns_repo: CampaignRepository,
) -> list[FlaggedVersion]:
    authorize(caller, None, Action.MODERATE)
    campaigns = await campaigns_repo.list_with_flagged_versions()
    return collect_flagged_versions(campaigns)
