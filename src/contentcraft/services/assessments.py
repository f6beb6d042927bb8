"""Read-only AI assessments — brand audit, flag review, quality audit, campaign memory.

None of these steps write to the campaign; they return the model's verdict.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contentcraft.agents.schemas import (
    BrandAuditInput,
    BrandAuditOutput,
    CampaignMemoryInput,
    CampaignMemoryOutput,
    CampaignSummary,
    FlagReviewInput,
    FlagReviewOutput,
    QualityAuditInput,
    QualityAuditOutput,
)
from contentcraft.errors import NotFoundError, ValidationError
from contentcraft.models.base import utcnow
from contentcraft.services.authorization import Action, authorize
from contentcraft.services.campaigns import get_campaign
from contentcraft.services.generation import require_field, source_text

if TYPE_CHECKING:
    from contentcraft.agents.completion import CompletionService
    from contentcraft.database.repositories.campaigns import CampaignRepository
    from contentcraft.models.campaign import Campaign, ContentVersion
    from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)

MEMORY_CAMPAIGN_LIMIT = 10

NO_HISTORY = CampaignMemoryOutput(
    insights=["No prior campaign history found for this user."],
    suggestions=[
        "Start fresh and use this campaign as a baseline.",
        "Pick one primary tone and two or three key content formats for it.",
    ],
    confidence_score=10,
)


async def audit_brand(
    caller: Caller,
    campaign_id: str,
    content_format: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    source_version_id: str | None = None,
) -> BrandAuditOutput:
    """Score one format of a version against the campaign's brand profile."""
    campaign = await get_campaign(caller, campaign_id, campaigns_repo)
    if campaign.brand_profile is None:
        raise ValidationError(f"Campaign {campaign_id} has no brand profile to audit against")
    source, text = source_text(campaign, content_format, source_version_id)

    result = await completion.complete(
        "brand_audit",
        BrandAuditInput(
            content_to_check=text,
            content_type=content_format,
            brand_profile=campaign.brand_profile,
        ),
        BrandAuditOutput,
    )
    logger.info(
        "Brand audit finished — campaign=%s version=%d format=%s score=%.0f",
        campaign_id,
        source.version_number,
        content_format,
        result.alignment_score,
    )
    return result


def _reviewable_text(version: ContentVersion, content_format: str | None) -> tuple[str, str]:
    if content_format is not None:
        text = version.content_snapshot.get(content_format)
        if text is None:
            raise NotFoundError(
                f"Format '{content_format}' not present in version {version.version_number}"
            )
        return content_format, text
    for name, text in version.content_snapshot.items():
        if text.strip():
            return name, text
    raise ValidationError(f"Version {version.version_number} has no reviewable text")


async def review_flagged_version(
    caller: Caller,
    campaign_id: str,
    version_id: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    content_format: str | None = None,
) -> FlagReviewOutput:
    """Ask for a moderation recommendation on a flagged content version.

    Without ``content_format`` the first non-empty format of the snapshot is
    reviewed.
    """
    authorize(caller, None, Action.MODERATE)
    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.MODERATE)
    version = campaign.find_version(version_id)
    if version is None:
        raise NotFoundError(f"Content version {version_id} not found in campaign {campaign_id}")
    if not version.is_flagged:
        raise ValidationError(f"Content version {version_id} is not flagged")
    reviewed_format, text = _reviewable_text(version, content_format)

    result = await completion.complete(
        "flag_review",
        FlagReviewInput(
            flagged_content=text,
            content_type=reviewed_format,
            admin_moderation_notes=version.admin_moderation_notes or None,
            brand_profile=campaign.brand_profile,
        ),
        FlagReviewOutput,
    )
    logger.info(
        "Flag review finished — campaign=%s version=%d format=%s recommendation=%s",
        campaign_id,
        version.version_number,
        reviewed_format,
        result.recommendation,
    )
    return result


def quality_audit_input(campaign: Campaign) -> QualityAuditInput:
    """Summarise the campaign metadata the quality audit scores."""
    idle = utcnow() - campaign.updated_at
    return QualityAuditInput(
        campaign_title=campaign.title,
        campaign_status=campaign.status,
        days_since_last_update=max(0, idle.days),
        content_version_count=len(campaign.content_versions),
        agent_debate_count=len(campaign.agent_debates),
    )


async def audit_campaign_quality(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
) -> QualityAuditOutput:
    authorize(caller, None, Action.ADMINISTER)
    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.ADMINISTER)
    result = await completion.complete(
        "quality_audit", quality_audit_input(campaign), QualityAuditOutput
    )
    logger.info(
        "Quality audit finished — campaign=%s score=%.0f recommendation=%s",
        campaign_id,
        result.quality_score,
        result.recommendation,
    )
    return result


def summarize_campaign(campaign: Campaign) -> CampaignSummary:
    latest = campaign.latest_version()
    return CampaignSummary(
        title=campaign.title,
        status=campaign.status,
        tone=campaign.tone,
        content_formats=list(latest.content_snapshot) if latest else [],
    )


async def recall_campaign_memory(
    caller: Caller,
    current_brief: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    user_id: str | None = None,
) -> CampaignMemoryOutput:
    """Draw insights for a new brief from a user's most recent campaigns.

    Callers recall their own history. Admins may name another ``user_id``.
    A user without campaigns gets a fixed low-confidence answer and the
    completion service is not called.
    """
    require_field("current_campaign_brief", current_brief)
    owner_id = user_id or caller.user_id
    if owner_id != caller.user_id:
        authorize(caller, None, Action.ADMINISTER)

    campaigns = await campaigns_repo.list_by_owner(owner_id)
    recent = campaigns[:MEMORY_CAMPAIGN_LIMIT]
    if not recent:
        logger.info("Campaign memory empty — user=%s", owner_id)
        return NO_HISTORY.model_copy(deep=True)

    result = await completion.complete(
        "campaign_memory",
        CampaignMemoryInput(
            past_campaigns_summary=[summarize_campaign(c) for c in recent],
            current_campaign_brief=current_brief,
        ),
        CampaignMemoryOutput,
    )
    logger.info(
        "Campaign memory recalled — user=%s campaigns=%d confidence=%.0f",
        owner_id,
        len(recent),
        result.confidence_score,
    )
    return result
