"""Prompt-driven steps folded into a campaign.

Each step calls the completion service once and commits its result together
with any status change in a single compare-and-swap write. A failed debate or
generation reverts the campaign to ``draft`` and leaves its versions and
interactions as they were.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from azure.cosmos.exceptions import CosmosHttpResponseError
from pydantic import BaseModel

from contentcraft.agents.schemas import (
    BrandAnalysisInput,
    ContentGenerationInput,
    ContentStrategyInput,
    ContentStrategyOutput,
    DebateInput,
    DebateOutput,
    GeneratedContent,
    OptimizeInput,
    OptimizeOutput,
    ReviseInput,
    ReviseOutput,
    TranslateInput,
    TranslateOutput,
)
from contentcraft.errors import (
    CompletionTimeoutError,
    ConflictError,
    GenerationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from contentcraft.models.base import utcnow
from contentcraft.models.brand import BrandProfile
from contentcraft.models.campaign import (
    AgentInteraction,
    Campaign,
    CampaignStatus,
    ContentVersion,
    ScheduledPost,
)
from contentcraft.services.authorization import Action, authorize
from contentcraft.services.campaigns import get_campaign
from contentcraft.services.lifecycle import CampaignEvent, apply_event
from contentcraft.services.versions import append_version, record_version

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from contentcraft.agents.completion import CompletionService
    from contentcraft.database.repositories.campaigns import CampaignRepository
    from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)

GENERATION_ACTOR = "AI Content Team"
REVISION_ACTOR = "Revision Agent"
TRANSLATION_ACTOR = "Translation Agent"
OPTIMIZATION_ACTOR = "Optimization Agent"

_STEP_FAILURES = (GenerationError, CompletionTimeoutError)


class ToolResult(BaseModel):
    """A campaign after a tool-driven revision, plus the tool's side output."""

    campaign: Campaign
    version: ContentVersion
    details: dict[str, Any]


async def _revert_on_failure(
    campaign_id: str,
    in_progress: CampaignStatus,
    event: CampaignEvent,
    campaigns_repo: CampaignRepository,
) -> None:
    def _apply(campaign: Campaign) -> None:
        # Only undo our own in-progress state; a concurrent publish/archive wins.
        if campaign.status == in_progress:
            apply_event(campaign, event)

    await campaigns_repo.mutate(campaign_id, _apply)
    logger.warning("Campaign reverted to draft — campaign=%s event=%s", campaign_id, event)


async def _commit_or_revert(
    campaign_id: str,
    commit: Callable[[Campaign], None],
    in_progress: CampaignStatus,
    event: CampaignEvent,
    campaigns_repo: CampaignRepository,
) -> Campaign:
    """Write a step's result, or put the campaign back in ``draft`` if the write fails."""
    try:
        return await campaigns_repo.mutate(campaign_id, commit)
    except (ConflictError, CosmosHttpResponseError):
        logger.warning("Step commit failed — campaign=%s event=%s", campaign_id, event)
        await _revert_on_failure(campaign_id, in_progress, event, campaigns_repo)
        raise


async def run_debate(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
) -> Campaign:
    """Start generation and run the agent debate, replacing the debate log."""

    def _begin(campaign: Campaign) -> None:
        authorize(caller, campaign, Action.EDIT)
        apply_event(campaign, CampaignEvent.BEGIN_GENERATION)

    campaign = await campaigns_repo.mutate(campaign_id, _begin)

    try:
        result = await completion.complete(
            "debate",
            DebateInput(title=campaign.title, brief=campaign.brief),
            DebateOutput,
        )
    except _STEP_FAILURES:
        await _revert_on_failure(
            campaign_id, CampaignStatus.DEBATING, CampaignEvent.DEBATE_FAILED, campaigns_repo
        )
        raise

    interactions = [
        AgentInteraction(agent_name=turn.agent_name, agent_role=turn.agent_role, message=turn.message)
        for turn in result.debate_log
    ]

    def _commit(campaign: Campaign) -> None:
        apply_event(campaign, CampaignEvent.DEBATE_SUCCEEDED)
        campaign.agent_debates = interactions

    campaign = await _commit_or_revert(
        campaign_id, _commit, CampaignStatus.DEBATING, CampaignEvent.DEBATE_FAILED, campaigns_repo
    )
    logger.info("Debate completed — campaign=%s turns=%d", campaign_id, len(interactions))
    return campaign


async def generate_content(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
) -> Campaign:
    """Generate every format and append it as a new full version.

    The campaign must be in ``generating``, i.e. a debate has just succeeded.
    """
    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.EDIT)
    if campaign.status != CampaignStatus.GENERATING:
        raise InvalidTransitionError(
            f"Content generation needs status '{CampaignStatus.GENERATING}', "
            f"campaign is '{campaign.status}'"
        )

    brand_voice = campaign.brand_profile.voice_profile.tone if campaign.brand_profile else None
    try:
        generated = await completion.complete(
            "content_generation",
            ContentGenerationInput(input_content=campaign.brief, brand_voice=brand_voice or campaign.tone),
            GeneratedContent,
        )
    except _STEP_FAILURES:
        await _revert_on_failure(
            campaign_id,
            CampaignStatus.GENERATING,
            CampaignEvent.GENERATION_FAILED,
            campaigns_repo,
        )
        raise

    def _commit(campaign: Campaign) -> None:
        apply_event(campaign, CampaignEvent.GENERATION_SUCCEEDED)
        append_version(
            campaign,
            GENERATION_ACTOR,
            "Initial content generation from creative brief and brand profile.",
            generated.model_dump(),
        )

    campaign = await _commit_or_revert(
        campaign_id,
        _commit,
        CampaignStatus.GENERATING,
        CampaignEvent.GENERATION_FAILED,
        campaigns_repo,
    )
    logger.info(
        "Content generated — campaign=%s version=%d",
        campaign_id,
        campaign.content_versions[-1].version_number,
    )
    return campaign


async def run_campaign(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
) -> Campaign:
    """Debate, then generate: the full path from draft to review."""
    await run_debate(caller, campaign_id, campaigns_repo, completion)
    return await generate_content(caller, campaign_id, campaigns_repo, completion)


async def generate_schedule(
    caller: Caller,
    campaign_id: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    start: datetime | None = None,
) -> Campaign:
    """Plan a 7-day schedule and replace the campaign's scheduled posts."""
    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.EDIT)
    result = await completion.complete(
        "content_strategy",
        ContentStrategyInput(
            campaign_title=campaign.title,
            campaign_brief=campaign.brief,
            target_audience=campaign.target_audience,
            content_goals=campaign.content_goals,
        ),
        ContentStrategyOutput,
    )

    day_one = start or utcnow()
    posts = [
        ScheduledPost(
            content_format=item.content_type,
            platform=item.platform,
            description=item.action_description,
            scheduled_at=day_one + timedelta(days=item.day - 1),
        )
        for item in result.schedule
    ]

    def _commit(campaign: Campaign) -> None:
        authorize(caller, campaign, Action.EDIT)
        campaign.scheduled_posts = posts
        apply_event(campaign, CampaignEvent.SCHEDULE_GENERATED)

    campaign = await campaigns_repo.mutate(campaign_id, _commit)
    logger.info("Schedule generated — campaign=%s posts=%d", campaign_id, len(posts))
    return campaign


def source_text(
    campaign: Campaign,
    content_format: str,
    source_version_id: str | None,
) -> tuple[ContentVersion, str]:
    if source_version_id is not None:
        source = campaign.find_version(source_version_id)
        if source is None:
            raise NotFoundError(f"Content version {source_version_id} not found")
    else:
        source = campaign.latest_version()
        if source is None:
            raise NotFoundError(f"Campaign {campaign.id} has no content versions yet")
    text = source.content_snapshot.get(content_format)
    if text is None:
        raise NotFoundError(
            f"Format '{content_format}' not present in version {source.version_number}"
        )
    return source, text


async def _commit_tool_version(
    caller: Caller,
    campaign_id: str,
    source: ContentVersion,
    content_format: str,
    new_text: str,
    actor_name: str,
    change_summary: str,
    details: dict[str, Any],
    campaigns_repo: CampaignRepository,
) -> ToolResult:
    campaign, version = await record_version(
        caller,
        campaign_id,
        actor_name,
        change_summary,
        {content_format: new_text},
        campaigns_repo,
        base_version_id=source.id,
    )
    return ToolResult(campaign=campaign, version=version, details=details)


def require_field(field: str, value: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field} is required")
    return value


async def revise_format(
    caller: Caller,
    campaign_id: str,
    content_format: str,
    instructions: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    source_version_id: str | None = None,
    target_audience: str | None = None,
    desired_tone: str | None = None,
) -> ToolResult:
    require_field("revision_instructions", instructions)
    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.EDIT)
    source, text = source_text(campaign, content_format, source_version_id)
    result = await completion.complete(
        "revise",
        ReviseInput(
            original_content=text,
            revision_instructions=instructions,
            content_type=content_format,
            target_audience=target_audience or campaign.target_audience,
            desired_tone=desired_tone or campaign.tone,
        ),
        ReviseOutput,
    )
    return await _commit_tool_version(
        caller,
        campaign_id,
        source,
        content_format,
        result.revised_content,
        REVISION_ACTOR,
        f"Revised {content_format}: {instructions}",
        result.model_dump(exclude={"revised_content"}),
        campaigns_repo,
    )


async def translate_format(
    caller: Caller,
    campaign_id: str,
    content_format: str,
    target_language: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    source_version_id: str | None = None,
    original_language: str | None = None,
    tone_description: str | None = None,
) -> ToolResult:
    require_field("target_language", target_language)
    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.EDIT)
    source, text = source_text(campaign, content_format, source_version_id)
    result = await completion.complete(
        "translate",
        TranslateInput(
            original_content=text,
            target_language=target_language,
            original_language=original_language,
            tone_description=tone_description,
        ),
        TranslateOutput,
    )
    return await _commit_tool_version(
        caller,
        campaign_id,
        source,
        content_format,
        result.translated_content,
        TRANSLATION_ACTOR,
        f"Translated {content_format} into {target_language}",
        result.model_dump(exclude={"translated_content"}),
        campaigns_repo,
    )


async def optimize_format(
    caller: Caller,
    campaign_id: str,
    content_format: str,
    optimization_goal: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    source_version_id: str | None = None,
) -> ToolResult:
    require_field("optimization_goal", optimization_goal)
    campaign = await get_campaign(caller, campaign_id, campaigns_repo, Action.EDIT)
    source, text = source_text(campaign, content_format, source_version_id)
    result = await completion.complete(
        "optimize",
        OptimizeInput(
            original_content=text,
            content_type=content_format,
            optimization_goal=optimization_goal,
        ),
        OptimizeOutput,
    )
    return await _commit_tool_version(
        caller,
        campaign_id,
        source,
        content_format,
        result.optimized_content,
        OPTIMIZATION_ACTOR,
        f"Optimized {content_format} for: {optimization_goal}",
        result.model_dump(exclude={"optimized_content"}),
        campaigns_repo,
    )


async def analyze_brand(
    caller: Caller,
    campaign_id: str,
    sample_content: str,
    campaigns_repo: CampaignRepository,
    completion: CompletionService,
    *,
    brand_name: str | None = None,
) -> Campaign:
    """Extract a brand profile from sample content and store it on the campaign."""
    require_field("sample_content", sample_content)
    await get_campaign(caller, campaign_id, campaigns_repo, Action.EDIT)
    profile = await completion.complete(
        "brand_analysis",
        BrandAnalysisInput(sample_content=sample_content, brand_name=brand_name),
        BrandProfile,
    )

    def _apply(campaign: Campaign) -> None:
        authorize(caller, campaign, Action.EDIT)
        campaign.brand_profile = profile

    campaign = await campaigns_repo.mutate(campaign_id, _apply)
    logger.info(
        "Brand profile stored — campaign=%s tone=%s", campaign_id, profile.voice_profile.tone
    )
    return campaign
