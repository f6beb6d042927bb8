"""Tests for the read-only AI assessments."""

from datetime import timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import BaseModel

from contentcraft.agents.schemas import (
    BrandAuditOutput,
    CampaignMemoryOutput,
    FlagReviewOutput,
    QualityAuditOutput,
    QualityRecommendation,
    ReviewRecommendation,
)
from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.errors import AuthorizationError, GenerationError, NotFoundError, ValidationError
from contentcraft.models.base import utcnow
from contentcraft.models.brand import BrandProfile, VoiceProfile
from contentcraft.models.campaign import AgentInteraction, Campaign, CampaignStatus
from contentcraft.services import assessments as assessment_svc
from contentcraft.services.authorization import Caller
from contentcraft.services.moderation import set_version_flag
from contentcraft.services.versions import append_version

SNAPSHOT = {"blog_post": "Long read", "tweet": "Short and bright"}
BRAND = BrandProfile(voice_profile=VoiceProfile(tone="Playful", keywords=["bright"]))

AUDIT = BrandAuditOutput(
    alignment_score=82,
    justification="Keeps the playful voice.",
    suggestions=["Mention 'bright' earlier."],
)
REVIEW = FlagReviewOutput(
    recommendation=ReviewRecommendation.SUGGEST_REVISION,
    justification="Off-brand but safe.",
    confidence_score=70,
)
QUALITY = QualityAuditOutput(
    quality_score=45,
    justification="A debate but little content.",
    recommendation=QualityRecommendation.SUGGEST_IMPROVEMENT,
)
MEMORY = CampaignMemoryOutput(
    insights=["Playful campaigns get published."],
    suggestions=["Keep the playful tone."],
    confidence_score=60,
)


def _completion(result: Any) -> MagicMock:
    async def _complete(template: str, inputs: BaseModel, output_model: type[BaseModel]) -> Any:  # noqa: ARG001
        if isinstance(result, Exception):
            raise result
        return result

    completion = MagicMock()
    completion.complete = AsyncMock(side_effect=_complete)
    return completion


@pytest.fixture
async def versioned_campaign(campaigns_repo: CampaignRepository, stored_campaign: Campaign) -> Campaign:
    """A branded campaign holding one version."""

    def _seed(campaign: Campaign) -> None:
        campaign.brand_profile = BRAND
        append_version(campaign, "AI Content Team", "Initial", SNAPSHOT)

    return await campaigns_repo.mutate(stored_campaign.id, _seed)


@pytest.mark.unit
class TestAuditBrand:
    """Test brand alignment scoring."""

    async def test_scores_latest_version(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, owner: Caller
    ) -> None:
        completion = _completion(AUDIT)

        result = await assessment_svc.audit_brand(
            owner, versioned_campaign.id, "tweet", campaigns_repo, completion
        )

        assert result == AUDIT
        template, inputs, _ = completion.complete.await_args.args
        assert template == "brand_audit"
        assert inputs.content_to_check == "Short and bright"
        assert inputs.brand_profile == BRAND

    async def test_does_not_write(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, owner: Caller
    ) -> None:
        await assessment_svc.audit_brand(
            owner, versioned_campaign.id, "tweet", campaigns_repo, _completion(AUDIT)
        )

        stored = await campaigns_repo.get(versioned_campaign.id, versioned_campaign.id)
        assert stored is not None
        assert len(stored.content_versions) == 1
        assert stored.updated_at == versioned_campaign.updated_at

    async def test_requires_brand_profile(
        self, campaigns_repo: CampaignRepository, stored_campaign: Campaign, owner: Caller
    ) -> None:
        await campaigns_repo.mutate(
            stored_campaign.id, lambda c: append_version(c, "Agent", "x", SNAPSHOT)
        )
        completion = _completion(AUDIT)

        with pytest.raises(ValidationError, match="brand profile"):
            await assessment_svc.audit_brand(
                owner, stored_campaign.id, "tweet", campaigns_repo, completion
            )

        completion.complete.assert_not_awaited()

    async def test_missing_format(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, owner: Caller
    ) -> None:
        with pytest.raises(NotFoundError):
            await assessment_svc.audit_brand(
                owner, versioned_campaign.id, "ads_copy", campaigns_repo, _completion(AUDIT)
            )

    async def test_stranger_cannot_audit(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, stranger: Caller
    ) -> None:
        with pytest.raises(AuthorizationError):
            await assessment_svc.audit_brand(
                stranger, versioned_campaign.id, "tweet", campaigns_repo, _completion(AUDIT)
            )


@pytest.mark.unit
class TestReviewFlaggedVersion:
    """Test moderation recommendations."""

    async def _flag(self, repo: CampaignRepository, campaign: Campaign, notes: str = "Too loud") -> str:
        version_id = campaign.content_versions[0].id
        await repo.mutate(campaign.id, lambda c: set_version_flag(c, version_id, True, notes))
        return version_id

    async def test_reviews_first_format_with_notes(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, admin: Caller
    ) -> None:
        version_id = await self._flag(campaigns_repo, versioned_campaign)
        completion = _completion(REVIEW)

        result = await assessment_svc.review_flagged_version(
            admin, versioned_campaign.id, version_id, campaigns_repo, completion
        )

        assert result.recommendation == ReviewRecommendation.SUGGEST_REVISION
        template, inputs, _ = completion.complete.await_args.args
        assert template == "flag_review"
        assert inputs.content_type == "blog_post"
        assert inputs.flagged_content == "Long read"
        assert inputs.admin_moderation_notes == "Too loud"
        assert inputs.brand_profile == BRAND

    async def test_named_format(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, admin: Caller
    ) -> None:
        version_id = await self._flag(campaigns_repo, versioned_campaign)
        completion = _completion(REVIEW)

        await assessment_svc.review_flagged_version(
            admin,
            versioned_campaign.id,
            version_id,
            campaigns_repo,
            completion,
            content_format="tweet",
        )

        assert completion.complete.await_args.args[1].flagged_content == "Short and bright"

    async def test_unflagged_version_rejected(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, admin: Caller
    ) -> None:
        completion = _completion(REVIEW)

        with pytest.raises(ValidationError, match="not flagged"):
            await assessment_svc.review_flagged_version(
                admin,
                versioned_campaign.id,
                versioned_campaign.content_versions[0].id,
                campaigns_repo,
                completion,
            )

        completion.complete.assert_not_awaited()

    async def test_unknown_version(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, admin: Caller
    ) -> None:
        with pytest.raises(NotFoundError):
            await assessment_svc.review_flagged_version(
                admin, versioned_campaign.id, "missing", campaigns_repo, _completion(REVIEW)
            )

    async def test_owner_cannot_review(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, owner: Caller
    ) -> None:
        version_id = await self._flag(campaigns_repo, versioned_campaign)

        with pytest.raises(AuthorizationError):
            await assessment_svc.review_flagged_version(
                owner, versioned_campaign.id, version_id, campaigns_repo, _completion(REVIEW)
            )

    async def test_completion_failure_propagates(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, admin: Caller
    ) -> None:
        version_id = await self._flag(campaigns_repo, versioned_campaign)

        with pytest.raises(GenerationError):
            await assessment_svc.review_flagged_version(
                admin,
                versioned_campaign.id,
                version_id,
                campaigns_repo,
                _completion(GenerationError("The flag_review step failed")),
            )


@pytest.mark.unit
class TestQualityAudit:
    """Test campaign quality audits."""

    def test_input_counts_activity(self, campaign: Campaign) -> None:
        append_version(campaign, "Agent", "x", SNAPSHOT)
        campaign.agent_debates = [
            AgentInteraction(agent_name="Strategist", agent_role="Strategy", message="Go")
        ]
        campaign.updated_at = utcnow() - timedelta(days=30, hours=2)

        inputs = assessment_svc.quality_audit_input(campaign)

        assert inputs.campaign_status == CampaignStatus.DRAFT
        assert inputs.days_since_last_update == 30
        assert inputs.content_version_count == 1
        assert inputs.agent_debate_count == 1

    def test_future_update_counts_as_today(self, campaign: Campaign) -> None:
        campaign.updated_at = utcnow() + timedelta(hours=1)

        assert assessment_svc.quality_audit_input(campaign).days_since_last_update == 0

    async def test_admin_audits(
        self, campaigns_repo: CampaignRepository, stored_campaign: Campaign, admin: Caller
    ) -> None:
        completion = _completion(QUALITY)

        result = await assessment_svc.audit_campaign_quality(
            admin, stored_campaign.id, campaigns_repo, completion
        )

        assert result.recommendation == QualityRecommendation.SUGGEST_IMPROVEMENT
        template, inputs, _ = completion.complete.await_args.args
        assert template == "quality_audit"
        assert inputs.campaign_title == stored_campaign.title

    async def test_owner_cannot_audit(
        self, campaigns_repo: CampaignRepository, stored_campaign: Campaign, owner: Caller
    ) -> None:
        completion = _completion(QUALITY)

        with pytest.raises(AuthorizationError):
            await assessment_svc.audit_campaign_quality(
                owner, stored_campaign.id, campaigns_repo, completion
            )

        completion.complete.assert_not_awaited()


@pytest.mark.unit
class TestRecallCampaignMemory:
    """Test insights drawn from past campaigns."""

    async def test_no_history_skips_completion(
        self, campaigns_repo: CampaignRepository, owner: Caller
    ) -> None:
        completion = _completion(MEMORY)

        result = await assessment_svc.recall_campaign_memory(
            owner, "Autumn sale", campaigns_repo, completion
        )

        assert result.confidence_score == 10
        assert result.insights == assessment_svc.NO_HISTORY.insights
        completion.complete.assert_not_awaited()

    async def test_summarises_recent_campaigns(
        self, campaigns_repo: CampaignRepository, versioned_campaign: Campaign, owner: Caller
    ) -> None:
        completion = _completion(MEMORY)

        result = await assessment_svc.recall_campaign_memory(
            owner, "Autumn sale", campaigns_repo, completion
        )

        assert result == MEMORY
        template, inputs, _ = completion.complete.await_args.args
        assert template == "campaign_memory"
        assert inputs.current_campaign_brief == "Autumn sale"
        (summary,) = inputs.past_campaigns_summary
        assert summary.title == versioned_campaign.title
        assert summary.tone == "Playful"
        assert summary.content_formats == ["blog_post", "tweet"]

    async def test_limits_history(self, campaigns_repo: CampaignRepository, owner: Caller) -> None:
        for i in range(assessment_svc.MEMORY_CAMPAIGN_LIMIT + 2):
            await campaigns_repo.create(
                Campaign(id=f"camp-{i}", owner_id=owner.user_id, title=f"C{i}", brief="B")
            )
        completion = _completion(MEMORY)

        await assessment_svc.recall_campaign_memory(owner, "Next", campaigns_repo, completion)

        inputs = completion.complete.await_args.args[1]
        assert len(inputs.past_campaigns_summary) == assessment_svc.MEMORY_CAMPAIGN_LIMIT

    async def test_blank_brief(self, campaigns_repo: CampaignRepository, owner: Caller) -> None:
        with pytest.raises(ValidationError):
            await assessment_svc.recall_campaign_memory(
                owner, "  ", campaigns_repo, _completion(MEMORY)
            )

    async def test_other_user_needs_admin(
        self, campaigns_repo: CampaignRepository, owner: Caller, stranger: Caller
    ) -> None:
        with pytest.raises(AuthorizationError):
            await assessment_svc.recall_campaign_memory(
                stranger, "Next", campaigns_repo, _completion(MEMORY), user_id=owner.user_id
            )

    async def test_admin_recalls_for_user(
        self,
        campaigns_repo: CampaignRepository,
        versioned_campaign: Campaign,
        owner: Caller,
        admin: Caller,
    ) -> None:
        completion = _completion(MEMORY)

        await assessment_svc.recall_campaign_memory(
            admin, "Next", campaigns_repo, completion, user_id=owner.user_id
        )

        completion.complete.assert_awaited_once()
