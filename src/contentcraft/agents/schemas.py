"""Input and output shapes for each prompt-driven generation step."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from contentcraft.models.brand import BrandProfile


class DebateInput(BaseModel):
    title: str
    brief: str


class DebateTurn(BaseModel):
    agent_name: str
    agent_role: str
    message: str


class DebateOutput(BaseModel):
    debate_log: list[DebateTurn] = Field(min_length=1)


class ContentGenerationInput(BaseModel):
    input_content: str
    brand_voice: str | None = None


class GeneratedContent(BaseModel):
    blog_post: str
    tweet: str
    linkedin_article: str
    instagram_post: str
    tiktok_script: str
    email_campaign: str
    ads_copy: str


class ContentStrategyInput(BaseModel):
    campaign_title: str
    campaign_brief: str
    target_audience: str | None = None
    content_goals: list[str] = Field(default_factory=list)


class ScheduledItem(BaseModel):
    day: int = Field(ge=1, le=7)
    platform: str
    content_type: str
    action_description: str


class ContentStrategyOutput(BaseModel):
    schedule: list[ScheduledItem] = Field(min_length=1)


class ReviseInput(BaseModel):
    original_content: str
    revision_instructions: str
    content_type: str | None = None
    target_audience: str | None = None
    desired_tone: str | None = None


class ReviseOutput(BaseModel):
    revised_content: str
    suggestions: list[str] = Field(default_factory=list)
    explanation: str | None = None


class TranslateInput(BaseModel):
    original_content: str
    target_language: str
    original_language: str | None = None
    tone_description: str | None = None


class TranslateOutput(BaseModel):
    translated_content: str
    detected_original_language: str | None = None
    warnings: list[str] = Field(default_factory=list)


class OptimizeInput(BaseModel):
    original_content: str
    content_type: str
    optimization_goal: str


class PredictedPerformance(BaseModel):
    metric: str
    score: float = Field(ge=0, le=100)
    justification: str


class OptimizeOutput(BaseModel):
    predicted_performance: PredictedPerformance
    optimized_content: str
    explanation: str


class BrandAnalysisInput(BaseModel):
    sample_content: str
    brand_name: str | None = None


class BrandAuditInput(BaseModel):
    content_to_check: str
    content_type: str | None = None
    brand_profile: BrandProfile


class BrandAuditOutput(BaseModel):
    alignment_score: float = Field(ge=0, le=100)
    justification: str
    suggestions: list[str] = Field(default_factory=list)


class ReviewRecommendation(StrEnum):
    KEEP = "Keep As Is"
    SUGGEST_REVISION = "Suggest User Revision"
    DELETE = "Delete Immediately"


class FlagReviewInput(BaseModel):
    flagged_content: str
    content_type: str
    admin_moderation_notes: str | None = None
    brand_profile: BrandProfile | None = None


class FlagReviewOutput(BaseModel):
    recommendation: ReviewRecommendation
    justification: str
    confidence_score: float = Field(ge=0, le=100)


class QualityRecommendation(StrEnum):
    LOOKS_GOOD = "Looks Good"
    SUGGEST_IMPROVEMENT = "Suggest Improvement"
    RECOMMEND_ARCHIVING = "Recommend Archiving"
    INCOMPLETE = "Incomplete"


class QualityAuditInput(BaseModel):
    campaign_title: str
    campaign_status: str
    days_since_last_update: int = Field(ge=0)
    content_version_count: int = Field(ge=0)
    agent_debate_count: int = Field(ge=0)


class QualityAuditOutput(BaseModel):
    quality_score: float = Field(ge=0, le=100)
    justification: str
    recommendation: QualityRecommendation


class CampaignSummary(BaseModel):
    title: str
    status: str
    tone: str | None = None
    content_formats: list[str] = Field(default_factory=list)


class CampaignMemoryInput(BaseModel):
    past_campaigns_summary: list[CampaignSummary]
    current_campaign_brief: str


class CampaignMemoryOutput(BaseModel):
    insights: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    confidence_score: float = Field(ge=0, le=100)
