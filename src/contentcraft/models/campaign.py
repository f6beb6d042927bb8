"""Campaign document model — the aggregate root for generated content."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from contentcraft.models.base import DocumentBase, utcnow
from contentcraft.models.brand import BrandProfile


class CampaignStatus(StrEnum):
    DRAFT = "draft"
    DEBATING = "debating"
    GENERATING = "generating"
    REVIEW = "review"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ContentVersion(BaseModel):
    """An immutable snapshot of every generated format at one point in time.

    Only the moderation fields are ever replaced, via ``model_copy``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    version_number: int = Field(ge=1)
    timestamp: datetime = Field(default_factory=utcnow)
    actor_name: str
    change_summary: str = ""
    content_snapshot: dict[str, str] = Field(default_factory=dict)
    is_flagged: bool = False
    admin_moderation_notes: str | None = None


class AgentInteraction(BaseModel):
    """One turn of an agent debate."""

    agent_name: str
    agent_role: str
    message: str
    timestamp: datetime = Field(default_factory=utcnow)


class ScheduledPost(BaseModel):
    """One planned publishing action produced by the content strategy step."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    content_format: str
    platform: str
    description: str
    scheduled_at: datetime
    status: str = "draft"


class ReferenceMaterial(BaseModel):
    type: Literal["url", "file", "text"]
    value: str
    name: str | None = None


class Campaign(DocumentBase):
    """A user-initiated campaign and everything the agents produced for it."""

    owner_id: str
    title: str
    brief: str
    target_audience: str | None = None
    tone: str | None = None
    content_goals: list[str] = Field(default_factory=list)
    brand_profile: BrandProfile | None = None
    reference_materials: list[ReferenceMaterial] = Field(default_factory=list)
    status: CampaignStatus = CampaignStatus.DRAFT
    agent_debates: list[AgentInteraction] = Field(default_factory=list)
    content_versions: list[ContentVersion] = Field(default_factory=list)
    scheduled_posts: list[ScheduledPost] = Field(default_factory=list)
    is_flagged: bool = False
    admin_moderation_notes: str | None = None
    is_private: bool = False

    def find_version(self, version_id: str) -> ContentVersion | None:
        return next((v for v in self.content_versions if v.id == version_id), None)

    def latest_version(self) -> ContentVersion | None:
        if not self.content_versions:
            return None
        return max(self.content_versions, key=lambda v: v.version_number)
