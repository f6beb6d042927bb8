"""Data models for Cosmos DB document types."""

from contentcraft.models.brand import BrandProfile
from contentcraft.models.campaign import (
    AgentInteraction,
    Campaign,
    CampaignStatus,
    ContentVersion,
    ReferenceMaterial,
    ScheduledPost,
)
from contentcraft.models.feedback import Feedback
from contentcraft.models.user import User, UserRole

__all__ = [
    "AgentInteraction",
    "BrandProfile",
    "Campaign",
    "CampaignStatus",
    "ContentVersion",
    "Feedback",
    "ReferenceMaterial",
    "ScheduledPost",
    "User",
    "UserRole",
]
