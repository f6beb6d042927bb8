"""Repository modules for each Cosmos DB container."""

from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.database.repositories.feedback import FeedbackRepository
from contentcraft.database.repositories.users import UserRepository

__all__ = [
    "CampaignRepository",
    "FeedbackRepository",
    "UserRepository",
]
