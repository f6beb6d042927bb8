"""Repository for the feedback container (partitioned by /campaign_id)."""

from __future__ import annotations

import logging

from azure.cosmos.exceptions import CosmosResourceExistsError

from contentcraft.database.repositories.base import BaseRepository
from contentcraft.errors import ConflictError
from contentcraft.models.feedback import Feedback

logger = logging.getLogger(__name__)


class FeedbackRepository(BaseRepository[Feedback]):
    container_name = "feedback"
    model_class = Feedback

    async def create(self, item: Feedback) -> Feedback:
        """Insert a rating, rejecting a second one for the same user/version/format."""
        try:
            return await super().create(item)
        except CosmosResourceExistsError as exc:
            raise ConflictError(
                f"Feedback already submitted for format '{item.content_format}'"
            ) from exc

    async def list_by_campaign(self, campaign_id: str) -> list[Feedback]:
        return await self.query(
            "SELECT * FROM c WHERE c.campaign_id = @campaign_id ORDER BY c.created_at DESC",
            [{"name": "@campaign_id", "value": campaign_id}],
        )

    async def delete_by_campaign(self, campaign_id: str) -> int:
        """Delete every rating attached to a campaign. Returns the number removed."""
        entries = await self.list_by_campaign(campaign_id)
        for entry in entries:
            await self.delete(entry.id, campaign_id)
        logger.info("Feedback removed — campaign=%s count=%d", campaign_id, len(entries))
        return len(entries)

    async def count_by_rating(self) -> dict[int, int]:
        rows = await self._query_raw(
            "SELECT c.rating, COUNT(1) AS total FROM c GROUP BY c.rating",
        )
        return {row["rating"]: row["total"] for row in rows}
