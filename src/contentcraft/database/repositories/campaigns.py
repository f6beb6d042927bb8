"""Repository for the campaigns container (partitioned by /id)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from azure.core import MatchConditions
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from contentcraft.database.repositories.base import BaseRepository
from contentcraft.errors import ConflictError, NotFoundError
from contentcraft.models.base import utcnow
from contentcraft.models.campaign import Campaign

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_HTTP_PRECONDITION_FAILED = 412
MAX_WRITE_ATTEMPTS = 8


class CampaignRepository(BaseRepository[Campaign]):
    """Provide data access for the campaigns container."""

    container_name = "campaigns"
    model_class = Campaign

    async def list_by_owner(self, owner_id: str) -> list[Campaign]:
        """Fetch a user's campaigns, newest first."""
        return await self.query(
            "SELECT * FROM c WHERE c.owner_id = @owner_id ORDER BY c.created_at DESC",
            [{"name": "@owner_id", "value": owner_id}],
        )

    async def list_all(self) -> list[Campaign]:
        """Fetch every campaign, most recently updated first."""
        return await self.query("SELECT * FROM c ORDER BY c.updated_at DESC")

    async def list_with_flagged_versions(self) -> list[Campaign]:
        """Fetch campaigns holding at least one flagged content version."""
        return await self.query(
            "SELECT * FROM c WHERE EXISTS("
            "SELECT VALUE v FROM v IN c.content_versions WHERE v.is_flagged = true)",
        )

    async def mutate(
        self,
        campaign_id: str,
        apply: Callable[[Campaign], None],
        *,
        max_attempts: int = MAX_WRITE_ATTEMPTS,
    ) -> Campaign:
        """Apply ``apply`` to a fresh read and replace the document only if unchanged.

        The replace carries the ETag of the read. When another writer got there
        first, the mutation is re-applied to the new state. Exceptions raised by
        ``apply`` abort the write and leave the stored document untouched.
        """
        for attempt in range(1, max_attempts + 1):
            try:
                data = cast(
                    "dict[str, Any]",
                    await self._container.read_item(item=campaign_id, partition_key=campaign_id),
                )
            except CosmosResourceNotFoundError as exc:
                raise NotFoundError(f"Campaign {campaign_id} not found") from exc

            campaign = self.model_class.model_validate(data)
            apply(campaign)
            campaign.updated_at = utcnow()

            try:
                await self._container.replace_item(
                    item=campaign.id,
                    body=campaign.model_dump(mode="json"),
                    etag=data.get("_etag"),
                    match_condition=MatchConditions.IfNotModified,
                )
            except CosmosHttpResponseError as exc:
                if exc.status_code == _HTTP_PRECONDITION_FAILED:
                    logger.info(
                        "Campaign write conflict — campaign=%s attempt=%d", campaign_id, attempt
                    )
                    continue
                raise
            return campaign

        raise ConflictError(
            f"Campaign {campaign_id} is being modified concurrently; retry the request"
        )

    async def count_by_status(self) -> dict[str, int]:
        rows = await self._query_raw(
            "SELECT c.status, COUNT(1) AS total FROM c GROUP BY c.status",
        )
        return {row["status"]: row["total"] for row in rows}

    async def count_versions(self) -> int:
        rows = await self._query_raw(
            "SELECT VALUE SUM(ARRAY_LENGTH(c.content_versions)) FROM c",
        )
        return int(rows[0] or 0) if rows else 0

    async def count_flagged(self) -> int:
        rows = await self._query_raw(
            "SELECT VALUE COUNT(1) FROM c WHERE c.is_flagged = true",
        )
        return int(rows[0]) if rows else 0
