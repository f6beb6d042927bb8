"""Repository for the users container (partitioned by /id)."""

from __future__ import annotations

from contentcraft.database.repositories.base import BaseRepository
from contentcraft.models.user import User


class UserRepository(BaseRepository[User]):
    container_name = "users"
    model_class = User

    async def list_all(self) -> list[User]:
        """Fetch every user, newest first."""
        return await self.query("SELECT * FROM c ORDER BY c.created_at DESC")

    async def count_by_role(self) -> dict[str, int]:
        rows = await self._query_raw(
            "SELECT c.role, COUNT(1) AS total FROM c GROUP BY c.role",
        )
        return {row["role"]: row["total"] for row in rows}
