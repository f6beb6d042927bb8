"""Generic repository over a single Cosmos DB container."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from contentcraft.models.base import DocumentBase, utcnow

if TYPE_CHECKING:
    from azure.cosmos.aio import DatabaseProxy

T = TypeVar("T", bound=DocumentBase)


class BaseRepository(Generic[T]):
    """CRUD and query helpers shared by every container repository."""

    container_name: ClassVar[str]
    model_class: type[T]

    def __init__(self, database: DatabaseProxy) -> None:
        self._container = database.get_container_client(self.container_name)

    async def create(self, item: T) -> T:
        await self._container.create_item(body=item.model_dump(mode="json"))
        return item

    async def get(self, item_id: str, partition_key: str) -> T | None:
        """Read a document by id, returning None when it does not exist."""
        try:
            data = await self._container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            return None
        return self.model_class.model_validate(data)

    async def update(self, item: T, partition_key: str) -> T:  # noqa: ARG002
        """Replace a document unconditionally and bump ``updated_at``."""
        item.updated_at = utcnow()
        await self._container.replace_item(item=item.id, body=item.model_dump(mode="json"))
        return item

    async def delete(self, item_id: str, partition_key: str) -> None:
        await self._container.delete_item(item=item_id, partition_key=partition_key)

    async def query(
        self,
        sql: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[T]:
        """Run a SQL query and validate every row into the model class."""
        items = self._container.query_items(query=sql, parameters=parameters or [])
        return [self.model_class.model_validate(item) async for item in items]

    async def _query_raw(
        self,
        sql: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[Any]:
        items = self._container.query_items(query=sql, parameters=parameters or [])
        return [item async for item in items]
