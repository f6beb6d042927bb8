"""Async Cosmos DB client initialization."""

from __future__ import annotations

import logging

from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient as AzureCosmosClient
from azure.cosmos.aio import DatabaseProxy

from contentcraft.config import CosmosConfig

logger = logging.getLogger(__name__)

# container name -> partition key path
CONTAINERS: dict[str, str] = {
    "campaigns": "/id",
    "feedback": "/campaign_id",
    "users": "/id",
}


class CosmosClient:
    """Manages the async Cosmos DB client and database reference."""

    def __init__(self, config: CosmosConfig) -> None:
        self._config = config
        self._client: AzureCosmosClient | None = None
        self._database: DatabaseProxy | None = None

    async def initialize(self) -> None:
        """Create the client, then make sure the database and containers exist."""
        self._client = AzureCosmosClient(self._config.endpoint, credential=self._config.key)
        self._database = await self._client.create_database_if_not_exists(self._config.database)
        for name, partition_path in CONTAINERS.items():
            await self._database.create_container_if_not_exists(
                id=name, partition_key=PartitionKey(path=partition_path)
            )
        logger.info(
            "Cosmos DB ready — database=%s containers=%d",
            self._config.database,
            len(CONTAINERS),
        )

    async def close(self) -> None:
        """Close the underlying client."""
        if self._client:
            await self._client.close()
            self._client = None
            self._database = None

    @property
    def database(self) -> DatabaseProxy:
        if self._database is None:
            raise RuntimeError("CosmosClient not initialized — call initialize() first")
        return self._database
