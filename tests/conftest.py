"""Shared fixtures: callers, campaigns and an in-memory Cosmos container."""

from __future__ import annotations

import asyncio
import copy
import uuid
from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import MagicMock

import pytest
from azure.core import MatchConditions
from azure.cosmos.exceptions import (
    CosmosHttpResponseError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)

from contentcraft.config import OpenAIConfig
from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.models.campaign import Campaign
from contentcraft.models.user import UserRole
from contentcraft.services.authorization import Caller


class FakeContainer:
    """Dict-backed stand-in for an async ``ContainerProxy``.

    Reads yield to the event loop so concurrent writers interleave, and
    replaces honour ``IfNotModified`` against a per-document ETag.
    """

    def __init__(self) -> None:
        self.items: dict[str, dict[str, Any]] = {}
        self.replace_calls = 0

    def _etagged(self, body: dict[str, Any]) -> dict[str, Any]:
        stored = copy.deepcopy(body)
        stored["_etag"] = uuid.uuid4().hex
        return stored

    async def create_item(self, body: dict[str, Any]) -> dict[str, Any]:
        if body["id"] in self.items:
            raise CosmosResourceExistsError(status_code=409, message="Entity already exists")
        self.items[body["id"]] = self._etagged(body)
        return copy.deepcopy(self.items[body["id"]])

    async def read_item(self, item: str, partition_key: str) -> dict[str, Any]:  # noqa: ARG002
        if item not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        data = copy.deepcopy(self.items[item])
        await asyncio.sleep(0)
        return data

    async def replace_item(
        self,
        item: str,
        body: dict[str, Any],
        etag: str | None = None,
        match_condition: MatchConditions | None = None,
    ) -> dict[str, Any]:
        self.replace_calls += 1
        if item not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        if (
            match_condition is MatchConditions.IfNotModified
            and self.items[item]["_etag"] != etag
        ):
            raise CosmosHttpResponseError(status_code=412, message="Precondition failed")
        self.items[item] = self._etagged(body)
        return copy.deepcopy(self.items[item])

    async def delete_item(self, item: str, partition_key: str) -> None:  # noqa: ARG002
        if item not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity not found")
        del self.items[item]

    def query_items(self, query: str, parameters: list[dict[str, Any]] | None = None):  # noqa: ARG002
        """Return every stored document; SQL filtering is not emulated."""

        async def _iterate() -> AsyncIterator[dict[str, Any]]:
            for data in list(self.items.values()):
                yield copy.deepcopy(data)

        return _iterate()


@pytest.fixture
def fake_database() -> MagicMock:
    """A database mock handing out one ``FakeContainer`` per container name."""
    containers: dict[str, FakeContainer] = {}
    database = MagicMock()
    database.get_container_client.side_effect = lambda name: containers.setdefault(
        name, FakeContainer()
    )
    return database


@pytest.fixture
def campaigns_repo(fake_database: MagicMock) -> CampaignRepository:
    return CampaignRepository(fake_database)


@pytest.fixture
def owner() -> Caller:
    return Caller(user_id="user-1", role=UserRole.EDITOR)


@pytest.fixture
def stranger() -> Caller:
    return Caller(user_id="user-2", role=UserRole.EDITOR)


@pytest.fixture
def admin() -> Caller:
    return Caller(user_id="admin-1", role=UserRole.ADMIN)


@pytest.fixture
def campaign(owner: Caller) -> Campaign:
    return Campaign(
        id="camp-1",
        owner_id=owner.user_id,
        title="Spring Launch",
        brief="Launch the spring collection to existing customers.",
        target_audience="Returning shoppers",
        tone="Playful",
        content_goals=["awareness"],
    )


@pytest.fixture
async def stored_campaign(campaigns_repo: CampaignRepository, campaign: Campaign) -> Campaign:
    await campaigns_repo.create(campaign)
    return campaign


@pytest.fixture
def openai_config() -> OpenAIConfig:
    return OpenAIConfig(
        endpoint="https://test.openai.azure.com/",
        deployment="gpt-test",
        api_key="",
        timeout_seconds=5.0,
    )
