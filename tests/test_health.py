"""Tests for the emulator pre-flight check."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from contentcraft.health import check_emulators


def _settings(endpoint: str) -> SimpleNamespace:
    return SimpleNamespace(cosmos=SimpleNamespace(endpoint=endpoint))


def _client(get: AsyncMock) -> MagicMock:
    client = MagicMock()
    client.get = get
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.mark.unit
async def test_missing_endpoint_fails():
    assert await check_emulators(_settings("")) is False


@pytest.mark.unit
async def test_https_endpoint_is_not_checked():
    with patch("contentcraft.health.httpx.AsyncClient") as MockClient:
        assert await check_emulators(_settings("https://prod.documents.azure.com")) is True
    MockClient.assert_not_called()


@pytest.mark.unit
async def test_reachable_emulator():
    get = AsyncMock(return_value=MagicMock())
    with patch("contentcraft.health.httpx.AsyncClient", return_value=_client(get)):
        assert await check_emulators(_settings("http://localhost:8081")) is True
    get.assert_awaited_once_with("http://localhost:8081/")


@pytest.mark.unit
async def test_unreachable_emulator():
    get = AsyncMock(side_effect=httpx.ConnectError("refused"))
    with patch("contentcraft.health.httpx.AsyncClient", return_value=_client(get)):
        assert await check_emulators(_settings("http://localhost:8081")) is False
