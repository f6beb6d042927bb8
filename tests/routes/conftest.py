"""Fixtures for exercising the HTTP surface against in-memory storage."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from contentcraft.app import create_app
from contentcraft.auth.middleware import get_caller
from contentcraft.config import AppConfig, Settings
from contentcraft.services.authorization import Caller


@pytest.fixture
def app(fake_database: MagicMock) -> FastAPI:
    application = create_app(
        Settings(app=AppConfig(env="development", secret_key="test-secret", log_level="INFO"))
    )
    application.state.cosmos = SimpleNamespace(database=fake_database)
    application.state.completion = MagicMock()
    application.state.completion.complete = AsyncMock()
    return application


@pytest.fixture
def client_for(app: FastAPI):
    """Return a factory producing a TestClient authenticated as ``caller``."""

    def _client(caller: Caller | None) -> TestClient:
        app.dependency_overrides.clear()
        if caller is not None:
            app.dependency_overrides[get_caller] = lambda: caller
        return TestClient(app)

    return _client
