"""Pre-flight health checks for local emulator dependencies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlparse

import httpx

if TYPE_CHECKING:
    from contentcraft.config import Settings

logger = logging.getLogger(__name__)


async def check_emulators(settings: Settings) -> bool:
    """Verify the local Cosmos DB emulator is reachable. Return False if not."""
    failures: list[str] = []
    cosmos_url = settings.cosmos.endpoint
    if not cosmos_url:
        failures.append("COSMOS_ENDPOINT is not set — add it to .env")
    elif not cosmos_url.startswith("https://"):
        async with httpx.AsyncClient(timeout=3) as client:
            try:
                await client.get(f"{cosmos_url.rstrip('/')}/")
            except httpx.ConnectError:
                parsed = urlparse(cosmos_url)
                failures.append(f"Cosmos DB emulator is not running at {parsed.netloc}")

    if failures:
        for failure in failures:
            logger.error(failure)
        logger.error("Start the emulator with: docker compose up -d")
        return False
    return True
