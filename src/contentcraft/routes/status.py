"""Status route — liveness plus a Cosmos DB reachability check."""

from __future__ import annotations

import logging

from azure.cosmos.exceptions import CosmosHttpResponseError
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["status"])

logger = logging.getLogger(__name__)


@router.get("/healthz")
async def healthz(request: Request) -> JSONResponse:
    """Report healthy when the database answers a metadata read."""
    cosmos = request.app.state.cosmos
    try:
        await cosmos.database.read()
    except (CosmosHttpResponseError, RuntimeError, OSError) as exc:
        logger.warning("Health check failed — cosmos error=%s", type(exc).__name__)
        return JSONResponse({"status": "unhealthy", "cosmos": "unreachable"}, status_code=503)
    return JSONResponse({"status": "ok", "cosmos": "ok"})
