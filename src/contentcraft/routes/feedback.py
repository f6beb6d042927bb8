"""Feedback routes — rate a generated format and list a campaign's ratings."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from contentcraft.auth.middleware import get_caller
from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.database.repositories.feedback import FeedbackRepository
from contentcraft.models.feedback import Feedback
from contentcraft.services import feedback as feedback_svc
from contentcraft.services.authorization import Caller

router = APIRouter(prefix="/campaigns/{campaign_id}/feedback", tags=["feedback"])

logger = logging.getLogger(__name__)

CallerDep = Annotated[Caller, Depends(get_caller)]


class FeedbackRequest(BaseModel):
    content_format: str
    # Left untyped so the service can reject anything but 1 or -1 itself.
    rating: Any
    version_id: str | None = None


@router.post("/", status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    body: FeedbackRequest,
) -> Feedback:
    """Submit a thumbs up or down for one format of a campaign."""
    cosmos = request.app.state.cosmos
    return await feedback_svc.submit_feedback(
        caller,
        campaign_id,
        body.content_format,
        body.rating,
        CampaignRepository(cosmos.database),
        FeedbackRepository(cosmos.database),
        version_id=body.version_id,
    )


@router.get("/")
async def list_feedback(request: Request, caller: CallerDep, campaign_id: str) -> list[Feedback]:
    cosmos = request.app.state.cosmos
    return await feedback_svc.list_feedback(
        caller,
        campaign_id,
        CampaignRepository(cosmos.database),
        FeedbackRepository(cosmos.database),
    )
