"""Campaign memory route — insights for a new brief from past campaigns."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from contentcraft.agents.schemas import CampaignMemoryOutput
from contentcraft.auth.middleware import get_caller
from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.services import assessments as assessment_svc
from contentcraft.services.authorization import Caller

router = APIRouter(prefix="/memory", tags=["memory"])

CallerDep = Annotated[Caller, Depends(get_caller)]


class RecallRequest(BaseModel):
    current_campaign_brief: str
    user_id: str | None = None


@router.post("/recall")
async def recall(request: Request, caller: CallerDep, body: RecallRequest) -> CampaignMemoryOutput:
    return await assessment_svc.recall_campaign_memory(
        caller,
        body.current_campaign_brief,
        CampaignRepository(request.app.state.cosmos.database),
        request.app.state.completion,
        user_id=body.user_id,
    )
