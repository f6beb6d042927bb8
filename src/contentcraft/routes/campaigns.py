"""Campaign routes — CRUD, status changes, content versions and generation steps."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from contentcraft.auth.middleware import get_caller
from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.database.repositories.feedback import FeedbackRepository
from contentcraft.models.campaign import Campaign, ContentVersion, ReferenceMaterial
from contentcraft.services import campaigns as campaign_svc
from contentcraft.services import generation as generation_svc
from contentcraft.services import versions as version_svc
from contentcraft.services.authorization import Caller
from contentcraft.services.lifecycle import CampaignEvent

router = APIRouter(prefix="/campaigns", tags=["campaigns"])

logger = logging.getLogger(__name__)

CallerDep = Annotated[Caller, Depends(get_caller)]


class CampaignCreate(BaseModel):
    title: str
    brief: str
    target_audience: str | None = None
    tone: str | None = None
    content_goals: list[str] = Field(default_factory=list)
    reference_materials: list[ReferenceMaterial] = Field(default_factory=list)
    is_private: bool = False


class CampaignUpdate(BaseModel):
    title: str | None = None
    brief: str | None = None
    target_audience: str | None = None
    tone: str | None = None
    content_goals: list[str] | None = None
    reference_materials: list[ReferenceMaterial] | None = None
    is_private: bool | None = None


class StatusChange(BaseModel):
    event: CampaignEvent


class ContentEdit(BaseModel):
    content: dict[str, str]
    change_summary: str = "Manual edit"


class BrandAnalysisRequest(BaseModel):
    sample_content: str
    brand_name: str | None = None


def _campaigns(request: Request) -> CampaignRepository:
    return CampaignRepository(request.app.state.cosmos.database)


@router.get("/")
async def list_campaigns(request: Request, caller: CallerDep) -> list[Campaign]:
    """List the caller's campaigns, newest first."""
    return await campaign_svc.list_campaigns(caller, _campaigns(request))


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_campaign(request: Request, caller: CallerDep, body: CampaignCreate) -> Campaign:
    return await campaign_svc.create_campaign(
        caller,
        _campaigns(request),
        title=body.title,
        brief=body.brief,
        target_audience=body.target_audience,
        tone=body.tone,
        content_goals=body.content_goals,
        reference_materials=body.reference_materials,
        is_private=body.is_private,
    )


@router.get("/{campaign_id}")
async def get_campaign(request: Request, caller: CallerDep, campaign_id: str) -> Campaign:
    return await campaign_svc.get_campaign(caller, campaign_id, _campaigns(request))


@router.patch("/{campaign_id}")
async def update_campaign(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    body: CampaignUpdate,
) -> Campaign:
    """Edit campaign fields. Only fields present in the body are changed."""
    changes = {field: getattr(body, field) for field in body.model_fields_set}
    return await campaign_svc.update_campaign(caller, campaign_id, changes, _campaigns(request))


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(request: Request, caller: CallerDep, campaign_id: str) -> None:
    """Delete a campaign together with its feedback."""
    cosmos = request.app.state.cosmos
    await campaign_svc.delete_campaign(
        caller,
        campaign_id,
        CampaignRepository(cosmos.database),
        FeedbackRepository(cosmos.database),
    )


@router.post("/{campaign_id}/status")
async def change_status(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    body: StatusChange,
) -> Campaign:
    """Publish, archive or reactivate a campaign."""
    return await campaign_svc.change_status(caller, campaign_id, body.event, _campaigns(request))


@router.get("/{campaign_id}/versions")
async def list_versions(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
) -> list[ContentVersion]:
    """Return the content history, oldest version first."""
    campaign = await campaign_svc.get_campaign(caller, campaign_id, _campaigns(request))
    return list(version_svc.list_versions(campaign))


@router.post("/{campaign_id}/versions", status_code=status.HTTP_201_CREATED)
async def save_content(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    body: ContentEdit,
) -> Campaign:
    """Save a manual edit as a new version merged onto the latest one."""
    return await version_svc.save_user_edit(
        caller,
        campaign_id,
        body.content,
        _campaigns(request),
        change_summary=body.change_summary,
    )


@router.post("/{campaign_id}/debate")
async def run_debate(request: Request, caller: CallerDep, campaign_id: str) -> Campaign:
    return await generation_svc.run_debate(
        caller, campaign_id, _campaigns(request), request.app.state.completion
    )


@router.post("/{campaign_id}/generate")
async def generate_content(request: Request, caller: CallerDep, campaign_id: str) -> Campaign:
    return await generation_svc.generate_content(
        caller, campaign_id, _campaigns(request), request.app.state.completion
    )


@router.post("/{campaign_id}/run")
async def run_campaign(request: Request, caller: CallerDep, campaign_id: str) -> Campaign:
    """Run the debate and content generation back to back."""
    logger.info("Campaign run requested — campaign=%s by=%s", campaign_id, caller.user_id)
    return await generation_svc.run_campaign(
        caller, campaign_id, _campaigns(request), request.app.state.completion
    )


@router.post("/{campaign_id}/schedule")
async def generate_schedule(request: Request, caller: CallerDep, campaign_id: str) -> Campaign:
    return await generation_svc.generate_schedule(
        caller, campaign_id, _campaigns(request), request.app.state.completion
    )


@router.post("/{campaign_id}/brand-profile")
async def analyze_brand(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    body: BrandAnalysisRequest,
) -> Campaign:
    return await generation_svc.analyze_brand(
        caller,
        campaign_id,
        body.sample_content,
        _campaigns(request),
        request.app.state.completion,
        brand_name=body.brand_name,
    )
