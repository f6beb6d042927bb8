"""Content tool routes — revise, translate, optimize and brand-audit a single format."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from contentcraft.agents.schemas import BrandAuditOutput
from contentcraft.auth.middleware import get_caller
from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.services import assessments as assessment_svc
from contentcraft.services import generation as generation_svc
from contentcraft.services.authorization import Caller
from contentcraft.services.generation import ToolResult

router = APIRouter(prefix="/campaigns/{campaign_id}/content/{content_format}", tags=["content"])

CallerDep = Annotated[Caller, Depends(get_caller)]


class ReviseRequest(BaseModel):
    revision_instructions: str
    source_version_id: str | None = None
    target_audience: str | None = None
    desired_tone: str | None = None


class TranslateRequest(BaseModel):
    target_language: str
    source_version_id: str | None = None
    original_language: str | None = None
    tone_description: str | None = None


class OptimizeRequest(BaseModel):
    optimization_goal: str
    source_version_id: str | None = None


class BrandAuditRequest(BaseModel):
    source_version_id: str | None = None


@router.post("/revise")
async def revise(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    content_format: str,
    body: ReviseRequest,
) -> ToolResult:
    return await generation_svc.revise_format(
        caller,
        campaign_id,
        content_format,
        body.revision_instructions,
        CampaignRepository(request.app.state.cosmos.database),
        request.app.state.completion,
        source_version_id=body.source_version_id,
        target_audience=body.target_audience,
        desired_tone=body.desired_tone,
    )


@router.post("/translate")
async def translate(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    content_format: str,
    body: TranslateRequest,
) -> ToolResult:
    return await generation_svc.translate_format(
        caller,
        campaign_id,
        content_format,
        body.target_language,
        CampaignRepository(request.app.state.cosmos.database),
        request.app.state.completion,
        source_version_id=body.source_version_id,
        original_language=body.original_language,
        tone_description=body.tone_description,
    )


@router.post("/optimize")
async def optimize(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    content_format: str,
    body: OptimizeRequest,
) -> ToolResult:
    return await generation_svc.optimize_format(
        caller,
        campaign_id,
        content_format,
        body.optimization_goal,
        CampaignRepository(request.app.state.cosmos.database),
        request.app.state.completion,
        source_version_id=body.source_version_id,
    )


@router.post("/brand-audit")
async def brand_audit(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    content_format: str,
    body: BrandAuditRequest,
) -> BrandAuditOutput:
    """Score the format against the campaign's brand profile. Nothing is stored."""
    return await assessment_svc.audit_brand(
        caller,
        campaign_id,
        content_format,
        CampaignRepository(request.app.state.cosmos.database),
        request.app.state.completion,
        source_version_id=body.source_version_id,
    )
