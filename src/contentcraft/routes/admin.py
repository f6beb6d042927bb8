"""Admin routes — moderation, platform-wide campaign views, users and stats."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel

from contentcraft.agents.schemas import FlagReviewOutput, QualityAuditOutput
from contentcraft.auth.middleware import get_caller
from contentcraft.database.repositories.campaigns import CampaignRepository
from contentcraft.database.repositories.feedback import FeedbackRepository
from contentcraft.database.repositories.users import UserRepository
from contentcraft.models.campaign import Campaign
from contentcraft.models.user import User
from contentcraft.services import assessments as assessment_svc
from contentcraft.services import campaigns as campaign_svc
from contentcraft.services import moderation as moderation_svc
from contentcraft.services import users as user_svc
from contentcraft.services.authorization import Caller
from contentcraft.services.moderation import FlaggedVersion
from contentcraft.services.stats import PlatformStats, collect_stats

router = APIRouter(prefix="/admin", tags=["admin"])

CallerDep = Annotated[Caller, Depends(get_caller)]


class FlagRequest(BaseModel):
    # Left untyped so non-boolean values reach the moderation check.
    is_flagged: Any
    admin_moderation_notes: str | None = None


class ReviewRequest(BaseModel):
    content_format: str | None = None


class UserUpdate(BaseModel):
    role: str | None = None
    is_banned: bool | None = None


def _notes(body: FlagRequest) -> str | None:
    # An explicit null is treated the same as leaving notes out.
    if "admin_moderation_notes" not in body.model_fields_set:
        return None
    return body.admin_moderation_notes


@router.get("/campaigns")
async def list_all_campaigns(request: Request, caller: CallerDep) -> list[Campaign]:
    """List every campaign on the platform, most recently updated first."""
    repo = CampaignRepository(request.app.state.cosmos.database)
    return await campaign_svc.list_all_campaigns(caller, repo)


@router.delete("/campaigns/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(request: Request, caller: CallerDep, campaign_id: str) -> None:
    cosmos = request.app.state.cosmos
    await campaign_svc.delete_campaign(
        caller,
        campaign_id,
        CampaignRepository(cosmos.database),
        FeedbackRepository(cosmos.database),
    )


@router.put("/campaigns/{campaign_id}/flag")
async def flag_campaign(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    body: FlagRequest,
) -> Campaign:
    return await moderation_svc.flag_campaign(
        caller,
        campaign_id,
        body.is_flagged,
        CampaignRepository(request.app.state.cosmos.database),
        notes=_notes(body),
    )


@router.put("/campaigns/{campaign_id}/versions/{version_id}/flag")
async def flag_version(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    version_id: str,
    body: FlagRequest,
) -> Campaign:
    return await moderation_svc.flag_version(
        caller,
        campaign_id,
        version_id,
        body.is_flagged,
        CampaignRepository(request.app.state.cosmos.database),
        notes=_notes(body),
    )


@router.post("/campaigns/{campaign_id}/versions/{version_id}/review")
async def review_flagged_version(
    request: Request,
    caller: CallerDep,
    campaign_id: str,
    version_id: str,
    body: ReviewRequest | None = None,
) -> FlagReviewOutput:
    return await assessment_svc.review_flagged_version(
        caller,
        campaign_id,
        version_id,
        CampaignRepository(request.app.state.cosmos.database),
        request.app.state.completion,
        content_format=body.content_format if body else None,
    )


@router.post("/campaigns/{campaign_id}/quality-audit")
async def audit_campaign_quality(
    request: Request, caller: CallerDep, campaign_id: str
) -> QualityAuditOutput:
    return await assessment_svc.audit_campaign_quality(
        caller,
        campaign_id,
        CampaignRepository(request.app.state.cosmos.database),
        request.app.state.completion,
    )


@router.get("/flagged-versions")
async def list_flagged_versions(request: Request, caller: CallerDep) -> list[FlaggedVersion]:
    """Every flagged content version, newest first."""
    repo = CampaignRepository(request.app.state.cosmos.database)
    return await moderation_svc.list_flagged_versions(caller, repo)


@router.get("/users")
async def list_users(request: Request, caller: CallerDep) -> list[User]:
    return await user_svc.list_users(caller, UserRepository(request.app.state.cosmos.database))


@router.patch("/users/{user_id}")
async def update_user(
    request: Request,
    caller: CallerDep,
    user_id: str,
    body: UserUpdate,
) -> User:
    return await user_svc.update_user(
        caller,
        user_id,
        UserRepository(request.app.state.cosmos.database),
        role=body.role,
        is_banned=body.is_banned,
    )


@router.get("/stats")
async def stats(request: Request, caller: CallerDep) -> PlatformStats:
    """Aggregate counts for the admin dashboard."""
    cosmos = request.app.state.cosmos
    return await collect_stats(
        caller,
        CampaignRepository(cosmos.database),
        FeedbackRepository(cosmos.database),
        UserRepository(cosmos.database),
    )
