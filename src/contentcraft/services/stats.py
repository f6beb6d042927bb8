"""Platform statistics for the admin dashboard."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from pydantic import BaseModel

from contentcraft.services.authorization import Action, authorize

if TYPE_CHECKING:
    from contentcraft.database.repositories.campaigns import CampaignRepository
    from contentcraft.database.repositories.feedback import FeedbackRepository
    from contentcraft.database.repositories.users import UserRepository
    from contentcraft.services.authorization import Caller


class PlatformStats(BaseModel):
    campaigns_by_status: dict[str, int]
    total_campaigns: int
    total_versions: int
    flagged_campaigns: int
    flagged_versions: int
    positive_feedback: int
    negative_feedback: int
    users_by_role: dict[str, int]


async def collect_stats(
    caller: Caller,
    campaigns_repo: CampaignRepository,
    feedback_repo: FeedbackRepository,
    users_repo: UserRepository,
) -> PlatformStats:
    authorize(caller, None, Action.ADMINISTER)
    by_status, versions, flagged, flagged_campaigns, ratings, by_role = await asyncio.gather(
        campaigns_repo.count_by_status(),
        campaigns_repo.count_versions(),
        campaigns_repo.count_flagged(),
        campaigns_repo.list_with_flagged_versions(),
        feedback_repo.count_by_rating(),
        users_repo.count_by_role(),
    )
    return PlatformStats(
        campaigns_by_status=by_status,
        total_campaigns=sum(by_status.values()),
        total_versions=versions,
        flagged_campaigns=flagged,
        flagged_versions=sum(
            1 for c in flagged_campaigns for v in c.content_versions if v.is_flagged
        ),
        positive_feedback=ratings.get(1, 0),
        negative_feedback=ratings.get(-1, 0),
        users_by_role=by_role,
    )
