"""Campaign status transition policy."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from contentcraft.errors import InvalidTransitionError
from contentcraft.models.campaign import CampaignStatus

if TYPE_CHECKING:
    from contentcraft.models.campaign import Campaign

logger = logging.getLogger(__name__)


class CampaignEvent(StrEnum):
    BEGIN_GENERATION = "begin_generation"
    DEBATE_SUCCEEDED = "debate_succeeded"
    DEBATE_FAILED = "debate_failed"
    GENERATION_SUCCEEDED = "generation_succeeded"
    GENERATION_FAILED = "generation_failed"
    SCHEDULE_GENERATED = "schedule_generated"
    PUBLISH = "publish"
    ARCHIVE = "archive"
    REACTIVATE = "reactivate"


_ANY = frozenset(CampaignStatus)

# event -> (accepted source states, resulting state)
_TRANSITIONS: dict[CampaignEvent, tuple[frozenset[CampaignStatus], CampaignStatus]] = {
    CampaignEvent.BEGIN_GENERATION: (
        frozenset({CampaignStatus.DRAFT, CampaignStatus.REVIEW}),
        CampaignStatus.DEBATING,
    ),
    CampaignEvent.DEBATE_SUCCEEDED: (
        frozenset({CampaignStatus.DEBATING}),
        CampaignStatus.GENERATING,
    ),
    CampaignEvent.DEBATE_FAILED: (
        frozenset({CampaignStatus.DEBATING}),
        CampaignStatus.DRAFT,
    ),
    CampaignEvent.GENERATION_SUCCEEDED: (
        frozenset({CampaignStatus.GENERATING}),
        CampaignStatus.REVIEW,
    ),
    CampaignEvent.GENERATION_FAILED: (
        frozenset({CampaignStatus.GENERATING}),
        CampaignStatus.DRAFT,
    ),
    CampaignEvent.PUBLISH: (_ANY, CampaignStatus.PUBLISHED),
    CampaignEvent.ARCHIVE: (_ANY, CampaignStatus.ARCHIVED),
    CampaignEvent.REACTIVATE: (_ANY, CampaignStatus.DRAFT),
}


def next_status(current: CampaignStatus, event: CampaignEvent) -> CampaignStatus:
    """Return the status that follows ``event`` from ``current``.

    Re-applying an event whose target is the current status is a no-op.
    Raises ``InvalidTransitionError`` for any combination outside the policy.
    """
    if event == CampaignEvent.SCHEDULE_GENERATED:
        return CampaignStatus.REVIEW if current == CampaignStatus.DRAFT else current

    sources, target = _TRANSITIONS[event]
    if current == target:
        return current
    if current not in sources:
        raise InvalidTransitionError(f"Cannot apply '{event}' to a campaign in status '{current}'")
    return target


def apply_event(campaign: Campaign, event: CampaignEvent) -> CampaignStatus:
    """Advance ``campaign.status`` in place and return the new status."""
    previous = campaign.status
    campaign.status = next_status(previous, event)
    if campaign.status != previous:
        logger.info(
            "Campaign status changed — campaign=%s event=%s from=%s to=%s",
            campaign.id,
            event,
            previous,
            campaign.status,
        )
    return campaign.status
