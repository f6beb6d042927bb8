"""Content version ledger — append-only snapshots per campaign."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from contentcraft.errors import NotFoundError, ValidationError
from contentcraft.models.campaign import ContentVersion
from contentcraft.services.authorization import Action, authorize

if TYPE_CHECKING:
    from contentcraft.database.repositories.campaigns import CampaignRepository
    from contentcraft.models.campaign import Campaign
    from contentcraft.services.authorization import Caller

logger = logging.getLogger(__name__)

USER_EDIT_ACTOR = "User Edit"


def validate_snapshot(snapshot: object) -> dict[str, str]:
    """Check that ``snapshot`` maps format names to text and return a copy."""
    if not isinstance(snapshot, Mapping):
        raise ValidationError("Content snapshot must map format names to text")
    if not snapshot:
        raise ValidationError("Content snapshot must contain at least one format")
    invalid = sorted(
        str(key)
        for key, value in snapshot.items()
        if not isinstance(key, str) or not isinstance(value, str)
    )
    if invalid:
        raise ValidationError(f"Content snapshot values must be text: {', '.join(invalid)}")
    return dict(snapshot)


def append_version(
    campaign: Campaign,
    actor_name: str,
    change_summary: str,
    snapshot: object,
    *,
    base_version_id: str | None = None,
) -> ContentVersion:
    """Append a new version to ``campaign`` and return it.

    Without ``base_version_id`` the snapshot is stored as a full, independent
    snapshot. With it, the snapshot is a fragment overlaid on the base
    version's formats. Earlier versions are never modified.
    """
    fragment = validate_snapshot(snapshot)
    if base_version_id is not None:
        base = campaign.find_version(base_version_id)
        if base is None:
            raise NotFoundError(f"Content version {base_version_id} not found")
        content = {**base.content_snapshot, **fragment}
    else:
        content = fragment

    number = max((v.version_number for v in campaign.content_versions), default=0) + 1
    version = ContentVersion(
        version_number=number,
        actor_name=actor_name,
        change_summary=change_summary,
        content_snapshot=content,
    )
    campaign.content_versions.append(version)
    return version


class VersionHistory:
    """Restartable view of a campaign's versions in ascending number order."""

    def __init__(self, versions: list[ContentVersion]) -> None:
        self._versions = versions

    def __iter__(self) -> Iterator[ContentVersion]:
        yield from sorted(self._versions, key=lambda v: v.version_number)

    def __len__(self) -> int:
        return len(self._versions)


def list_versions(campaign: Campaign) -> VersionHistory:
    return VersionHistory(campaign.content_versions)


async def record_version(
    caller: Caller,
    campaign_id: str,
    actor_name: str,
    change_summary: str,
    snapshot: object,
    campaigns_repo: CampaignRepository,
    *,
    base_version_id: str | None = None,
) -> tuple[Campaign, ContentVersion]:
    """Authorize and persist a new version with a compare-and-swap write.

    Returns the stored campaign and the version appended on the attempt that
    won the write.
    """
    appended: list[ContentVersion] = []

    def _apply(campaign: Campaign) -> None:
        authorize(caller, campaign, Action.EDIT)
        appended.append(
            append_version(
                campaign,
                actor_name,
                change_summary,
                snapshot,
                base_version_id=base_version_id,
            )
        )

    campaign = await campaigns_repo.mutate(campaign_id, _apply)
    version = appended[-1]
    logger.info(
        "Content version appended — campaign=%s version=%d actor=%s",
        campaign_id,
        version.version_number,
        actor_name,
    )
    return campaign, version


async def save_user_edit(
    caller: Caller,
    campaign_id: str,
    fragment: object,
    campaigns_repo: CampaignRepository,
    *,
    change_summary: str = "Manual edit",
) -> Campaign:
    """Append a user-authored version merged onto the latest version."""

    def _apply(campaign: Campaign) -> None:
        authorize(caller, campaign, Action.EDIT)
        latest = campaign.latest_version()
        append_version(
            campaign,
            USER_EDIT_ACTOR,
            change_summary,
            fragment,
            base_version_id=latest.id if latest else None,
        )

    return await campaigns_repo.mutate(campaign_id, _apply)
