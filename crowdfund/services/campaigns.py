"""Campaign Lookup — existence and status checks consulted before ledger writes.

Invariants:
    - Unknown campaign -> ResourceNotFoundError (404)
    - Non-active campaign -> CampaignNotActiveError (400)
    - Ownership compared through same_identity, never with ==
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.core.domain_types import CampaignId, CampaignStatus
from crowdfund.core.errors import (
    CampaignNotActiveError, PermissionDeniedError, ResourceNotFoundError,
)
from crowdfund.core.identity import same_identity
from crowdfund.models.campaign import Campaign


async def get_campaign_or_404(db: AsyncSession, campaign_id: int) -> Campaign:
    result = await db.execute(select(Campaign).where(Campaign.id == campaign_id))
    campaign = result.scalar_one_or_none()
    if not campaign:
        raise ResourceNotFoundError("Campaign", str(campaign_id))
    return campaign


async def require_active_campaign(db: AsyncSession, campaign_id: int) -> Campaign:
    campaign = await get_campaign_or_404(db, campaign_id)
    if campaign.status != CampaignStatus.ACTIVE.value:
        raise CampaignNotActiveError(campaign_id, campaign.status)
    return campaign


def require_owner(campaign: Campaign, viewer_id: object) -> None:
    """Raise PermissionDeniedError unless viewer_id owns the campaign."""
    if not same_identity(viewer_id, campaign.user_id):
        raise PermissionDeniedError("Only the campaign owner can modify it")


class SqlCampaignLookup:
    """CampaignLookup backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def require_active(self, campaign_id: CampaignId) -> Campaign:
        return await require_active_campaign(self._db, campaign_id)
