"""Donation Routes — submit a donation and read ledger entries.

Invariants:
    - Checks run in order: amount > 0, campaign exists, campaign active, guest name
    - The ledger write (donation + aggregate) is delegated to FundingLedger
    - Anonymous donations never expose the donor's name on public listings
"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.api.deps import get_current_user, get_optional_user
from crowdfund.core.domain_types import CampaignId, UserId
from crowdfund.core.donation_policy import ensure_positive_amount, resolve_donor_name
from crowdfund.core.repository_protocols import CampaignLookup
from crowdfund.infrastructure.database import get_db
from crowdfund.models.campaign import Campaign
from crowdfund.models.donation import Donation
from crowdfund.models.user import User
from crowdfund.schemas.donation import (
    DonationCreate, DonationCreated, DonationView, MyDonationView,
)
from crowdfund.services.campaigns import SqlCampaignLookup, get_campaign_or_404
from crowdfund.services.funding_ledger import FundingLedger

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["donations"])

ANONYMOUS_DONOR = "Anonymous"
GUEST_DONOR = "Guest"


def donation_view(donation: Donation) -> dict:
    """Public representation of a donation row."""
    if donation.is_anonymous:
        name = ANONYMOUS_DONOR
    elif donation.donor is not None:
        name = donation.donor.display_name
    else:
        name = donation.donor_name or GUEST_DONOR
    return DonationView(
        id=donation.id,
        amount=donation.amount,
        message=donation.message,
        is_anonymous=donation.is_anonymous,
        donor_display_name=name,
        created_at=donation.created_at,
    ).model_dump(mode="json")


@router.post(
    "/campaigns/{campaign_id}/donations", response_model=DonationCreated,
    status_code=status.HTTP_201_CREATED,
)
async def create_donation(
    campaign_id: int,
    body: DonationCreate,
    donor: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Record a donation from a signed-in user or a named guest."""
    amount = ensure_positive_amount(body.amount)
    campaigns: CampaignLookup = SqlCampaignLookup(db)
    await campaigns.require_active(CampaignId(campaign_id))
    donor_id = UserId(donor.id) if donor else None
    guest_name = resolve_donor_name(donor_id, body.donor_name)

    donation_id = await FundingLedger(db).record(
        CampaignId(campaign_id),
        donor_id,
        amount,
        body.message,
        body.is_anonymous,
        guest_name,
    )
    return DonationCreated(id=donation_id, amount=amount)


@router.get("/campaigns/{campaign_id}/donations")
async def list_campaign_donations(
    campaign_id: int, db: AsyncSession = Depends(get_db),
):
    """All donations to a campaign, newest first."""
    await get_campaign_or_404(db, campaign_id)
    result = await db.execute(
        select(Donation)
        .where(Donation.campaign_id == campaign_id)
        .order_by(Donation.created_at.desc(), Donation.id.desc()),
    )
    return [donation_view(d) for d in result.scalars().all()]


async def donations_for_user(db: AsyncSession, user_id: int) -> list[dict]:
    """A user's donations joined with their campaign's title and image."""
    result = await db.execute(
        select(Donation, Campaign.title, Campaign.image_url)
        .join(Campaign, Donation.campaign_id == Campaign.id)
        .where(Donation.user_id == user_id)
        .order_by(Donation.created_at.desc(), Donation.id.desc()),
    )
    return [
        MyDonationView(
            id=donation.id,
            campaign_id=donation.campaign_id,
            campaign_title=title,
            campaign_image=image_url,
            amount=donation.amount,
            message=donation.message,
            is_anonymous=donation.is_anonymous,
            created_at=donation.created_at,
        ).model_dump(mode="json")
        for donation, title, image_url in result.all()
    ]


@router.get("/donations/mine")
async def my_donations(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await donations_for_user(db, user.id)
