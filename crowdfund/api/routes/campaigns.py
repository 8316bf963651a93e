"""Campaign Routes — create, browse, detail, update and cancel campaigns.

Invariants:
    - Browsing lists only active campaigns
    - is_owner computed with same_identity (viewer id vs owner id), False for guests
    - Only the owner may update or cancel; cancel is a soft delete (status=cancelled)
    - current_amount is never writable through these routes (FundingLedger only)
"""

import logging
import math
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.api.deps import get_current_user, get_optional_user
from crowdfund.api.routes.donations import donation_view
from crowdfund.core.domain_types import CampaignCategory, CampaignStatus
from crowdfund.core.funding_stats import compute_progress
from crowdfund.core.identity import same_identity
from crowdfund.infrastructure.database import get_db
from crowdfund.models.campaign import Campaign
from crowdfund.models.donation import Donation
from crowdfund.models.user import User
from crowdfund.schemas.campaign import CampaignCreate, CampaignResponse, CampaignUpdate
from crowdfund.services.campaigns import get_campaign_or_404, require_owner

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])

_SORT_COLUMNS = {
    "created_at": Campaign.created_at,
    "goal_amount": Campaign.goal_amount,
    "current_amount": Campaign.current_amount,
    "title": Campaign.title,
}
_RECENT_DONATIONS = 20


def campaign_summary(campaign: Campaign) -> dict:
    """Campaign fields plus funding progress, shared by list/detail/dashboard."""
    return {
        "id": campaign.id,
        "user_id": campaign.user_id,
        "title": campaign.title,
        "description": campaign.description,
        "goal_amount": campaign.goal_amount,
        "current_amount": campaign.current_amount,
        "image_url": campaign.image_url,
        "category": campaign.category,
        "status": campaign.status,
        "created_at": campaign.created_at.isoformat(),
        "updated_at": campaign.updated_at.isoformat(),
        "progress": compute_progress(campaign.current_amount, campaign.goal_amount),
    }


@router.get("")
async def list_campaigns(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, max_length=200),
    category: str | None = Query(None),
    sort: str = Query("created_at"),
    order: str = Query("desc"),
    db: AsyncSession = Depends(get_db),
):
    """List active campaigns with search, category filter, sorting and pagination."""
    filters = [Campaign.status == CampaignStatus.ACTIVE.value]
    if search:
        pattern = f"%{search}%"
        filters.append(or_(Campaign.title.ilike(pattern), Campaign.description.ilike(pattern)))
    if category and category != "all":
        filters.append(Campaign.category == category)

    column = _SORT_COLUMNS.get(sort, Campaign.created_at)
    ordering = column.asc() if order == "asc" else column.desc()

    query = (
        select(Campaign)
        .where(*filters)
        .order_by(ordering, Campaign.id.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    campaigns = (await db.execute(query)).scalars().all()
    total = (
        await db.execute(select(func.count(Campaign.id)).where(*filters))
    ).scalar_one()

    return {
        "campaigns": [
            {**campaign_summary(c), "creator_name": c.owner.display_name}
            for c in campaigns
        ],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit),
        },
    }


@router.post(
    "", response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_campaign(
    body: CampaignCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a campaign owned by the caller."""
    campaign = Campaign(
        user_id=user.id,
        title=body.title,
        description=body.description,
        goal_amount=body.goal_amount,
        image_url=body.image_url,
        category=body.category.value,
        status=CampaignStatus.ACTIVE.value,
    )
    db.add(campaign)
    await db.commit()
    await db.refresh(campaign)
    logger.info("Campaign created", extra={"campaign_id": campaign.id, "user_id": user.id})
    return campaign


@router.get("/categories")
async def list_categories():
    return {"categories": [c.value for c in CampaignCategory]}


@router.get("/{campaign_id}")
async def get_campaign(
    campaign_id: int,
    viewer: User | None = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db),
):
    """Campaign detail with owner flag and recent donations."""
    campaign = await get_campaign_or_404(db, campaign_id)
    result = await db.execute(
        select(Donation)
        .where(Donation.campaign_id == campaign_id)
        .order_by(Donation.created_at.desc(), Donation.id.desc())
        .limit(_RECENT_DONATIONS),
    )
    return {
        **campaign_summary(campaign),
        "creator_name": campaign.owner.display_name,
        "creator_avatar": campaign.owner.avatar_url,
        "is_owner": same_identity(viewer.id if viewer else None, campaign.user_id),
        "donations": [donation_view(d) for d in result.scalars().all()],
    }


@router.put("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: int,
    body: CampaignUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Owner-only partial update."""
    campaign = await get_campaign_or_404(db, campaign_id)
    require_owner(campaign, user.id)
    for field, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        if isinstance(value, (CampaignCategory, CampaignStatus)):
            value = value.value
        setattr(campaign, field, value)
    campaign.updated_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(campaign)
    return campaign


@router.delete("/{campaign_id}")
async def cancel_campaign(
    campaign_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Owner-only soft delete."""
    campaign = await get_campaign_or_404(db, campaign_id)
    require_owner(campaign, user.id)
    campaign.status = CampaignStatus.CANCELLED.value
    campaign.updated_at = datetime.now(timezone.utc)
    await db.commit()
    logger.info("Campaign cancelled", extra={"campaign_id": campaign_id})
    return {"message": "Campaign cancelled"}
