"""Dashboard Route — the signed-in user's campaigns, donations and totals."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.api.deps import get_current_user
from crowdfund.api.routes.campaigns import campaign_summary
from crowdfund.api.routes.donations import donations_for_user
from crowdfund.core.funding_stats import summarize_dashboard
from crowdfund.infrastructure.database import get_db
from crowdfund.models.campaign import Campaign
from crowdfund.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def get_dashboard(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Campaign)
        .where(Campaign.user_id == user.id)
        .order_by(Campaign.created_at.desc(), Campaign.id.desc()),
    )
    campaigns = [campaign_summary(c) for c in result.scalars().all()]
    donations = await donations_for_user(db, user.id)
    return {
        "campaigns": campaigns,
        "donations": donations,
        "stats": summarize_dashboard(campaigns, donations),
    }
