"""Funding Ledger — records a donation and bumps the campaign aggregate atomically.

Invariants:
    - Donation INSERT and current_amount UPDATE share one transaction on one session:
      both commit or both roll back
    - The aggregate is incremented in SQL (current_amount = current_amount + :amount),
      never read-modify-written in Python, so concurrent donors serialize on the row
    - Only campaigns.current_amount is touched
    - The UPDATE runs before the INSERT: a campaign that vanished since the caller's
      check matches no row and surfaces as ResourceNotFoundError, before any
      foreign key is exercised
    - No internal retry; store failures surface as DatabaseError after rollback

Design Decisions:
    - Campaign existence/status and guest-name policy are checked by the caller
      (services/campaigns.py, core/donation_policy.py); the ledger only refuses
      amounts that are non-positive or finer than a cent so the aggregate cannot
      be corrupted
    - synchronize_session=False: the ledger never reads the campaign back, callers
      that need the new total re-query it
"""

import logging
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.core.domain_types import CampaignId, DonationId, UserId
from crowdfund.core.donation_policy import ensure_positive_amount
from crowdfund.core.errors import DatabaseError, ErrorContext, ResourceNotFoundError
from crowdfund.models.campaign import Campaign
from crowdfund.models.donation import Donation

logger = logging.getLogger(__name__)


class FundingLedger:
    """Append-only donation ledger bound to one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def record(
        self,
        campaign_id: CampaignId,
        donor_user_id: UserId | None,
        amount: Decimal | int | float | str,
        message: str | None,
        is_anonymous: bool,
        guest_donor_name: str | None,
    ) -> DonationId:
        """Insert the donation and increment the aggregate; return the donation id."""
        value = ensure_positive_amount(amount)
        donation = Donation(
            campaign_id=campaign_id,
            user_id=donor_user_id,
            amount=value,
            message=message or None,
            is_anonymous=bool(is_anonymous),
            donor_name=guest_donor_name or None,
        )
        try:
            result = await self._db.execute(
                update(Campaign)
                .where(Campaign.id == campaign_id)
                .values(current_amount=Campaign.current_amount + value)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount != 1:
                await self._db.rollback()
                raise ResourceNotFoundError("Campaign", str(campaign_id))
            self._db.add(donation)
            await self._db.flush()
            donation_id = DonationId(donation.id)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Donation write rolled back: {e}",
                extra={"campaign_id": campaign_id, "error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError(
                "Donation was not recorded", "commit",
                ErrorContext(campaign_id=campaign_id),
            )

        logger.info(
            f"Donation recorded: {value}",
            extra={"campaign_id": campaign_id, "donation_id": donation_id},
        )
        return donation_id
