"""Donation Schemas — donation submission and ledger views.

Invariants:
    - amount sign is not constrained here: donation_policy rejects it with
      INVALID_DONATION_AMOUNT instead of a generic validation error
    - donor_name only meaningful for guests; ignored for authenticated donors
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from crowdfund.schemas.money import Money


class DonationCreate(BaseModel):
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    message: str | None = Field(None, max_length=1000)
    is_anonymous: bool = False
    donor_name: str | None = Field(None, max_length=100)


class DonationCreated(BaseModel):
    id: int
    message: str = "Donation successful"
    amount: Money


class DonationView(BaseModel):
    """Donation as shown on a campaign page; anonymous donors are masked."""
    id: int
    amount: Money
    message: str | None = None
    is_anonymous: bool
    donor_display_name: str
    created_at: datetime


class MyDonationView(BaseModel):
    id: int
    campaign_id: int
    campaign_title: str
    campaign_image: str | None = None
    amount: Money
    message: str | None = None
    is_anonymous: bool
    created_at: datetime
