"""Campaign Schemas — create/update payloads and list/detail responses.

Invariants:
    - goal_amount > 0 with at most 2 decimal places
    - category restricted to CampaignCategory; status updates to CampaignStatus
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from crowdfund.core.domain_types import CampaignCategory, CampaignStatus
from crowdfund.schemas.money import Money


class CampaignCreate(BaseModel):
    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=10, max_length=10_000)
    goal_amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    image_url: str | None = Field(None, max_length=500)
    category: CampaignCategory

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v


class CampaignUpdate(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=200)
    description: str | None = Field(None, min_length=10, max_length=10_000)
    goal_amount: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    image_url: str | None = Field(None, max_length=500)
    category: CampaignCategory | None = None
    status: CampaignStatus | None = None


class CampaignResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str
    goal_amount: Money
    current_amount: Money
    image_url: str | None = None
    category: str
    status: str
    created_at: datetime
    updated_at: datetime

