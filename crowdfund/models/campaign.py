"""Campaign ORM — a fundraising goal owned by one user.

Invariants:
    - goal_amount > 0, current_amount >= 0
    - current_amount equals the sum of its donations; only FundingLedger changes it
    - status in active | completed | cancelled (cancel is a soft delete)

Design Decisions:
    - Numeric(12, 2) for money: exact decimal arithmetic in the aggregate UPDATE
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Integer, Numeric, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crowdfund.db.base import Base


class Campaign(Base):
    """Fundraising campaign."""
    __tablename__ = "campaigns"
    __table_args__ = (
        CheckConstraint("goal_amount > 0", name="ck_campaigns_goal_positive"),
        CheckConstraint("current_amount >= 0", name="ck_campaigns_current_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    goal_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    current_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0"),
    )
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active", index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    owner: Mapped["User"] = relationship(
        "User", back_populates="campaigns", lazy="selectin",
    )
    donations: Mapped[list["Donation"]] = relationship(
        "Donation", back_populates="campaign",
    )
