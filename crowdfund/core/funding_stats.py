"""Funding Stats — pure progress and dashboard summaries over campaign/donation rows.

Invariants:
    - Progress percentage is capped at 100 even when over-funded
    - Inputs are plain mappings (ORM rows converted by the caller); no IO
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal

from crowdfund.core.domain_types import CampaignStatus


def compute_progress(current_amount: Decimal, goal_amount: Decimal) -> dict:
    """Percentage funded (0-100), over-funded flag and excess over goal."""
    current = _to_decimal(current_amount)
    goal = _to_decimal(goal_amount)
    if goal <= 0:
        percentage = Decimal(100)
    else:
        percentage = min(current / goal * 100, Decimal(100))
    over_funded = current > goal
    return {
        "percentage": float(round(percentage, 2)),
        "is_over_funded": over_funded,
        "amount_over_goal": current - goal if over_funded else Decimal(0),
    }


def summarize_dashboard(
    campaigns: Iterable[Mapping], donations: Iterable[Mapping],
) -> dict:
    """Totals and per-status counts for a user's dashboard."""
    campaigns = list(campaigns)
    donations = list(donations)

    def count(status: CampaignStatus) -> int:
        return sum(1 for c in campaigns if c.get("status") == status.value)

    return {
        "total_raised": sum((_to_decimal(c.get("current_amount")) for c in campaigns), Decimal(0)),
        "total_donated": sum((_to_decimal(d.get("amount")) for d in donations), Decimal(0)),
        "campaign_count": len(campaigns),
        "donation_count": len(donations),
        "active_campaigns": count(CampaignStatus.ACTIVE),
        "completed_campaigns": count(CampaignStatus.COMPLETED),
        "cancelled_campaigns": count(CampaignStatus.CANCELLED),
    }


def _to_decimal(value: object) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
