"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, CampaignId, DonationId wrap integers: the storage engine's row ids
    - All valid states encoded as Enums; no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
CampaignId = NewType("CampaignId", int)
DonationId = NewType("DonationId", int)


# ─── Enums ───────────────────────────────────────────────────────

class CampaignStatus(str, Enum):
    """Campaign lifecycle states — maps to DB `status` column."""
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CampaignCategory(str, Enum):
    """Fixed campaign categories offered by the browse filter."""
    COMMUNITY = "community"
    ANIMALS = "animals"
    CREATIVE = "creative"
    EDUCATION = "education"
    MEDICAL = "medical"
    BUSINESS = "business"
    SPORTS = "sports"
    EMERGENCY = "emergency"


class SessionState(str, Enum):
    """Client session states held by SessionGateway."""
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
