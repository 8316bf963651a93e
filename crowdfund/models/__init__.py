"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Donation rows are append-only; Campaign.current_amount mirrors their sum

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from crowdfund.models.user import User  # noqa: F401
from crowdfund.models.campaign import Campaign  # noqa: F401
from crowdfund.models.donation import Donation  # noqa: F401
