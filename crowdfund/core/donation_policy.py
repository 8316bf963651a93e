"""Donation Policy — pure preconditions checked before a donation reaches the ledger.

Invariants:
    - Amounts must be finite, strictly positive and whole cents (at most 2 decimal places)
    - Authenticated donors never store a guest donor name
    - Guest donors must supply a non-blank name (stored stripped)
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from crowdfund.core.errors import GuestNameRequiredError, InvalidDonationAmountError

_CENT = Decimal("0.01")
_CENT_EXPONENT = -2


def ensure_positive_amount(amount: object) -> Decimal:
    """Return amount as Decimal, or raise InvalidDonationAmountError."""
    if isinstance(amount, bool):
        raise InvalidDonationAmountError(amount)
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidDonationAmountError(amount)
    if not value.is_finite() or value <= 0:
        raise InvalidDonationAmountError(amount)
    if not _whole_cents(value):
        raise InvalidDonationAmountError(amount)
    return value


def _whole_cents(value: Decimal) -> bool:
    if value.as_tuple().exponent >= _CENT_EXPONENT:
        return True
    try:
        return value == value.quantize(_CENT, rounding=ROUND_DOWN)
    except InvalidOperation:
        return False


def resolve_donor_name(donor_user_id: int | None, donor_name: str | None) -> str | None:
    """Guest name to persist: None for authenticated donors, required for guests."""
    if donor_user_id is not None:
        return None
    name = (donor_name or "").strip()
    if not name:
        raise GuestNameRequiredError()
    return name
