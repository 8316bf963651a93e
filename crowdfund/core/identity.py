"""Identity Equality — decides whether two user identifiers name the same entity.

Invariants:
    - None on either side is never equal (an unauthenticated viewer owns nothing)
    - Comparison is by integer value, never by representation or text
    - Non-numeric text, bool, fractional or non-finite numbers are "not comparable" -> False
    - 0 is a valid identifier
    - Never raises; arbitrarily wide integers are compared exactly

Design Decisions:
    - Identifiers reach us as JWT "sub" strings, URL path segments, ORM ints and
      Decimal/float values from drivers; IdentifierValue is the closed set we accept
      and normalize_identifier is the single conversion point
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Union

from crowdfund.core.domain_types import UserId

IdentifierValue = Union[int, str, Decimal, float]

_DECIMAL_INTEGER = re.compile(r"[+-]?[0-9]+")


def normalize_identifier(value: object) -> UserId | None:
    """Convert a supported representation to an integer id, or None if not comparable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return UserId(value)
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_INTEGER.fullmatch(text):
            return None
        # int(str) is capped at sys.get_int_max_str_digits(); Decimal(str) is not
        return _integral_number(Decimal(text))
    if isinstance(value, (Decimal, float)):
        return _integral_number(value)
    return None


def same_identity(left: object, right: object) -> bool:
    """True when both identifiers are present and numerically equal."""
    if left is None or right is None:
        return False
    a = normalize_identifier(left)
    b = normalize_identifier(right)
    if a is None or b is None:
        return False
    return a == b


def _integral_number(value: Decimal | float) -> UserId | None:
    finite = value.is_finite() if isinstance(value, Decimal) else math.isfinite(value)
    if not finite:
        return None
    try:
        integral = int(value)
    except (InvalidOperation, OverflowError, ValueError):
        return None
    if value != integral:
        return None
    return UserId(integral)
