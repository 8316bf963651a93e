"""Credential Freshness — local, advisory check that a bearer token has not expired.

Invariants:
    - Never raises: every decoding failure resolves to "not usable"
    - Never contacts a server and never verifies the signature
    - exp <= now is expired (a token expiring exactly now is already invalid; exp=0 always is)
    - now is whole seconds (floored), same unit as the exp claim

Design Decisions:
    - Payload segment accepted in both base64 alphabets, padding optional: issuers
      emit URL-safe unpadded segments, hand-built tokens often use the standard one
    - bool is rejected as exp even though it subclasses int (JSON true is not a number)
"""

import base64
import binascii
import json
import math
import time

_SEGMENT_COUNT = 3


def decode_claims(token: object) -> dict | None:
    """Decode the claims payload of a three-segment bearer token, or None."""
    if not isinstance(token, str) or not token:
        return None
    parts = token.split(".")
    if len(parts) != _SEGMENT_COUNT:
        return None
    try:
        raw = _b64decode(parts[1])
        payload = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError, RecursionError):
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def is_credential_usable(token: object, now: float | None = None) -> bool:
    """True when the token carries a numeric exp strictly in the future."""
    claims = decode_claims(token)
    if claims is None:
        return False
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return False
    if isinstance(exp, float) and not math.isfinite(exp):
        return False
    current = math.floor(time.time() if now is None else now)
    return exp > current


def _b64decode(segment: str) -> bytes:
    normalized = segment.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    return base64.b64decode(normalized, validate=True)
