"""Shared test helpers."""

import base64
import json

PASSWORD = "correct-horse"


def make_token(claims: dict | None = None, payload: str | None = None) -> str:
    """Unsigned three-segment token carrying `claims` (or a raw payload segment)."""
    if payload is None:
        raw = json.dumps(claims or {}).encode("utf-8")
        payload = base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    header = base64.urlsafe_b64encode(b'{"alg":"HS256","typ":"JWT"}').decode("ascii").rstrip("=")
    return f"{header}.{payload}.signature"
