"""Server-side Credentials — password hashing and signed bearer tokens.

Invariants:
    - Passwords stored only as bcrypt hashes
    - Tokens are HS256 JWTs with sub = str(user id) and exp = issue time + TTL
    - Any verification failure (bad signature, expired, malformed) -> AuthenticationError

Design Decisions:
    - This is the authority the client-side freshness check defers to
"""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from crowdfund.config import Settings
from crowdfund.core.errors import AuthenticationError


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def issue_token(user_id: int, settings: Settings, now: datetime | None = None) -> str:
    """Sign a bearer token for user_id."""
    issued = now or datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(hours=settings.token_ttl_hours)).timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> dict:
    """Verify signature and expiry; return the claims."""
    try:
        return jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        raise AuthenticationError("Invalid or expired token")
