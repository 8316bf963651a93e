"""Auth Dependencies — resolve the bearer token on a request to a User.

Invariants:
    - Missing Authorization header: optional routes get None, protected routes 401
    - A present but invalid/expired token is always 401, even on optional routes,
      so the client drops it
    - The token subject is normalized with normalize_identifier (JWT sub is a string)
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from crowdfund.config import get_settings
from crowdfund.core.errors import AuthenticationError
from crowdfund.core.identity import normalize_identifier
from crowdfund.infrastructure.database import get_db
from crowdfund.models.user import User
from crowdfund.services.auth_tokens import decode_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if credentials is None:
        return None
    claims = decode_token(credentials.credentials, get_settings())
    user_id = normalize_identifier(claims.get("sub"))
    if user_id is None:
        raise AuthenticationError("Invalid token subject")
    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


async def get_current_user(
    user: User | None = Depends(get_optional_user),
) -> User:
    if user is None:
        raise AuthenticationError()
    return user
