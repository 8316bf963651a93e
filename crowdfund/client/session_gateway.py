"""Session Gateway — owns the client's credential and identity, gates authenticated calls.

Invariants:
    - States: loading (initial) -> authenticated | unauthenticated
    - A stale or malformed credential is discarded locally, without a server round trip
    - Every outbound call goes through request(): the credential is attached only if
      is_credential_usable() says so
    - A server 401 always tears the session down, whatever the local check said
    - logout() never touches the network and cannot fail
    - Failed login/register leave state, credential and identity untouched

Design Decisions:
    - Explicit object, not module state: tests build isolated gateways
    - Not safe for interleaved login/logout; callers (one UI event loop) serialize them
    - clock is injectable so freshness is testable at fixed instants
"""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any

from crowdfund.client.api_client import CrowdfundApiClient
from crowdfund.client.credential_store import FileCredentialStore
from crowdfund.config import Settings, get_settings
from crowdfund.core.credentials import is_credential_usable
from crowdfund.core.domain_types import SessionState
from crowdfund.core.errors import (
    ApiRequestError, CrowdfundError, NotAuthenticatedError, UnauthorizedError,
)
from crowdfund.core.repository_protocols import AuthApi, CredentialStore

logger = logging.getLogger(__name__)


class SessionGateway:
    """Client session: credential + identity + authorization state."""

    def __init__(
        self,
        api: AuthApi,
        store: CredentialStore,
        clock: Callable[[], float] = time.time,
    ):
        self._api = api
        self._store = store
        self._clock = clock
        self._state = SessionState.LOADING
        self._credential: str | None = None
        self._user: dict | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> dict | None:
        return self._user

    @property
    def credential(self) -> str | None:
        return self._credential

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    # ─── Lifecycle ──────────────────────────────────────────────

    async def start(self) -> SessionState:
        """Resume a persisted session if its credential is still usable."""
        self._state = SessionState.LOADING
        credential = self._store.load()
        if not credential or not is_credential_usable(credential, self._clock()):
            if credential:
                logger.info("Discarding stale persisted credential")
            self._discard()
            return self._state

        try:
            user = await self._api.resolve_current_identity(credential)
        except CrowdfundError as e:
            logger.warning(
                f"Could not resume session: {e.message}",
                extra={"error_code": e.code},
            )
            self._discard()
            return self._state

        self._credential = credential
        self._user = user
        self._state = SessionState.AUTHENTICATED
        logger.info("Session resumed", extra={"state": self._state.value})
        return self._state

    async def login(self, username: str, password: str) -> dict:
        data = await self._api.login(username, password)
        return self._establish(data)

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> dict:
        data = await self._api.register(username, email, password, display_name)
        return self._establish(data)

    def logout(self) -> None:
        self._discard()
        logger.info("Logged out", extra={"state": self._state.value})

    async def update_profile(
        self, display_name: str | None = None, avatar_url: str | None = None,
    ) -> dict:
        """Update display fields of the held identity; state is unchanged."""
        updates: dict[str, Any] = {}
        if display_name is not None:
            updates["display_name"] = display_name
        if avatar_url is not None:
            updates["avatar_url"] = avatar_url
        user = await self._call_authenticated(
            lambda credential: self._api.update_profile(credential, updates),
        )
        self._user = user
        return user

    # ─── Outbound calls ─────────────────────────────────────────

    async def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict | None = None,
        auth_required: bool = True,
    ) -> Any:
        """Send a request with the current credential attached when usable."""
        if auth_required:
            return await self._call_authenticated(
                lambda credential: self._api.send(
                    method, path, credential=credential, json=json, params=params,
                ),
            )
        credential = self._usable_credential()
        try:
            return await self._api.send(
                method, path, credential=credential, json=json, params=params,
            )
        except UnauthorizedError:
            self._discard()
            raise

    async def _call_authenticated(
        self, call: Callable[[str], Awaitable[Any]],
    ) -> Any:
        credential = self._usable_credential()
        if credential is None:
            raise NotAuthenticatedError()
        try:
            return await call(credential)
        except UnauthorizedError:
            logger.warning("Server rejected credential; session cleared")
            self._discard()
            raise

    def _usable_credential(self) -> str | None:
        if self._credential is None:
            return None
        if not is_credential_usable(self._credential, self._clock()):
            logger.info("Held credential expired; session cleared")
            self._discard()
            return None
        return self._credential

    # ─── State transitions ──────────────────────────────────────

    def _establish(self, data: object) -> dict:
        token = data.get("token") if isinstance(data, dict) else None
        user = data.get("user") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token or not isinstance(user, dict):
            raise ApiRequestError("Malformed authentication response", 502)
        self._store.save(token)
        self._credential = token
        self._user = user
        self._state = SessionState.AUTHENTICATED
        return user

    def _discard(self) -> None:
        self._store.clear()
        self._credential = None
        self._user = None
        self._state = SessionState.UNAUTHENTICATED


def create_session_gateway(settings: Settings | None = None) -> SessionGateway:
    """Gateway wired to the configured API base URL and credential file."""
    settings = settings or get_settings()
    return SessionGateway(
        CrowdfundApiClient(settings.api_base_url),
        FileCredentialStore(settings.credential_path),
    )
