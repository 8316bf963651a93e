"""Crowdfund API Client — httpx transport with bearer attachment and error mapping.

Invariants:
    - HTTP 401 -> UnauthorizedError; any other non-2xx -> ApiRequestError(status)
    - Transport failures (connect, timeout) -> ApiRequestError(503)
    - Error messages taken from the server envelope ({"error": {"message"}}) when present
    - Timeouts belong to httpx, configured once on the AsyncClient

Design Decisions:
    - credential is a per-call argument: SessionGateway decides whether one is attached
"""

import logging
from typing import Any

import httpx

from crowdfund.core.errors import ApiRequestError, UnauthorizedError

logger = logging.getLogger(__name__)


class CrowdfundApiClient:
    """Remote Crowdfund API (implements core.repository_protocols.AuthApi)."""

    def __init__(
        self,
        base_url: str,
        http: httpx.AsyncClient | None = None,
        timeout_seconds: float = 10.0,
    ):
        self._http = http or httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def send(
        self,
        method: str,
        path: str,
        credential: str | None = None,
        json: Any = None,
        params: dict | None = None,
    ) -> Any:
        """Issue one request; return the decoded JSON body (None when empty)."""
        headers = {"Accept": "application/json"}
        if credential:
            headers["Authorization"] = f"Bearer {credential}"
        try:
            response = await self._http.request(
                method, path, json=json, params=params, headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}", extra={"path": path})
            raise ApiRequestError(f"Request failed: {e.__class__.__name__}", 503)

        if response.status_code == 401:
            raise UnauthorizedError(_error_message(response, "Unauthorized"))
        if response.is_error:
            raise ApiRequestError(
                _error_message(response, "Request failed"), response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise ApiRequestError("Malformed response body", response.status_code)

    async def login(self, username: str, password: str) -> dict:
        return await self.send(
            "POST", "/auth/login",
            json={"username": username, "password": password},
        )

    async def register(
        self, username: str, email: str, password: str, display_name: str | None,
    ) -> dict:
        return await self.send(
            "POST", "/auth/register",
            json={
                "username": username,
                "email": email,
                "password": password,
                "display_name": display_name,
            },
        )

    async def resolve_current_identity(self, credential: str) -> dict:
        return await self.send("GET", "/auth/me", credential=credential)

    async def update_profile(self, credential: str, updates: dict) -> dict:
        return await self.send("PUT", "/auth/me", credential=credential, json=updates)


def _error_message(response: httpx.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if not isinstance(body, dict):
        return default
    error = body.get("error")
    if isinstance(error, dict):
        return str(error.get("message") or default)
    if isinstance(error, str):
        return error
    detail = body.get("detail")
    return detail if isinstance(detail, str) else default
