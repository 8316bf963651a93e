"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - AuthApi methods take the credential explicitly: the session gateway owns it,
      the transport never caches one
"""

from typing import Any, Protocol

from crowdfund.core.domain_types import CampaignId


class CampaignLike(Protocol):
    """Structural contract for campaign rows consulted before a donation."""
    id: int
    user_id: int
    status: str


class CampaignLookup(Protocol):
    """Does campaign X exist and is it active? Implemented by services/campaigns."""
    async def require_active(self, campaign_id: CampaignId) -> CampaignLike: ...


class CredentialStore(Protocol):
    """Durable key-value slot holding the client's bearer credential."""
    def load(self) -> str | None: ...
    def save(self, credential: str) -> None: ...
    def clear(self) -> None: ...


class AuthApi(Protocol):
    """Remote operations the session gateway needs, implemented by client/api_client."""
    async def login(self, username: str, password: str) -> dict: ...
    async def register(
        self, username: str, email: str, password: str, display_name: str | None,
    ) -> dict: ...
    async def resolve_current_identity(self, credential: str) -> dict: ...
    async def update_profile(self, credential: str, updates: dict) -> dict: ...
    async def send(
        self,
        method: str,
        path: str,
        credential: str | None = None,
        json: Any = None,
        params: dict | None = None,
    ) -> Any: ...
