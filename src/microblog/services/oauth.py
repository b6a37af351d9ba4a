"""Client for the external OAuth identity provider.

Implements the authorization-code flow against a GitHub-compatible provider:
build the authorize redirect, exchange the returned code for an access token,
then fetch the profile carrying the stable subject id and login name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from microblog.core.errors import ExternalIdentityError
from microblog.core.settings import Settings
from microblog.schemas.user import ExternalProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OAuthConfig:
    """Endpoints and credentials for the external provider."""

    name: str
    client_id: str | None
    client_secret: str | None
    callback_url: str
    authorize_url: str
    token_url: str
    profile_url: str
    scope: str
    timeout_seconds: float

    @classmethod
    def from_settings(cls, settings: Settings) -> OAuthConfig:
        return cls(
            name=settings.oauth_provider_name,
            client_id=settings.oauth_client_id,
            client_secret=settings.oauth_client_secret,
            callback_url=settings.oauth_callback_url,
            authorize_url=settings.oauth_authorize_url,
            token_url=settings.oauth_token_url,
            profile_url=settings.oauth_profile_url,
            scope=settings.oauth_scope,
            timeout_seconds=settings.oauth_http_timeout_seconds,
        )


class ExternalIdentityProvider:
    """HTTP client wrapper for the external identity provider."""

    def __init__(self, config: OAuthConfig) -> None:
        self.config = config

    @property
    def enabled(self) -> bool:
        return bool(self.config.client_id and self.config.client_secret)

    def authorization_url(self, state: str) -> str:
        """Return the provider URL the browser is redirected to."""
        params = {
            "client_id": self.config.client_id or "",
            "redirect_uri": self.config.callback_url,
            "scope": self.config.scope,
            "state": state,
        }
        return str(httpx.URL(self.config.authorize_url, params=params))

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={"Accept": "application/json"},
        )

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPStatusError, ValueError) as exc:
            raise ExternalIdentityError(f"{self.config.name} request failed: {exc}") from exc
        if not isinstance(data, dict):
            raise ExternalIdentityError(f"{self.config.name} returned an unexpected payload")
        return data

    async def exchange_code(self, client: httpx.AsyncClient, code: str) -> str:
        """Trade an authorization code for an access token."""
        response = await client.post(
            self.config.token_url,
            data={
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "code": code,
                "redirect_uri": self.config.callback_url,
            },
        )
        data = self._json(response)
        token = data.get("access_token")
        if not token:
            # GitHub reports bad codes with 200 and an ``error`` field.
            reason = data.get("error_description") or data.get("error") or "no access token"
            raise ExternalIdentityError(f"{self.config.name} rejected the code: {reason}")
        return str(token)

    async def fetch_profile(self, client: httpx.AsyncClient, access_token: str) -> ExternalProfile:
        """Fetch the authenticated profile for ``access_token``."""
        response = await client.get(
            self.config.profile_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        data = self._json(response)
        subject = data.get("id")
        username = data.get("login") or data.get("username")
        if subject is None or not username:
            raise ExternalIdentityError(f"{self.config.name} profile is missing id or login")
        return ExternalProfile(subject_id=str(subject), username=str(username))

    async def authenticate(self, code: str) -> ExternalProfile:
        """Run the full code exchange and return the provider profile."""
        if not self.enabled:
            raise ExternalIdentityError(f"{self.config.name} login is not configured")
        try:
            async with self._client() as client:
                access_token = await self.exchange_code(client, code)
                return await self.fetch_profile(client, access_token)
        except httpx.HTTPError as exc:
            logger.warning("%s request failed: %s", self.config.name, exc)
            raise ExternalIdentityError(f"{self.config.name} request failed: {exc}") from exc
