from typing import Tuple

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth2Client

from studydeck.core.config import GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET, GOOGLE_CALLBACK_URL
from studydeck.models.user import ProviderProfile

GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"


class IdentityProviderError(Exception):
    """The provider refused the login or could not be reached."""


class GoogleIdentityProvider:
    """Authorization-code login against Google, via Authlib."""

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str,
                 scope: str = "openid email profile", transport=None):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scope = scope
        self.transport = transport

    def _client(self) -> AsyncOAuth2Client:
        return AsyncOAuth2Client(
            client_id=self.client_id,
            client_secret=self.client_secret,
            redirect_uri=self.redirect_uri,
            scope=self.scope,
            transport=self.transport,
        )

    def create_authorization_url(self) -> Tuple[str, str]:
        """Return the provider URL to send the browser to, and its state value."""
        client = self._client()
        url, state = client.create_authorization_url(GOOGLE_AUTHORIZE_URL)
        return url, state

    async def fetch_profile(self, code: str) -> ProviderProfile:
        """Exchange an authorization code and read the user's profile."""
        try:
            async with self._client() as client:
                await client.fetch_token(GOOGLE_TOKEN_URL, code=code)
                response = await client.get(GOOGLE_USERINFO_URL)
                response.raise_for_status()
                info = response.json()
        except (AuthlibBaseError, httpx.HTTPError, ValueError) as e:
            raise IdentityProviderError(f"Google login failed: {e}") from e

        if not info.get("sub") or not info.get("email"):
            raise IdentityProviderError("Google profile is missing id or email")

        return ProviderProfile(
            provider_id=info["sub"],
            email=info["email"],
            display_name=info.get("name") or info["email"],
        )


def get_identity_provider() -> GoogleIdentityProvider:
    return GoogleIdentityProvider(GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET, GOOGLE_CALLBACK_URL)
