"""
Google and Facebook authorization-code login.

``authorization_url`` builds the provider consent URL; ``fetch_profile``
exchanges the callback code for an access token and reads the user's
identity from the provider.

The consent URL carries a random ``state`` that is also kept in a short-lived
cookie; ``verify_state`` rejects callbacks whose state does not match it.
"""

import secrets
from typing import Literal, Optional
from urllib.parse import urlencode

import httpx

from clinicdesk.config import settings
from clinicdesk.core.logging import logger
from clinicdesk.features.auth.schemas import OAuthProfile
from clinicdesk.shared.exceptions import BadRequestException, CredentialsException


OAuthProviderName = Literal["google", "facebook"]

STATE_COOKIE = "oauth_state"
STATE_MAX_AGE_SECONDS = 600

_TIMEOUT = httpx.Timeout(connect=5.0, read=15.0, write=15.0, pool=5.0)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"

FACEBOOK_AUTH_URL = "https://www.facebook.com/v18.0/dialog/oauth"
FACEBOOK_TOKEN_URL = "https://graph.facebook.com/v18.0/oauth/access_token"
FACEBOOK_PROFILE_URL = "https://graph.facebook.com/me"


def _client_credentials(provider: OAuthProviderName) -> tuple[str, str, str]:
    if provider == "google":
        creds = (settings.GOOGLE_CLIENT_ID, settings.GOOGLE_CLIENT_SECRET, settings.GOOGLE_CALLBACK_URL)
    else:
        creds = (settings.FACEBOOK_APP_ID, settings.FACEBOOK_APP_SECRET, settings.FACEBOOK_CALLBACK_URL)

    if not creds[0] or not creds[1]:
        raise BadRequestException(f"{provider.capitalize()} login is not configured")
    return creds


def new_state() -> str:
    return secrets.token_urlsafe(24)


def verify_state(expected: Optional[str], received: Optional[str]) -> None:
    """
    Check the callback state against the one issued to this browser.

    Raises:
        CredentialsException: If either side is missing or they differ
    """
    if not expected or not received or not secrets.compare_digest(expected.encode(), received.encode()):
        logger.warning("OAuth callback with missing or mismatched state")
        raise CredentialsException("Invalid OAuth state")


def authorization_url(provider: OAuthProviderName, state: str) -> str:
    """Consent page URL the browser is redirected to."""
    client_id, _, callback_url = _client_credentials(provider)

    if provider == "google":
        query = {
            "client_id": client_id,
            "redirect_uri": callback_url,
            "response_type": "code",
            "scope": "openid email profile",
            "state": state,
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(query)}"

    query = {
        "client_id": client_id,
        "redirect_uri": callback_url,
        "response_type": "code",
        "scope": "email public_profile",
        "state": state,
    }
    return f"{FACEBOOK_AUTH_URL}?{urlencode(query)}"


async def fetch_profile(provider: OAuthProviderName, code: str) -> OAuthProfile:
    """
    Exchange an authorization code for the provider's view of the user.

    Raises:
        CredentialsException: If the provider rejects the code or returns no email
    """
    client_id, client_secret, callback_url = _client_credentials(provider)

    async with httpx.AsyncClient(timeout=_TIMEOUT) as client:
        try:
            if provider == "google":
                token_response = await client.post(
                    GOOGLE_TOKEN_URL,
                    data={
                        "code": code,
                        "client_id": client_id,
                        "client_secret": client_secret,
                        "redirect_uri": callback_url,
                        "grant_type": "authorization_code",
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                profile_response = await client.get(
                    GOOGLE_USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                profile_response.raise_for_status()
                data = profile_response.json()
                provider_id = data.get("sub")
                name = data.get("name") or f"{data.get('given_name', '')} {data.get('family_name', '')}".strip()
                photo = data.get("picture")
            else:
                token_response = await client.get(
                    FACEBOOK_TOKEN_URL,
                    params={
                        "code": code,
                        "client_id": client_id,
                        "client_secret": client_secret,
                        "redirect_uri": callback_url,
                    },
                )
                token_response.raise_for_status()
                access_token = token_response.json()["access_token"]

                profile_response = await client.get(
                    FACEBOOK_PROFILE_URL,
                    params={
                        "fields": "id,email,first_name,last_name,picture",
                        "access_token": access_token,
                    },
                )
                profile_response.raise_for_status()
                data = profile_response.json()
                provider_id = data.get("id")
                name = f"{data.get('first_name', '')} {data.get('last_name', '')}".strip()
                photo = data.get("picture", {}).get("data", {}).get("url")
        except (httpx.HTTPError, KeyError) as e:
            logger.warning(f"{provider} code exchange failed: {e}")
            raise CredentialsException(f"{provider.capitalize()} authentication failed")

    email = data.get("email")
    if not provider_id or not email:
        raise CredentialsException(f"{provider.capitalize()} account has no email address")

    return OAuthProfile(
        provider=provider,
        provider_id=str(provider_id),
        email=email,
        name=name or email,
        photo=photo,
    )
