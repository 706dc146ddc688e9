# expense_tracker/services/oauth.py
"""Google OAuth2 authorization-code flow.

Only the pieces sign-in needs: build the consent URL, then trade the
returned code for an access token and read the profile's email.
"""
import logging
from typing import Any, Dict, Sequence

import requests

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
DEFAULT_SCOPES = ("profile", "email")


class OAuthError(Exception):
    """The provider exchange did not produce a usable profile."""


class GoogleOAuthClient:
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        scopes: Sequence[str] = DEFAULT_SCOPES,
        timeout: float = 10.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.scopes = tuple(scopes)
        self.timeout = timeout

    def authorization_url(self, state: str) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self.scopes),
            "state": state,
        }
        return requests.Request("GET", AUTHORIZE_URL, params=params).prepare().url

    def fetch_profile(self, code: str) -> Dict[str, Any]:
        """
        Exchange `code` for a token and return the userinfo document.
        Raises OAuthError on any transport, provider or payload problem.
        """
        try:
            token_resp = requests.post(
                TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": self.redirect_uri,
                    "grant_type": "authorization_code",
                },
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            token_resp.raise_for_status()
            access_token = token_resp.json().get("access_token")
            if not access_token:
                raise OAuthError("token response has no access_token")

            profile_resp = requests.get(
                USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self.timeout,
            )
            profile_resp.raise_for_status()
            profile = profile_resp.json()
        except requests.RequestException as exc:
            raise OAuthError(f"provider request failed: {exc}") from exc
        except ValueError as exc:
            # body was not JSON
            raise OAuthError(f"unreadable provider response: {exc}") from exc

        if not profile.get("email"):
            raise OAuthError("profile has no email")
        return profile
