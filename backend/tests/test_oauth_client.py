"""Tests for the Google OAuth2 client (HTTP calls mocked)."""

from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from expense_tracker.services import oauth
from expense_tracker.services.oauth import GoogleOAuthClient, OAuthError


@pytest.fixture
def google():
    return GoogleOAuthClient("client-id", "client-secret", "http://localhost:3000/auth/google/transactions")


def response(payload, status=200):
    resp = MagicMock()
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return resp


class TestAuthorizationUrl:

    def test_requests_profile_and_email(self, google):
        url = urlparse(google.authorization_url("xyz"))
        assert f"{url.scheme}://{url.netloc}{url.path}" == oauth.AUTHORIZE_URL
        query = parse_qs(url.query)
        assert query["scope"] == ["profile email"]
        assert query["response_type"] == ["code"]
        assert query["state"] == ["xyz"]
        assert query["client_id"] == ["client-id"]
        assert query["redirect_uri"] == ["http://localhost:3000/auth/google/transactions"]


class TestFetchProfile:

    def test_exchanges_code_then_reads_userinfo(self, google, monkeypatch):
        post = MagicMock(return_value=response({"access_token": "tok"}))
        get = MagicMock(return_value=response({"email": "g@example.com", "name": "G"}))
        monkeypatch.setattr(oauth.requests, "post", post)
        monkeypatch.setattr(oauth.requests, "get", get)

        profile = google.fetch_profile("the-code")

        assert profile["email"] == "g@example.com"
        assert post.call_args.args[0] == oauth.TOKEN_URL
        sent = post.call_args.kwargs["data"]
        assert sent["code"] == "the-code"
        assert sent["grant_type"] == "authorization_code"
        assert get.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}

    def test_token_endpoint_failure(self, google, monkeypatch):
        monkeypatch.setattr(oauth.requests, "post", MagicMock(return_value=response({}, status=400)))
        with pytest.raises(OAuthError):
            google.fetch_profile("bad")

    def test_network_failure(self, google, monkeypatch):
        monkeypatch.setattr(oauth.requests, "post", MagicMock(side_effect=requests.ConnectionError("down")))
        with pytest.raises(OAuthError):
            google.fetch_profile("code")

    def test_missing_access_token(self, google, monkeypatch):
        monkeypatch.setattr(oauth.requests, "post", MagicMock(return_value=response({})))
        with pytest.raises(OAuthError):
            google.fetch_profile("code")

    def test_profile_without_email(self, google, monkeypatch):
        monkeypatch.setattr(oauth.requests, "post", MagicMock(return_value=response({"access_token": "tok"})))
        monkeypatch.setattr(oauth.requests, "get", MagicMock(return_value=response({"sub": "123"})))
        with pytest.raises(OAuthError):
            google.fetch_profile("code")
