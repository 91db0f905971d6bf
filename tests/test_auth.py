"""
Unit tests for TokenAuthenticator
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
import requests

from symbl_client.auth import TokenAuthenticator
from symbl_client.errors import AuthenticationFailedError, InvalidInputError, ValidationError
from symbl_client.http import HttpClient, StatusError
from symbl_client.models import Credentials

AUTH_URL = "https://api.example.test/oauth2/token:generate"


@pytest.fixture
def http_client():
    return Mock(spec=HttpClient)


@pytest.fixture
def token_authenticator(http_client):
    return TokenAuthenticator(AUTH_URL, http_client, timeout_seconds=5)


class TestAuthenticateSuccess:
    """Test token acquisition"""

    def test_returns_token_with_expiry(self, token_authenticator, http_client, credentials):
        http_client.do.return_value = {"accessToken": "abc", "expiresIn": 60}

        before = datetime.now(timezone.utc)
        token = token_authenticator.authenticate(credentials)
        after = datetime.now(timezone.utc)

        assert token.value == "abc"
        assert before + timedelta(seconds=60) <= token.expires_at <= after + timedelta(seconds=60)
        assert abs(token.expires_in() - 60) < 2

    def test_posts_credentials_once(self, token_authenticator, http_client, credentials):
        http_client.do.return_value = {"accessToken": "abc", "expiresIn": 60}

        token_authenticator.authenticate(credentials)

        http_client.do.assert_called_once()
        request = http_client.do.call_args.args[0]
        assert request.method == "POST"
        assert request.url == AUTH_URL
        assert request.body == {"type": "application", "appId": "app-id", "appSecret": "app-secret"}
        assert http_client.do.call_args.kwargs["timeout"] == 5

    def test_empty_auth_type_defaults_to_application(self, token_authenticator, http_client):
        http_client.do.return_value = {"accessToken": "abc", "expiresIn": 60}

        token_authenticator.authenticate(Credentials("app-id", "app-secret", auth_type=""))

        assert http_client.do.call_args.args[0].body["type"] == "application"

    def test_explicit_timeout_overrides_default(self, token_authenticator, http_client, credentials):
        http_client.do.return_value = {"accessToken": "abc", "expiresIn": 60}

        token_authenticator.authenticate(credentials, timeout=1.5)

        assert http_client.do.call_args.kwargs["timeout"] == 1.5


class TestAuthenticateFailure:
    """Test rejection paths"""

    @pytest.mark.parametrize(
        "creds, missing",
        [
            (Credentials("", "secret"), ("app_id",)),
            (Credentials("id", ""), ("app_secret",)),
            (Credentials(" ", ""), ("app_id", "app_secret")),
        ],
    )
    def test_missing_credentials_fail_before_io(self, token_authenticator, http_client, creds, missing):
        with pytest.raises(ValidationError) as exc_info:
            token_authenticator.authenticate(creds)

        assert exc_info.value.fields == missing
        assert isinstance(exc_info.value, InvalidInputError)
        http_client.do.assert_not_called()

    def test_empty_access_token(self, token_authenticator, http_client, credentials):
        http_client.do.return_value = {"accessToken": ""}

        with pytest.raises(AuthenticationFailedError):
            token_authenticator.authenticate(credentials)

    def test_missing_access_token(self, token_authenticator, http_client, credentials):
        http_client.do.return_value = {}

        with pytest.raises(AuthenticationFailedError):
            token_authenticator.authenticate(credentials)

    def test_transport_error_propagates_unchanged(self, token_authenticator, http_client, credentials):
        error = requests.ConnectionError("unreachable")
        http_client.do.side_effect = error

        with pytest.raises(requests.ConnectionError) as exc_info:
            token_authenticator.authenticate(credentials)

        assert exc_info.value is error
        assert http_client.do.call_count == 1

    def test_status_error_propagates(self, token_authenticator, http_client, credentials):
        http_client.do.side_effect = StatusError("POST", AUTH_URL, 401, "Unauthorized")

        with pytest.raises(StatusError):
            token_authenticator.authenticate(credentials)
