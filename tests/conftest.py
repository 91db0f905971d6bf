"""Shared fixtures for the symbl_client test suite."""
from unittest.mock import Mock

import pytest

from symbl_client.auth import TokenAuthenticator
from symbl_client.config import AppSettings
from symbl_client.dispatcher import ResilientDispatcher, RetryPolicy
from symbl_client.models import BearerToken, Credentials
from symbl_client.session import AuthenticatedSession


class ScriptedTransport:
    """Transport double that replays a script of results or exceptions.

    Every call records the authorization header value that was current at
    the time of the call, so tests can check which token a retry used.
    """

    def __init__(self, script=None):
        self.script = list(script or [])
        self.authorization = None
        self.calls = []

    def set_authorization(self, token):
        self.authorization = token

    def _next(self, call):
        self.calls.append(call)
        outcome = self.script.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def do(self, request, timeout=None):
        return self._next({"request": request, "timeout": timeout, "token": self.authorization})

    def do_file(self, url, file_path, timeout=None):
        return self._next({"url": url, "file_path": file_path, "timeout": timeout, "token": self.authorization})


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep real credentials and .env files out of every test."""
    for key in ("APP_ID", "APP_SECRET", "SYMBL_AUTH_TYPE", "SYMBL_BASE_URL", "SYMBL_AUTH_PATH",
                "SYMBL_TIMEOUT_SECONDS", "SYMBL_AUTH_TIMEOUT_SECONDS", "SYMBL_RETRY_ATTEMPTS",
                "SYMBL_RETRY_DELAY_SECONDS", "SYMBL_LOG_LEVEL", "SYMBL_ENV_FILE"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("symbl_client.config._load_dotenv_if_present", lambda file_name=".env": None)


@pytest.fixture
def settings():
    return AppSettings(
        app_id="app-id",
        app_secret="app-secret",
        auth_type="application",
        base_url="https://api.example.test",
        auth_path="/oauth2/token:generate",
        timeout_seconds=30,
        auth_timeout_seconds=5,
        retry_attempts=3,
        retry_delay_seconds=2,
        log_level="INFO",
    )


@pytest.fixture
def credentials():
    return Credentials(app_id="app-id", app_secret="app-secret")


@pytest.fixture
def initial_token():
    return BearerToken.issued("initial-token", 3600)


@pytest.fixture
def transport():
    return ScriptedTransport()


@pytest.fixture
def authenticator():
    return Mock(spec=TokenAuthenticator)


@pytest.fixture
def session(credentials, initial_token, transport):
    return AuthenticatedSession(credentials, initial_token, transport)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def dispatcher(session, authenticator, sleeps):
    return ResilientDispatcher(
        session,
        authenticator,
        retry_policy=RetryPolicy(max_attempts=3, delay_seconds=2.0, sleep=sleeps.append),
    )
