"""
Unit tests for AuthenticatedSession
"""
import threading
from unittest.mock import Mock

import pytest

from symbl_client.config import ConfigurationError
from symbl_client.errors import InvalidInputError
from symbl_client.models import BearerToken
from symbl_client.session import AuthenticatedSession


class TestInstall:
    """Test token replacement"""

    def test_constructor_installs_initial_token(self, session, transport, initial_token):
        assert session.token() is initial_token
        assert transport.authorization == "initial-token"

    def test_install_swaps_token_and_transport_header(self, session, transport):
        replacement = BearerToken.issued("replacement", 60)

        session.install(replacement)

        assert session.token() is replacement
        assert transport.authorization == "replacement"

    def test_install_rejects_empty_token(self, session, transport):
        with pytest.raises(InvalidInputError):
            session.install(BearerToken.issued("", 60))
        assert transport.authorization == "initial-token"

    def test_concurrent_installs_leave_a_consistent_pair(self, session, transport):
        tokens = [BearerToken.issued(f"token-{n}", 60) for n in range(50)]
        threads = [threading.Thread(target=session.install, args=(token,)) for token in tokens]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert session.token().value == transport.authorization

    def test_credentials_are_kept(self, session, credentials):
        assert session.credentials() is credentials


class TestOpen:
    """Test session bootstrap"""

    def test_open_authenticates_once(self, credentials, authenticator, transport):
        token = BearerToken.issued("first", 60)
        authenticator.authenticate.return_value = token

        session = AuthenticatedSession.open(credentials, authenticator, transport, timeout=5)

        authenticator.authenticate.assert_called_once_with(credentials, timeout=5)
        assert session.token() is token
        assert transport.authorization == "first"

    def test_open_propagates_authentication_errors(self, credentials, authenticator, transport):
        authenticator.authenticate.side_effect = InvalidInputError("bad")

        with pytest.raises(InvalidInputError):
            AuthenticatedSession.open(credentials, authenticator, transport)

    def test_from_env_reads_app_credentials(self, monkeypatch, authenticator, transport):
        monkeypatch.setenv("APP_ID", "env-id")
        monkeypatch.setenv("APP_SECRET", "env-secret")
        authenticator.authenticate.return_value = BearerToken.issued("env-token", 60)

        session = AuthenticatedSession.from_env(authenticator, transport)

        creds = session.credentials()
        assert (creds.app_id, creds.app_secret, creds.auth_type) == ("env-id", "env-secret", "application")

    @pytest.mark.parametrize("present", [{"APP_ID": "id"}, {"APP_SECRET": "secret"}, {}])
    def test_from_env_missing_input_fails_before_network(self, monkeypatch, present, transport):
        for key, value in present.items():
            monkeypatch.setenv(key, value)
        authenticator = Mock()

        with pytest.raises(ConfigurationError) as exc_info:
            AuthenticatedSession.from_env(authenticator, transport)

        assert isinstance(exc_info.value, InvalidInputError)
        authenticator.authenticate.assert_not_called()
