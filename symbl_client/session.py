from __future__ import annotations

import logging
import threading

from symbl_client.auth import TokenAuthenticator
from symbl_client.config import AppSettings
from symbl_client.errors import InvalidInputError
from symbl_client.http import HttpClient
from symbl_client.models import BearerToken, Credentials

logger = logging.getLogger(__name__)


class AuthenticatedSession:
    """Current bearer token plus the credentials needed to mint the next one.

    ``install`` is the only way the token changes; it swaps the whole token
    and pushes it to the transport while holding the session lock.
    """

    def __init__(self, credentials: Credentials, token: BearerToken, transport: HttpClient):
        self._credentials = credentials
        self._transport = transport
        self._lock = threading.Lock()
        self._token: BearerToken | None = None
        self.install(token)

    @classmethod
    def open(
        cls,
        credentials: Credentials,
        authenticator: TokenAuthenticator,
        transport: HttpClient,
        timeout: float | None = None,
    ) -> "AuthenticatedSession":
        token = authenticator.authenticate(credentials, timeout=timeout)
        session = cls(credentials, token, transport)
        logger.info("Session opened for app %s", credentials.app_id)
        return session

    @classmethod
    def from_env(
        cls,
        authenticator: TokenAuthenticator,
        transport: HttpClient,
    ) -> "AuthenticatedSession":
        settings = AppSettings.from_env()
        return cls.open(settings.credentials(), authenticator, transport, timeout=settings.auth_timeout_seconds)

    def install(self, token: BearerToken) -> None:
        if not token.value:
            raise InvalidInputError("Cannot install an empty bearer token")

        with self._lock:
            self._token = token
            self._transport.set_authorization(token.value)
        logger.debug("Installed bearer token expiring at %s", token.expires_at.isoformat())

    def token(self) -> BearerToken:
        with self._lock:
            assert self._token is not None
            return self._token

    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def transport(self) -> HttpClient:
        return self._transport
