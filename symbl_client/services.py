from __future__ import annotations

import logging

import requests

from symbl_client.apis import AsyncApi, BookmarksApi, InsightsApi, SummaryUiApi
from symbl_client.auth import TokenAuthenticator
from symbl_client.config import AppSettings
from symbl_client.dispatcher import ResilientDispatcher, RetryPolicy
from symbl_client.http import HttpClient
from symbl_client.logging_utils import configure_logging
from symbl_client.models import BearerToken, Credentials
from symbl_client.session import AuthenticatedSession

logger = logging.getLogger(__name__)


class SymblClient:
    def __init__(
        self,
        settings: AppSettings,
        credentials: Credentials | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        http_session: requests.Session | None = None,
    ):
        self._settings = settings
        credentials = credentials or settings.credentials()

        self._authenticator = TokenAuthenticator(
            settings.auth_url,
            HttpClient(timeout_seconds=settings.auth_timeout_seconds),
            timeout_seconds=settings.auth_timeout_seconds,
        )
        transport = HttpClient(timeout_seconds=settings.timeout_seconds, session=http_session)
        self._session = AuthenticatedSession.open(credentials, self._authenticator, transport)

        self._dispatcher = ResilientDispatcher(
            self._session,
            self._authenticator,
            retry_policy=retry_policy
            or RetryPolicy(
                max_attempts=settings.retry_attempts,
                delay_seconds=settings.retry_delay_seconds,
            ),
            auth_timeout_seconds=settings.auth_timeout_seconds,
        )

        self.bookmarks = BookmarksApi(settings, self._dispatcher)
        self.summary_ui = SummaryUiApi(settings, self._dispatcher)
        self.async_api = AsyncApi(settings, self._dispatcher)
        self.insights = InsightsApi(settings, self._dispatcher)

    @classmethod
    def from_env(cls, retry_policy: RetryPolicy | None = None) -> "SymblClient":
        settings = AppSettings.from_env()
        configure_logging(settings.log_level)
        return cls(settings, retry_policy=retry_policy)

    @classmethod
    def with_credentials(
        cls,
        credentials: Credentials,
        retry_policy: RetryPolicy | None = None,
    ) -> "SymblClient":
        credentials.validate()
        settings = AppSettings.from_env(require_credentials=False)
        return cls(settings, credentials, retry_policy=retry_policy)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def dispatcher(self) -> ResilientDispatcher:
        return self._dispatcher

    @property
    def token(self) -> BearerToken:
        return self._session.token()
