from __future__ import annotations

import logging
from typing import Any

from symbl_client.errors import AuthenticationFailedError
from symbl_client.http import HttpClient
from symbl_client.models import ApiRequest, BearerToken, Credentials

logger = logging.getLogger(__name__)


class TokenAuthenticator:
    """Exchanges application credentials for a bearer token.

    Each call is exactly one POST to the auth endpoint. Network and HTTP
    status errors propagate unchanged; retrying is left to the dispatcher.
    """

    def __init__(self, auth_url: str, http_client: HttpClient, timeout_seconds: float = 5):
        self._auth_url = auth_url
        self._http_client = http_client
        self._timeout_seconds = timeout_seconds

    @property
    def auth_url(self) -> str:
        return self._auth_url

    def authenticate(self, credentials: Credentials, timeout: float | None = None) -> BearerToken:
        credentials.validate()

        logger.debug("Requesting access token for app %s", credentials.app_id)
        request = ApiRequest(method="POST", url=self._auth_url, body=credentials.to_payload())
        try:
            result = self._http_client.do(
                request,
                timeout=timeout if timeout is not None else self._timeout_seconds,
            )
        except Exception as error:
            logger.error("Token request to %s failed: %s", self._auth_url, error)
            raise

        token = self._parse_token(result)
        logger.info("Authenticated app %s, token expires in %ss", credentials.app_id, int(token.expires_in()))
        return token

    @staticmethod
    def _parse_token(result: dict[str, Any]) -> BearerToken:
        access_token = str(result.get("accessToken") or "").strip()
        if not access_token:
            logger.error("Auth endpoint returned an empty access token")
            raise AuthenticationFailedError("Authentication endpoint returned an empty access token")

        try:
            expires_in = int(result.get("expiresIn") or 0)
        except (TypeError, ValueError) as error:
            raise AuthenticationFailedError(f"Invalid expiresIn value: {result.get('expiresIn')!r}") from error

        return BearerToken.issued(access_token, expires_in)
