from __future__ import annotations

from dataclasses import dataclass, field
import enum
import logging
import time
from typing import Any, Callable, Iterator

from symbl_client.auth import TokenAuthenticator
from symbl_client.http import StatusError
from symbl_client.models import ApiRequest
from symbl_client.session import AuthenticatedSession

logger = logging.getLogger(__name__)

HTTP_UNAUTHORIZED = 401


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    UNAUTHORIZED = "unauthorized"
    OTHER_STATUS = "other_status"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class DispatchOutcome:
    kind: OutcomeKind
    error: Exception | None = None

    @property
    def status_code(self) -> int | None:
        if isinstance(self.error, StatusError):
            return self.error.status_code
        return None


def classify_outcome(error: Exception | None) -> DispatchOutcome:
    if error is None:
        return DispatchOutcome(OutcomeKind.SUCCESS)
    if isinstance(error, StatusError):
        if error.status_code == HTTP_UNAUTHORIZED:
            return DispatchOutcome(OutcomeKind.UNAUTHORIZED, error)
        return DispatchOutcome(OutcomeKind.OTHER_STATUS, error)
    return DispatchOutcome(OutcomeKind.TRANSPORT, error)


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay policy: no wait before the first attempt, ``delay_seconds`` before each later one.

    ``sleep`` is called with the full delay and ignores any request timeout.
    """

    max_attempts: int = 3
    delay_seconds: float = 2.0
    sleep: Callable[[float], None] = field(default=time.sleep, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be 1 or greater")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be 0 or greater")

    def attempts(self) -> Iterator[int]:
        for attempt in range(1, self.max_attempts + 1):
            if attempt > 1:
                logger.debug("Sleeping %.1fs before attempt %d", self.delay_seconds, attempt)
                self.sleep(self.delay_seconds)
            yield attempt


class ResilientDispatcher:
    """Drop-in replacement for ``HttpClient.do`` that recovers from token expiry.

    A 401 triggers one re-authentication with the session's stored
    credentials before the next attempt. Other HTTP status errors are retried
    as-is, without re-authenticating. Any non-status error, and any failure to
    re-authenticate, ends the call immediately.
    """

    def __init__(
        self,
        session: AuthenticatedSession,
        authenticator: TokenAuthenticator,
        retry_policy: RetryPolicy | None = None,
        auth_timeout_seconds: float | None = None,
    ):
        self._session = session
        self._authenticator = authenticator
        self._retry_policy = retry_policy or RetryPolicy()
        self._auth_timeout_seconds = auth_timeout_seconds

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def do(self, request: ApiRequest, timeout: float | None = None) -> dict[str, Any]:
        transport = self._session.transport
        return self._dispatch(
            request.describe(),
            lambda: transport.do(request, timeout=timeout),
        )

    def do_file(self, url: str, file_path: str, timeout: float | None = None) -> dict[str, Any]:
        transport = self._session.transport
        return self._dispatch(
            f"POST {url}",
            lambda: transport.do_file(url, file_path, timeout=timeout),
        )

    def _dispatch(self, description: str, call: Callable[[], dict[str, Any]]) -> dict[str, Any]:
        last_error: Exception | None = None

        for attempt in self._retry_policy.attempts():
            result: dict[str, Any] = {}
            try:
                result = call()
                outcome = classify_outcome(None)
            except Exception as error:
                outcome = classify_outcome(error)

            if outcome.kind is OutcomeKind.SUCCESS:
                if attempt > 1:
                    logger.info("%s succeeded on attempt %d", description, attempt)
                return result

            if outcome.kind is OutcomeKind.TRANSPORT:
                logger.error("%s failed: %s", description, outcome.error)
                raise outcome.error

            last_error = outcome.error
            if outcome.kind is OutcomeKind.UNAUTHORIZED:
                logger.info("Received 401 for %s, re-authenticating", description)
                self._reauthenticate()
            else:
                # TODO: confirm whether non-401 statuses should be retried at all; they currently are.
                logger.warning(
                    "%s returned HTTP %s on attempt %d of %d",
                    description,
                    outcome.status_code,
                    attempt,
                    self._retry_policy.max_attempts,
                )

        logger.error("Giving up on %s after %d attempts", description, self._retry_policy.max_attempts)
        assert last_error is not None
        raise last_error

    def _reauthenticate(self) -> None:
        try:
            token = self._authenticator.authenticate(
                self._session.credentials(),
                timeout=self._auth_timeout_seconds,
            )
        except Exception:
            logger.error("Unable to re-authenticate with the platform")
            raise

        self._session.install(token)
        logger.info("Re-authenticated with the platform")
