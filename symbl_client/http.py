from __future__ import annotations

import logging
import mimetypes
import threading
from typing import Any

import requests

from symbl_client.errors import SymblClientError
from symbl_client.models import ApiRequest

logger = logging.getLogger(__name__)


class StatusError(SymblClientError):
    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        reason: str = "",
        body: str = "",
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"{method} {url}: {status_code} {reason}".rstrip())

    @staticmethod
    def from_response(response: requests.Response) -> "StatusError":
        request = response.request
        return StatusError(
            method=str(getattr(request, "method", "") or ""),
            url=str(getattr(request, "url", "") or response.url or ""),
            status_code=response.status_code,
            reason=str(response.reason or ""),
            body=response.text[:500],
        )


class HttpClient:
    def __init__(self, timeout_seconds: float = 30, session: requests.Session | None = None):
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )
        self._auth_lock = threading.Lock()
        self._authorization: str | None = None

    def set_authorization(self, token: str | None) -> None:
        with self._auth_lock:
            self._authorization = token

    def _auth_headers(self) -> dict[str, str]:
        with self._auth_lock:
            token = self._authorization
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def do(self, request: ApiRequest, timeout: float | None = None) -> dict[str, Any]:
        logger.debug("Calling %s", request.describe())
        response = self._session.request(
            request.method,
            request.url,
            headers=self._auth_headers(),
            json=request.body,
            params=request.params,
            timeout=timeout if timeout is not None else self._timeout_seconds,
        )
        return self._decode(response)

    def do_file(self, url: str, file_path: str, timeout: float | None = None) -> dict[str, Any]:
        content_type = mimetypes.guess_type(file_path)[0] or "application/octet-stream"
        headers = self._auth_headers()
        headers["Content-Type"] = content_type

        logger.debug("Uploading %s to %s", file_path, url)
        with open(file_path, "rb") as upload:
            response = self._session.post(
                url,
                headers=headers,
                data=upload,
                timeout=timeout if timeout is not None else self._timeout_seconds,
            )
        return self._decode(response)

    @staticmethod
    def _decode(response: requests.Response) -> dict[str, Any]:
        if not response.ok:
            error = StatusError.from_response(response)
            logger.debug("HTTP %s from %s %s", error.status_code, error.method, error.url)
            raise error

        if not response.content:
            return {}
        parsed = response.json()
        if isinstance(parsed, dict):
            return parsed
        return {"value": parsed}
