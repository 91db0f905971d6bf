from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable
from urllib.parse import quote

from symbl_client.config import AppSettings
from symbl_client.dispatcher import ResilientDispatcher
from symbl_client.errors import InvalidInputError, JobTimeoutError
from symbl_client.models import ApiRequest, JobConversation, JobStatus
from symbl_client.validation import require_values

logger = logging.getLogger(__name__)

PROCESS_TEXT_PATH = "/v1/process/text"
APPEND_TEXT_PATH = "/v1/process/text/{conversation_id}"
PROCESS_URL_PATHS = {
    "audio": "/v1/process/audio/url",
    "video": "/v1/process/video/url",
}
PROCESS_AUDIO_FILE_PATH = "/v1/process/audio"
JOB_STATUS_PATH = "/v1/job/{job_id}"

DEFAULT_WAIT_SECONDS = 300.0
DEFAULT_POLL_SECONDS = 5.0


class AsyncApi:
    def __init__(
        self,
        settings: AppSettings,
        dispatcher: ResilientDispatcher,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings
        self._dispatcher = dispatcher
        self._sleep = sleep
        self._clock = clock

    def post_text(self, messages: list[str], name: str = "") -> JobConversation:
        require_values(messages=messages)
        payload: dict[str, Any] = {"messages": self._build_messages(messages)}
        if name:
            payload["name"] = name

        result = self._dispatcher.do(ApiRequest("POST", self._settings.url(PROCESS_TEXT_PATH), body=payload))
        job = JobConversation.from_payload(result)
        logger.info("Submitted text job %s for conversation %s", job.job_id, job.conversation_id)
        return job

    def post_append_text(self, conversation_id: str, messages: list[str]) -> JobConversation:
        require_values(conversation_id=conversation_id, messages=messages)
        url = self._settings.url(APPEND_TEXT_PATH.format(conversation_id=quote(conversation_id, safe="")))
        result = self._dispatcher.do(ApiRequest("PUT", url, body={"messages": self._build_messages(messages)}))
        job = JobConversation.from_payload(result)
        logger.info("Submitted append-text job %s for conversation %s", job.job_id, conversation_id)
        return job

    def post_url(self, media_url: str, media: str = "audio", name: str = "") -> JobConversation:
        require_values(media_url=media_url)
        path = PROCESS_URL_PATHS.get(media)
        if path is None:
            raise InvalidInputError(f"Unsupported media type: {media!r}")

        payload: dict[str, Any] = {"url": media_url}
        if name:
            payload["name"] = name
        result = self._dispatcher.do(ApiRequest("POST", self._settings.url(path), body=payload))
        return JobConversation.from_payload(result)

    def post_file(self, file_path: str) -> JobConversation:
        require_values(file_path=file_path)
        if not os.path.isfile(file_path):
            raise InvalidInputError(f"File not found: {file_path}")

        result = self._dispatcher.do_file(self._settings.url(PROCESS_AUDIO_FILE_PATH), file_path)
        return JobConversation.from_payload(result)

    def get_job_status(self, job_id: str) -> JobStatus:
        require_values(job_id=job_id)
        url = self._settings.url(JOB_STATUS_PATH.format(job_id=quote(job_id, safe="")))
        result = self._dispatcher.do(ApiRequest("GET", url))
        return JobStatus(id=str(result.get("id") or job_id), status=str(result.get("status", "")))

    def wait_for_job_complete(
        self,
        job_id: str,
        wait_seconds: float = DEFAULT_WAIT_SECONDS,
        poll_seconds: float = DEFAULT_POLL_SECONDS,
    ) -> JobStatus:
        """Poll the job until it completes or fails.

        Raises ``JobTimeoutError`` once ``wait_seconds`` have elapsed without a
        terminal status.
        """
        require_values(job_id=job_id)
        deadline = self._clock() + wait_seconds

        while True:
            status = self.get_job_status(job_id)
            logger.debug("Job %s status: %s", job_id, status.status)
            if status.is_completed or status.is_failed:
                return status

            if self._clock() + poll_seconds > deadline:
                raise JobTimeoutError(job_id, wait_seconds)
            self._sleep(poll_seconds)

    @staticmethod
    def _build_messages(messages: list[str]) -> list[dict[str, Any]]:
        return [
            {"payload": {"content": message, "contentType": "text/plain"}}
            for message in messages
        ]
