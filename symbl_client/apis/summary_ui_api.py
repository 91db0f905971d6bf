from __future__ import annotations

import logging
import posixpath
from urllib.parse import quote, urlparse

from symbl_client.config import AppSettings
from symbl_client.dispatcher import ResilientDispatcher
from symbl_client.errors import InvalidInputError
from symbl_client.models import ApiRequest, SummaryUiRequest, SummaryUiResult
from symbl_client.validation import require_values, validate_payload

logger = logging.getLogger(__name__)

SUMMARY_UI_PATH = "/v1/conversations/{conversation_id}/experiences"

AUDIO_EXTENSIONS = frozenset({"mp3", "mpeg", "wav"})

TEXT_SUMMARY_NAME = "verbose-text-summary"
AUDIO_SUMMARY_NAME = "audio-summary"
VIDEO_SUMMARY_NAME = "video-summary"


class SummaryUiApi:
    def __init__(self, settings: AppSettings, dispatcher: ResilientDispatcher):
        self._settings = settings
        self._dispatcher = dispatcher

    def get_summary_ui(self, conversation_id: str, uri: str = "") -> SummaryUiResult:
        """Pick the summary experience from the media URI.

        No URI means a text summary. Otherwise the path extension decides:
        audio extensions get an audio summary, everything else is treated as
        video. A URI whose path has no extension is rejected.
        """
        require_values(conversation_id=conversation_id)

        if not uri:
            return self.get_text_summary_ui(conversation_id, SummaryUiRequest(name=TEXT_SUMMARY_NAME))

        extension = posixpath.splitext(urlparse(uri).path)[1].lstrip(".").lower()
        if not extension:
            raise InvalidInputError(f"URI has no file extension: {uri}")
        logger.debug("Summary UI media extension: %s", extension)

        if extension in AUDIO_EXTENSIONS:
            return self.get_audio_summary_ui(
                conversation_id,
                SummaryUiRequest(name=AUDIO_SUMMARY_NAME, audio_url=uri),
            )

        return self.get_video_summary_ui(
            conversation_id,
            SummaryUiRequest(name=VIDEO_SUMMARY_NAME, video_url=uri),
        )

    def get_text_summary_ui(self, conversation_id: str, request: SummaryUiRequest) -> SummaryUiResult:
        return self._post(conversation_id, request)

    def get_audio_summary_ui(self, conversation_id: str, request: SummaryUiRequest) -> SummaryUiResult:
        require_values(audio_url=request.audio_url)
        return self._post(conversation_id, request)

    def get_video_summary_ui(self, conversation_id: str, request: SummaryUiRequest) -> SummaryUiResult:
        require_values(video_url=request.video_url)
        return self._post(conversation_id, request)

    def _post(self, conversation_id: str, request: SummaryUiRequest) -> SummaryUiResult:
        require_values(conversation_id=conversation_id)
        validate_payload(request)
        url = self._settings.url(SUMMARY_UI_PATH.format(conversation_id=quote(conversation_id, safe="")))
        result = self._dispatcher.do(ApiRequest("POST", url, body=request.to_payload()))
        summary = SummaryUiResult.from_payload(result)
        logger.info("Summary UI %s ready for conversation %s", summary.name, conversation_id)
        return summary
