from __future__ import annotations

import logging
from urllib.parse import quote

from symbl_client.config import AppSettings
from symbl_client.dispatcher import ResilientDispatcher
from symbl_client.models import (
    ApiRequest,
    Bookmark,
    BookmarkRequest,
    BookmarksResult,
    BookmarkSummary,
    BookmarksSummaryResult,
)
from symbl_client.validation import require_values, validate_payload

logger = logging.getLogger(__name__)

BOOKMARKS_PATH = "/v1/conversations/{conversation_id}/bookmarks"
BOOKMARK_BY_ID_PATH = "/v1/conversations/{conversation_id}/bookmarks/{bookmark_id}"
BOOKMARKS_SUMMARY_PATH = "/v1/conversations/{conversation_id}/bookmarks-summary"
BOOKMARK_SUMMARY_BY_ID_PATH = "/v1/conversations/{conversation_id}/bookmarks-summary/{bookmark_id}"


class BookmarksApi:
    def __init__(self, settings: AppSettings, dispatcher: ResilientDispatcher):
        self._settings = settings
        self._dispatcher = dispatcher

    def _url(self, template: str, **segments: str) -> str:
        encoded = {name: quote(value, safe="") for name, value in segments.items()}
        return self._settings.url(template.format(**encoded))

    def get_bookmarks(self, conversation_id: str) -> BookmarksResult:
        require_values(conversation_id=conversation_id)
        url = self._url(BOOKMARKS_PATH, conversation_id=conversation_id)
        result = self._dispatcher.do(ApiRequest("GET", url))
        return BookmarksResult.from_payload(result)

    def get_bookmark_by_id(self, conversation_id: str, bookmark_id: str) -> BookmarksResult:
        require_values(conversation_id=conversation_id, bookmark_id=bookmark_id)
        url = self._url(BOOKMARK_BY_ID_PATH, conversation_id=conversation_id, bookmark_id=bookmark_id)
        result = self._dispatcher.do(ApiRequest("GET", url))
        return BookmarksResult.from_payload(result)

    def create_bookmark(self, conversation_id: str, request: BookmarkRequest) -> Bookmark:
        validate_payload(request)
        require_values(conversation_id=conversation_id)
        url = self._url(BOOKMARKS_PATH, conversation_id=conversation_id)
        result = self._dispatcher.do(ApiRequest("POST", url, body=request.to_payload()))
        logger.info("Created bookmark %s in conversation %s", result.get("id"), conversation_id)
        return Bookmark.from_payload(result)

    def update_bookmark(self, conversation_id: str, bookmark_id: str, request: BookmarkRequest) -> Bookmark:
        validate_payload(request)
        require_values(conversation_id=conversation_id, bookmark_id=bookmark_id)
        url = self._url(BOOKMARK_BY_ID_PATH, conversation_id=conversation_id, bookmark_id=bookmark_id)
        result = self._dispatcher.do(ApiRequest("PUT", url, body=request.to_payload()))
        return Bookmark.from_payload(result)

    def delete_bookmark(self, conversation_id: str, bookmark_id: str) -> None:
        require_values(conversation_id=conversation_id, bookmark_id=bookmark_id)
        url = self._url(BOOKMARK_BY_ID_PATH, conversation_id=conversation_id, bookmark_id=bookmark_id)
        self._dispatcher.do(ApiRequest("DELETE", url))
        logger.info("Deleted bookmark %s from conversation %s", bookmark_id, conversation_id)

    def get_summary_of_bookmark(self, conversation_id: str, bookmark_id: str) -> BookmarkSummary:
        require_values(conversation_id=conversation_id, bookmark_id=bookmark_id)
        url = self._url(BOOKMARK_SUMMARY_BY_ID_PATH, conversation_id=conversation_id, bookmark_id=bookmark_id)
        result = self._dispatcher.do(ApiRequest("GET", url))
        return BookmarkSummary.from_payload(result)

    def get_summary_of_bookmarks(
        self,
        conversation_id: str,
        filters: list[str] | None = None,
    ) -> BookmarksSummaryResult:
        require_values(conversation_id=conversation_id)
        url = self._url(BOOKMARKS_SUMMARY_PATH, conversation_id=conversation_id)
        params = {"filter": ",".join(filters)} if filters else None
        result = self._dispatcher.do(ApiRequest("GET", url, params=params))
        return BookmarksSummaryResult.from_payload(result)
