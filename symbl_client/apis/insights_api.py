from __future__ import annotations

from urllib.parse import quote

from symbl_client.config import AppSettings
from symbl_client.dispatcher import ResilientDispatcher
from symbl_client.models import ApiRequest, InsightsResult
from symbl_client.validation import require_values

INSIGHT_PATH = "/v1/conversations/{conversation_id}/{insight}"


class InsightsApi:
    def __init__(self, settings: AppSettings, dispatcher: ResilientDispatcher):
        self._settings = settings
        self._dispatcher = dispatcher

    def get_topics(self, conversation_id: str) -> InsightsResult:
        return self._get(conversation_id, "topics", "topics")

    def get_questions(self, conversation_id: str) -> InsightsResult:
        return self._get(conversation_id, "questions", "questions")

    def get_action_items(self, conversation_id: str) -> InsightsResult:
        return self._get(conversation_id, "action-items", "actionItems")

    def get_follow_ups(self, conversation_id: str) -> InsightsResult:
        return self._get(conversation_id, "follow-ups", "followUps")

    def get_messages(self, conversation_id: str) -> InsightsResult:
        return self._get(conversation_id, "messages", "messages")

    def _get(self, conversation_id: str, insight: str, result_key: str) -> InsightsResult:
        require_values(conversation_id=conversation_id)
        path = INSIGHT_PATH.format(conversation_id=quote(conversation_id, safe=""), insight=insight)
        result = self._dispatcher.do(ApiRequest("GET", self._settings.url(path)))
        return InsightsResult.from_payload(result_key, result)
