from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from symbl_client.validation import validate_payload

DEFAULT_AUTH_TYPE = "application"


@dataclass(frozen=True)
class Credentials:
    app_id: str = field(metadata={"required": True, "json": "appId"})
    app_secret: str = field(repr=False, metadata={"required": True, "json": "appSecret"})
    auth_type: str = DEFAULT_AUTH_TYPE

    def validate(self) -> None:
        validate_payload(self)

    def to_payload(self) -> dict[str, str]:
        return {
            "type": self.auth_type or DEFAULT_AUTH_TYPE,
            "appId": self.app_id,
            "appSecret": self.app_secret,
        }


@dataclass(frozen=True)
class BearerToken:
    value: str = field(repr=False)
    expires_at: datetime

    @staticmethod
    def issued(value: str, expires_in_seconds: int | float) -> "BearerToken":
        now = datetime.now(timezone.utc)
        return BearerToken(value=value, expires_at=now + timedelta(seconds=expires_in_seconds))

    def expires_in(self) -> float:
        return (self.expires_at - datetime.now(timezone.utc)).total_seconds()

    @property
    def is_expired(self) -> bool:
        return self.expires_in() <= 0


@dataclass(frozen=True)
class ApiRequest:
    method: str
    url: str
    body: dict[str, Any] | None = None
    params: dict[str, Any] | None = None

    def describe(self) -> str:
        return f"{self.method} {self.url}"


# Bookmarks

@dataclass(frozen=True)
class BookmarkRequest:
    label: str = field(metadata={"required": True})
    description: str = field(metadata={"required": True})
    user: dict[str, str] = field(default_factory=dict, metadata={"required": True})
    begin_time_offset: int = 0
    duration: int = 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "description": self.description,
            "user": dict(self.user),
            "beginTimeOffset": self.begin_time_offset,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class Bookmark:
    id: str
    label: str = ""
    description: str = ""
    user: dict[str, Any] = field(default_factory=dict)
    begin_time_offset: int = 0
    duration: int = 0
    message_refs: tuple[dict[str, Any], ...] = ()

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "Bookmark":
        return Bookmark(
            id=str(payload.get("id", "")),
            label=str(payload.get("label", "")),
            description=str(payload.get("description", "")),
            user=dict(payload.get("user") or {}),
            begin_time_offset=int(payload.get("beginTimeOffset") or 0),
            duration=int(payload.get("duration") or 0),
            message_refs=tuple(payload.get("messageRefs") or ()),
        )


@dataclass(frozen=True)
class BookmarksResult:
    bookmarks: tuple[Bookmark, ...]

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "BookmarksResult":
        items = payload.get("bookmarks")
        if items is None and "id" in payload:
            items = [payload]
        return BookmarksResult(bookmarks=tuple(Bookmark.from_payload(item) for item in items or ()))


@dataclass(frozen=True)
class BookmarkSummary:
    id: str
    label: str = ""
    summary: tuple[dict[str, Any], ...] = ()

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "BookmarkSummary":
        return BookmarkSummary(
            id=str(payload.get("id", "")),
            label=str(payload.get("label", "")),
            summary=tuple(payload.get("summary") or ()),
        )


@dataclass(frozen=True)
class BookmarksSummaryResult:
    bookmarks: tuple[BookmarkSummary, ...]

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "BookmarksSummaryResult":
        return BookmarksSummaryResult(
            bookmarks=tuple(BookmarkSummary.from_payload(item) for item in payload.get("bookmarks") or ())
        )


# Summary UI

@dataclass(frozen=True)
class SummaryUiRequest:
    name: str = field(metadata={"required": True})
    audio_url: str = ""
    video_url: str = ""
    logo: str = ""
    favicon: str = ""
    read_only: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name}
        if self.audio_url:
            payload["audioUrl"] = self.audio_url
        if self.video_url:
            payload["videoUrl"] = self.video_url
        if self.logo:
            payload["logo"] = self.logo
        if self.favicon:
            payload["favicon"] = self.favicon
        if self.read_only:
            payload["readOnly"] = True
        return payload


@dataclass(frozen=True)
class SummaryUiResult:
    name: str
    url: str

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "SummaryUiResult":
        return SummaryUiResult(name=str(payload.get("name", "")), url=str(payload.get("url", "")))


# Async processing

@dataclass(frozen=True)
class JobConversation:
    job_id: str
    conversation_id: str

    @staticmethod
    def from_payload(payload: dict[str, Any]) -> "JobConversation":
        return JobConversation(
            job_id=str(payload.get("jobId", "")),
            conversation_id=str(payload.get("conversationId", "")),
        )


@dataclass(frozen=True)
class JobStatus:
    id: str
    status: str

    @property
    def is_completed(self) -> bool:
        return self.status == "completed"

    @property
    def is_failed(self) -> bool:
        return self.status == "failed"


@dataclass(frozen=True)
class InsightsResult:
    kind: str
    items: tuple[dict[str, Any], ...]

    @staticmethod
    def from_payload(kind: str, payload: dict[str, Any]) -> "InsightsResult":
        return InsightsResult(kind=kind, items=tuple(payload.get(kind) or ()))
