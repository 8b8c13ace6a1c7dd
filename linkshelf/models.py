from datetime import datetime, timezone
from enum import Enum
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _check_absolute_http_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("url must be an absolute http(s) URL")
    return value


class Link(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    url: str
    description: str | None = None
    thumbnail: str | None = None
    added_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="addedAt"
    )

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        return _check_absolute_http_url(value)


class LinkDraft(BaseModel):
    """A link the user asked to save, before it gets an id and timestamp."""

    url: str
    title: str
    description: str | None = None
    thumbnail: str | None = None

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        return _check_absolute_http_url(value)


class ExtractionResult(BaseModel):
    title: str | None = None
    description: str | None = None
    thumbnail: str | None = None
    error: str | None = None


class PageMeta(BaseModel):
    title: str | None = None
    description: str | None = None
    image: str | None = None


class UrlKind(str, Enum):
    YOUTUBE = "youtube"
    GENERIC = "generic"


class UrlClass(BaseModel):
    kind: UrlKind = UrlKind.GENERIC
    video_id: str | None = None

    @property
    def is_youtube(self) -> bool:
        return self.kind is UrlKind.YOUTUBE


class LinkCard(BaseModel):
    id: str
    title: str
    url: str
    description: str | None = None
    thumbnail: str | None = None
    domain: str
    is_youtube: bool = False
    has_youtube_thumbnail: bool = False
    added_at: datetime
    added_label: str
