from datetime import datetime, timezone
from typing import Optional

from .defaults import thumbnail_for_url
from .models import Link, LinkCard
from .youtube_utils import display_domain, extract_youtube_video_id, is_youtube_url


def format_added_at(added_at: datetime, now: Optional[datetime] = None) -> str:
    """Relative age for recent links, a plain date for older ones."""
    now = now or datetime.now(timezone.utc)
    if added_at.tzinfo is None:
        added_at = added_at.replace(tzinfo=timezone.utc)
    hours = int((now - added_at).total_seconds() // 3600)

    if hours < 1:
        return "just now"
    if hours < 24:
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    if hours < 24 * 7:
        days = hours // 24
        return "1 day ago" if days == 1 else f"{days} days ago"
    return f"{added_at:%b} {added_at.day}, {added_at.year}"


def to_card(link: Link, now: Optional[datetime] = None) -> LinkCard:
    is_youtube = is_youtube_url(link.url)
    return LinkCard(
        id=link.id,
        title=link.title,
        url=link.url,
        description=link.description,
        thumbnail=link.thumbnail or thumbnail_for_url(link.url),
        domain=display_domain(link.url),
        is_youtube=is_youtube,
        has_youtube_thumbnail=is_youtube and bool(extract_youtube_video_id(link.url)),
        added_at=link.added_at,
        added_label=format_added_at(link.added_at, now),
    )
