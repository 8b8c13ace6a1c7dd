"""
Two-phase metadata extraction for a link being added.

The quick phase is synchronous and uses only the URL, so a preview can be
shown straight away. The full phase fetches the page through the relay
chain and replaces the quick guess when it settles.
"""

import logging
from typing import Optional

from .config import get_settings
from .defaults import UNTITLED, default_thumbnail, default_title
from .errors import PageFetchError
from .fetcher import PageFetcher
from .html_meta import parse_page_meta
from .models import ExtractionResult
from .youtube_utils import classify_url, get_youtube_thumbnail

logger = logging.getLogger(__name__)

YOUTUBE_TITLE = "YouTube Video"
RESTRICTED_ERROR = "restricted-access: default information only"
UNAVAILABLE_ERROR = "metadata unavailable"


def normalize_url(raw: str) -> str:
    url = raw.strip()
    if not url.lower().startswith(("http://", "https://")):
        url = "https://" + url
    return url


def default_fetcher() -> PageFetcher:
    settings = get_settings()
    return PageFetcher(settings.relays, timeout=settings.relay_timeout)


def extract_quick_metadata(url: str) -> ExtractionResult:
    try:
        url = normalize_url(url)
        classified = classify_url(url)
        if classified.is_youtube:
            return ExtractionResult(
                title=YOUTUBE_TITLE,
                thumbnail=get_youtube_thumbnail(classified.video_id, "hq"),
            )
        return ExtractionResult(
            title=default_title(url), thumbnail=default_thumbnail(url)
        )
    except Exception:
        logger.exception(f"Quick metadata failed for {url!r}")
        return ExtractionResult(title=UNTITLED)


async def _extract_full(url: str, fetcher: PageFetcher) -> ExtractionResult:
    if classify_url(url).is_youtube:
        logger.debug(f"{url}: YouTube link, thumbnail derived from video id")
        return extract_quick_metadata(url)

    logger.debug(f"{url}: fetching")
    try:
        html = await fetcher.fetch_async(url)
    except PageFetchError as e:
        logger.warning(f"{url}: fetch failed, using defaults ({e})")
        return ExtractionResult(
            title=default_title(url),
            thumbnail=default_thumbnail(url),
            error=RESTRICTED_ERROR,
        )

    meta = parse_page_meta(html)
    logger.debug(f"{url}: parsed {meta}")
    return ExtractionResult(
        title=meta.title or default_title(url),
        description=meta.description,
        thumbnail=meta.image or default_thumbnail(url),
    )


async def extract_metadata(
    url: str, fetcher: Optional[PageFetcher] = None
) -> ExtractionResult:
    """
    Best-effort title, description and thumbnail for ``url``.

    Never raises: a page that cannot be fetched yields the URL-derived
    defaults with ``error`` set, and any other failure yields an
    "Untitled Link" result.
    """
    try:
        url = normalize_url(url)
        return await _extract_full(url, fetcher or default_fetcher())
    except Exception:
        logger.exception(f"Metadata extraction failed for {url!r}")
        return ExtractionResult(title=UNTITLED, error=UNAVAILABLE_ERROR)
