"""
State of the add-link form.

Typing in the URL field schedules metadata extraction after a short
debounce. Every scheduled or manual extraction gets a generation number,
and results are only applied while their generation is still the latest,
so a slow fetch for an old URL never overwrites the preview of a newer one.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .config import get_settings
from .metadata import (
    UNAVAILABLE_ERROR,
    extract_metadata,
    extract_quick_metadata,
    normalize_url,
)
from .models import ExtractionResult, LinkDraft
from .youtube_utils import extract_youtube_video_id, is_youtube_url

logger = logging.getLogger(__name__)

QuickExtractor = Callable[[str], ExtractionResult]
FullExtractor = Callable[[str], Awaitable[ExtractionResult]]


def looks_like_url(text: str) -> bool:
    return bool(text) and ("." in text or text.startswith("http"))


class AddLinkForm:
    def __init__(
        self,
        extract_quick: QuickExtractor = extract_quick_metadata,
        extract_full: FullExtractor = extract_metadata,
        debounce_seconds: Optional[float] = None,
    ):
        self._extract_quick = extract_quick
        self._extract_full = extract_full
        if debounce_seconds is None:
            debounce_seconds = get_settings().debounce_seconds
        self.debounce_seconds = debounce_seconds
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None
        self._clear_fields()

    def _clear_fields(self) -> None:
        self.url = ""
        self.title = ""
        self.description = ""
        self.thumbnail = ""
        self.is_loading = False
        self.is_auto_extracted = False
        self.has_error = False
        self.error_message: Optional[str] = None

    @property
    def generation(self) -> int:
        return self._generation

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def reset(self) -> None:
        self._cancel_pending()
        self._next_generation()
        self._clear_fields()

    def on_url_change(self, text: str) -> Optional[asyncio.Task]:
        """
        Record new URL input and schedule a debounced extraction.

        Must be called from a running event loop. Returns the scheduled
        task, or None when the text does not look like a URL yet.
        """
        self.url = text
        self._cancel_pending()
        generation = self._next_generation()

        if not looks_like_url(text):
            self.is_loading = False
            return None

        self._pending = asyncio.get_running_loop().create_task(
            self._debounced(text, generation)
        )
        return self._pending

    async def _debounced(self, text: str, generation: int) -> None:
        await asyncio.sleep(self.debounce_seconds)
        await self._extract(text, generation)

    async def on_url_blur(self) -> None:
        if self.url and not self.is_auto_extracted and not self.is_loading:
            await self.refresh()

    async def refresh(self) -> None:
        if self.url:
            self._cancel_pending()
            await self._extract(self.url, self._next_generation())

    async def _extract(self, text: str, generation: int) -> None:
        if not text.strip():
            return
        url = normalize_url(text)

        quick = self._extract_quick(url)
        if generation != self._generation:
            return
        self.title = quick.title or ""
        self.thumbnail = quick.thumbnail or ""
        self.is_loading = True
        self.has_error = False
        self.error_message = None

        try:
            full = await self._extract_full(url)
        except Exception:
            logger.exception(f"Metadata extraction crashed for {url}")
            if generation == self._generation:
                self.is_loading = False
                self.has_error = True
                self.error_message = UNAVAILABLE_ERROR
            return

        if generation != self._generation:
            logger.debug(f"Dropping stale metadata for {url}")
            return
        self.title = full.title or quick.title or ""
        self.description = full.description or ""
        self.thumbnail = full.thumbnail or quick.thumbnail or ""
        self.is_loading = False
        self.is_auto_extracted = True
        self.has_error = bool(full.error)
        self.error_message = full.error

    def edit_title(self, value: str) -> None:
        self.title = value

    def edit_description(self, value: str) -> None:
        self.description = value

    def edit_thumbnail(self, value: str) -> None:
        self.thumbnail = value
        self.is_auto_extracted = False

    @property
    def is_valid(self) -> bool:
        return bool(self.url.strip()) and not self.is_loading

    @property
    def show_youtube_indicator(self) -> bool:
        if not self.url.strip():
            return False
        url = normalize_url(self.url)
        return is_youtube_url(url) and extract_youtube_video_id(url) is not None

    def submit(self) -> Optional[LinkDraft]:
        """
        Turn the form into a LinkDraft and reset it.

        Returns None when no URL was entered. A blank title falls back to
        the URL itself.
        """
        if not self.url.strip():
            return None
        url = normalize_url(self.url)
        draft = LinkDraft(
            url=url,
            title=self.title.strip() or url,
            description=self.description.strip() or None,
            thumbnail=self.thumbnail.strip() or None,
        )
        self.reset()
        return draft
