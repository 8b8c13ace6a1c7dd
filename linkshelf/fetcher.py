"""
Fetch a remote page's HTML through a chain of CORS relay services.
"""

import asyncio
import logging
from typing import Iterable, List, Optional
from urllib.parse import quote

import requests

from .errors import PageFetchError

logger = logging.getLogger(__name__)

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
BODY_FIELDS = ("contents", "body")


class Relay:
    """One relay endpoint, described by a URL template."""

    def __init__(self, template: str):
        if "{url}" not in template and "{quoted}" not in template:
            raise ValueError(f"Relay template has no target placeholder: {template}")
        self.template = template

    def build_url(self, target: str) -> str:
        return self.template.replace("{quoted}", quote(target, safe="")).replace(
            "{url}", target
        )

    @staticmethod
    def extract_html(payload) -> Optional[str]:
        if not isinstance(payload, dict):
            return None
        for field in BODY_FIELDS:
            value = payload.get(field)
            if isinstance(value, str) and value:
                return value
        return None

    def __repr__(self) -> str:
        return f"Relay({self.template!r})"


class PageFetcher:
    def __init__(self, relays: Iterable[str], timeout: float = 8.0):
        self.relays: List[Relay] = [Relay(t) for t in relays]
        self.timeout = timeout

    def _try_relay(self, relay: Relay, url: str) -> Optional[str]:
        relay_url = relay.build_url(url)
        try:
            resp = requests.get(
                relay_url, headers={"Accept": ACCEPT_HTML}, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"Relay {relay_url} unreachable: {e}")
            return None

        if not resp.ok:
            logger.warning(f"Relay {relay_url} answered HTTP {resp.status_code}")
            return None

        try:
            payload = resp.json()
        except ValueError:
            logger.warning(f"Relay {relay_url} returned a non-JSON body")
            return None

        html = relay.extract_html(payload)
        if html is None:
            logger.warning(f"Relay {relay_url} response has no page content")
        return html

    def fetch(self, url: str) -> str:
        """
        Return the HTML of ``url``, trying each relay in order.

        Raises:
            PageFetchError: if no relay returned usable content
        """
        for relay in self.relays:
            html = self._try_relay(relay, url)
            if html is not None:
                logger.debug(f"Fetched {url} via {relay}")
                return html
        raise PageFetchError(
            f"Could not fetch {url} through any of {len(self.relays)} relays"
        )

    async def fetch_async(self, url: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.fetch, url)
