import json
import logging
import os
import tempfile
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Tuple

from pydantic import TypeAdapter, ValidationError

from .errors import LinkNotFoundError
from .models import Link, LinkDraft

logger = logging.getLogger(__name__)

DEFAULT_KEY = "saved-links"

Links = Tuple[Link, ...]
_links_adapter = TypeAdapter(Links)


class LinkStore:
    """
    Saved links, newest first, mirrored to a JSON state file.

    The file holds a JSON object of keyed entries; the collection is the
    entry under ``key``. Every mutation rewrites the whole collection and
    returns the new snapshot.
    """

    def __init__(self, path: Path, key: str = DEFAULT_KEY):
        self.path = Path(path)
        self.key = key
        self._links: Links = ()
        self._lock = threading.Lock()

    @property
    def links(self) -> Links:
        return self._links

    def _read_entries(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("state file is not a JSON object")
        return data

    def load(self) -> Links:
        with self._lock:
            try:
                raw = self._read_entries().get(self.key)
                self._links = _links_adapter.validate_python(raw or [])
            except (OSError, ValueError, ValidationError) as e:
                # json.JSONDecodeError is a ValueError
                logger.error(f"Could not load saved links from {self.path}: {e}")
                self._links = ()
            return self._links

    def _save(self, links: Links) -> None:
        try:
            entries = self._read_entries()
        except (OSError, ValueError):
            entries = {}
        entries[self.key] = [
            link.model_dump(mode="json", by_alias=True) for link in links
        ]

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(entries, f, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            os.unlink(tmp)
            raise
        self._links = links

    def add(self, draft: LinkDraft) -> Links:
        link = Link(
            id=uuid.uuid4().hex,
            title=draft.title,
            url=draft.url,
            description=draft.description,
            thumbnail=draft.thumbnail,
            added_at=datetime.now(timezone.utc),
        )
        with self._lock:
            links = (link,) + self._links
            self._save(links)
        logger.info(f"Saved link {link.id} ({link.url})")
        return links

    def delete(self, link_id: str) -> Links:
        with self._lock:
            remaining = tuple(l for l in self._links if l.id != link_id)
            if len(remaining) == len(self._links):
                raise LinkNotFoundError(link_id)
            self._save(remaining)
        logger.info(f"Deleted link {link_id}")
        return remaining

    def get(self, link_id: str) -> Link:
        for link in self._links:
            if link.id == link_id:
                return link
        raise LinkNotFoundError(link_id)
