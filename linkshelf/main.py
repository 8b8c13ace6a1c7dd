from functools import lru_cache
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from .cards import to_card
from .config import get_settings
from .errors import LinkNotFoundError
from .fetcher import PageFetcher
from .metadata import extract_metadata, extract_quick_metadata, normalize_url
from .models import ExtractionResult, Link, LinkDraft
from .storage import LinkStore

app = FastAPI(title="linkshelf")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class LinkIn(BaseModel):
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None


@lru_cache()
def get_store() -> LinkStore:
    settings = get_settings()
    store = LinkStore(settings.state_file, key=settings.storage_key)
    store.load()
    return store


@lru_cache()
def get_fetcher() -> PageFetcher:
    settings = get_settings()
    return PageFetcher(settings.relays, timeout=settings.relay_timeout)


@app.get("/api/links")
def list_links(store: LinkStore = Depends(get_store)):
    cards = [to_card(link) for link in store.links]
    return {"links": cards, "count": len(cards)}


@app.post("/api/links", status_code=201, response_model=Link, response_model_by_alias=True)
def add_link(body: LinkIn, store: LinkStore = Depends(get_store)):
    if not body.url.strip():
        raise HTTPException(400, "URL required")
    url = normalize_url(body.url)
    try:
        draft = LinkDraft(
            url=url,
            title=(body.title or "").strip() or url,
            description=(body.description or "").strip() or None,
            thumbnail=(body.thumbnail or "").strip() or None,
        )
    except ValidationError:
        raise HTTPException(400, f"Invalid URL: {body.url}")
    links = store.add(draft)
    return links[0]


@app.delete("/api/links/{link_id}")
def delete_link(link_id: str, store: LinkStore = Depends(get_store)):
    try:
        store.delete(link_id)
    except LinkNotFoundError:
        raise HTTPException(404, f"No saved link with id {link_id}")
    return {"ok": True}


@app.get("/api/metadata/quick", response_model=ExtractionResult)
def quick_metadata(url: str = Query(..., min_length=1)):
    return extract_quick_metadata(url)


@app.get("/api/metadata", response_model=ExtractionResult)
async def full_metadata(
    url: str = Query(..., min_length=1),
    fetcher: PageFetcher = Depends(get_fetcher),
):
    return await extract_metadata(url, fetcher)


@app.get("/api/config")
def get_config():
    settings = get_settings()
    return {
        "relays": settings.relays,
        "relay_timeout": settings.relay_timeout,
        "debounce_seconds": settings.debounce_seconds,
        "storage_key": settings.storage_key,
    }
