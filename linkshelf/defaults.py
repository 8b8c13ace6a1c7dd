"""
Title and thumbnail guesses derived from the URL alone, without any
network access. Used for the instant preview and as the fallback when a
page cannot be fetched.
"""

from urllib.parse import unquote, urlparse

from .youtube_utils import classify_url, get_youtube_thumbnail

UNTITLED = "Untitled Link"

_UNSPLASH = "https://images.unsplash.com/{}?w=400&h=200&fit=crop"

DOMAIN_THUMBNAILS = {
    "github.com": _UNSPLASH.format("photo-1618401471353-b98afee0b2eb"),
    "medium.com": _UNSPLASH.format("photo-1455390582262-044cdead277a"),
    "dev.to": _UNSPLASH.format("photo-1555066931-4365d14bab8c"),
    "stackoverflow.com": _UNSPLASH.format("photo-1516321318423-f06f85e504b3"),
    "reddit.com": _UNSPLASH.format("photo-1611262588024-d12430b98920"),
    "twitter.com": _UNSPLASH.format("photo-1611605698335-8b1569810432"),
    "x.com": _UNSPLASH.format("photo-1611605698335-8b1569810432"),
    "linkedin.com": _UNSPLASH.format("photo-1586953208448-b95a79798f07"),
    "instagram.com": _UNSPLASH.format("photo-1611262588024-d12430b98920"),
    "tiktok.com": _UNSPLASH.format("photo-1611605698335-8b1569810432"),
}

BLOG_THUMBNAIL = _UNSPLASH.format("photo-1455390582262-044cdead277a")
NEWS_THUMBNAIL = _UNSPLASH.format("photo-1504711434969-e33886168f5c")
SHOP_THUMBNAIL = _UNSPLASH.format("photo-1556742049-0cfed4f6a45d")

# (host keywords, placeholder), checked in order
CATEGORY_THUMBNAILS = [
    (("blog", "medium", "substack"), BLOG_THUMBNAIL),
    (("news", "times", "post"), NEWS_THUMBNAIL),
    (("shop", "store", "market"), SHOP_THUMBNAIL),
]


def _parse(url: str):
    parsed = urlparse(url.strip())
    if not parsed.scheme or not parsed.hostname:
        raise ValueError(f"Not an absolute URL: {url!r}")
    return parsed


def _host(parsed) -> str:
    host = parsed.hostname.lower()
    if host.startswith("www."):
        host = host[len("www."):]
    return host


def default_title(url: str) -> str:
    try:
        parsed = _parse(url)
        domain = _host(parsed)
    except (AttributeError, ValueError):
        return UNTITLED

    parts = [p for p in parsed.path.split("/") if p]
    if parts:
        last = unquote(parts[-1]).replace("-", " ").replace("_", " ")
        return f"{domain} - {last}"
    return domain[:1].upper() + domain[1:]


def default_thumbnail(url: str) -> str | None:
    classified = classify_url(url)
    if classified.is_youtube:
        return get_youtube_thumbnail(classified.video_id, "hq")

    try:
        domain = _host(_parse(url))
    except (AttributeError, ValueError):
        return None

    if domain in DOMAIN_THUMBNAILS:
        return DOMAIN_THUMBNAILS[domain]
    for key, thumbnail in DOMAIN_THUMBNAILS.items():
        if key in domain:
            return thumbnail

    for keywords, thumbnail in CATEGORY_THUMBNAILS:
        if any(word in domain for word in keywords):
            return thumbnail
    return None


# Saved links without their own thumbnail fall back to the same guess.
thumbnail_for_url = default_thumbnail
