from urllib.parse import parse_qs, urlparse

from .models import UrlClass, UrlKind

WATCH_HOSTS = {"youtube.com", "m.youtube.com"}
SHORT_HOSTS = {"youtu.be"}

THUMBNAIL_HOST = "https://img.youtube.com/vi"
QUALITY_TIERS = {
    "max": "maxresdefault",
    "hq": "hqdefault",
    "mq": "mqdefault",
}


def _bare_host(hostname: str | None) -> str:
    host = (hostname or "").lower()
    if host.startswith("www."):
        host = host[len("www."):]
    return host


def classify_url(url: str) -> UrlClass:
    """
    Work out whether a URL points at a YouTube video.

    - youtube.com/watch?v=ID and m.youtube.com/watch?v=ID -> ID
    - youtu.be/ID -> ID
    - anything else, including URLs that fail to parse -> generic
    """
    try:
        parsed = urlparse(url.strip())
        host = _bare_host(parsed.hostname)
    except (AttributeError, ValueError):
        return UrlClass()

    video_id = None
    if host in WATCH_HOSTS and parsed.path == "/watch":
        vals = parse_qs(parsed.query).get("v")
        video_id = vals[0] if vals else None
    elif host in SHORT_HOSTS:
        video_id = parsed.path.lstrip("/").split("/")[0]

    if not video_id:
        return UrlClass()
    return UrlClass(kind=UrlKind.YOUTUBE, video_id=video_id)


def extract_youtube_video_id(url: str) -> str | None:
    return classify_url(url).video_id


def is_youtube_url(url: str) -> bool:
    """Host-only check, true for channel and playlist pages too."""
    try:
        host = _bare_host(urlparse(url.strip()).hostname)
    except (AttributeError, ValueError):
        return False
    return "youtube.com" in host or host in SHORT_HOSTS


def get_youtube_thumbnail(video_id: str, quality: str = "hq") -> str:
    try:
        tier = QUALITY_TIERS[quality]
    except KeyError:
        raise ValueError(f"Unknown thumbnail quality: {quality}") from None
    return f"{THUMBNAIL_HOST}/{video_id}/{tier}.jpg"


def display_domain(url: str) -> str:
    try:
        host = urlparse(url.strip()).hostname
    except (AttributeError, ValueError):
        return url
    if not host:
        return url
    return _bare_host(host)
