from bs4 import BeautifulSoup

from .models import PageMeta

TITLE_TAGS = ("og:title", "twitter:title")
DESCRIPTION_TAGS = ("og:description", "twitter:description", "description")
IMAGE_TAGS = ("og:image", "twitter:image", "twitter:image:src")


def _clean(value) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _meta_content(soup: BeautifulSoup, key: str) -> str | None:
    # Publishers mix up property= and name= for og/twitter tags.
    for attr in ("property", "name"):
        for tag in soup.find_all("meta", attrs={attr: key}):
            content = _clean(tag.get("content"))
            if content:
                return content
    return None


def _first(soup: BeautifulSoup, keys) -> str | None:
    for key in keys:
        content = _meta_content(soup, key)
        if content:
            return content
    return None


def parse_page_meta(html: str) -> PageMeta:
    """Pull social-preview title, description and image out of a page."""
    soup = BeautifulSoup(html or "", "html.parser")

    title = _first(soup, TITLE_TAGS)
    if not title and soup.title is not None:
        title = _clean(soup.title.get_text())

    return PageMeta(
        title=title,
        description=_first(soup, DESCRIPTION_TAGS),
        image=_first(soup, IMAGE_TAGS),
    )
