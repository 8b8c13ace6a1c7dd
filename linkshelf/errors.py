class LinkshelfError(Exception):
    """Base class for errors raised by linkshelf."""


class PageFetchError(LinkshelfError):
    """Every relay failed to return usable page content."""


class LinkNotFoundError(LinkshelfError):
    def __init__(self, link_id: str):
        super().__init__(f"No saved link with id {link_id!r}")
        self.link_id = link_id
