"""
Pytest configuration and shared fixtures.
"""

from unittest.mock import Mock

import pytest

from linkshelf.errors import PageFetchError
from linkshelf.storage import LinkStore


ARTICLE_HTML = """
<html>
  <head>
    <title>  Plain Title  </title>
    <meta property="og:title" content="Open Graph Title">
    <meta name="twitter:description" content="Twitter description">
    <meta name="description" content="Meta description">
    <meta name="twitter:image" content="https://cdn.example.com/card.png">
  </head>
  <body><p>Hello</p></body>
</html>
"""


def relay_response(payload=None, status_code=200, json_error=False):
    """Build a fake requests.Response as returned by a relay."""
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 400
    if json_error:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = payload
    return resp


class FakeFetcher:
    """Stands in for PageFetcher; records every URL it was asked for."""

    def __init__(self, html=None, error=None):
        self.html = html
        self.error = error
        self.calls = []

    async def fetch_async(self, url):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.html


@pytest.fixture
def article_html():
    return ARTICLE_HTML


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "saved_links.json"


@pytest.fixture
def store(state_file):
    s = LinkStore(state_file)
    s.load()
    return s


@pytest.fixture
def failing_fetcher():
    return FakeFetcher(error=PageFetchError("all relays failed"))
