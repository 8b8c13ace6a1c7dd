import pytest

from linkshelf.models import UrlKind
from linkshelf.youtube_utils import (
    classify_url,
    display_domain,
    extract_youtube_video_id,
    get_youtube_thumbnail,
    is_youtube_url,
)


class TestClassifyUrl:
    """Tests for YouTube vs generic URL classification."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=abc123",
            "https://youtube.com/watch?v=abc123&t=42",
            "https://m.youtube.com/watch?v=abc123",
            "https://WWW.YouTube.com/watch?v=abc123",
            "https://youtu.be/abc123",
            "https://youtu.be/abc123?t=10",
        ],
    )
    def test_youtube_forms(self, url):
        result = classify_url(url)
        assert result.kind is UrlKind.YOUTUBE
        assert result.video_id == "abc123"

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/foo/bar",
            "https://www.youtube.com/channel/UC123",
            "https://www.youtube.com/watch",
            "https://youtu.be/",
            "https://notyoutube.com/watch?v=abc123",
        ],
    )
    def test_generic_forms(self, url):
        result = classify_url(url)
        assert result.kind is UrlKind.GENERIC
        assert result.video_id is None

    @pytest.mark.parametrize("url", ["", "not a url", "http://[::1", "://"])
    def test_malformed_urls_never_raise(self, url):
        assert classify_url(url).video_id is None


class TestExtractVideoId:
    def test_watch_url(self):
        assert extract_youtube_video_id("https://www.youtube.com/watch?v=abc123") == "abc123"

    def test_short_url(self):
        assert extract_youtube_video_id("https://youtu.be/abc123") == "abc123"

    def test_non_youtube(self):
        assert extract_youtube_video_id("https://example.com/watch?v=abc123") is None


class TestThumbnail:
    def test_default_quality_is_hq(self):
        assert get_youtube_thumbnail("abc123") == "https://img.youtube.com/vi/abc123/hqdefault.jpg"

    def test_other_tiers(self):
        assert get_youtube_thumbnail("x", "max").endswith("/x/maxresdefault.jpg")
        assert get_youtube_thumbnail("x", "mq").endswith("/x/mqdefault.jpg")

    def test_unknown_tier(self):
        with pytest.raises(ValueError):
            get_youtube_thumbnail("x", "ultra")


class TestHelpers:
    def test_is_youtube_url_matches_channel_pages(self):
        assert is_youtube_url("https://www.youtube.com/channel/UC123")
        assert is_youtube_url("https://youtu.be/abc")
        assert not is_youtube_url("https://vimeo.com/123")
        assert not is_youtube_url("garbage")

    def test_display_domain(self):
        assert display_domain("https://www.github.com/foo") == "github.com"
        assert display_domain("nonsense") == "nonsense"
