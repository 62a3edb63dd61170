import pytest

from services.media_links import describe_embed, tweet_id, youtube_video_id


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtube.com/watch?v=dQw4w9WgXcQ&t=42",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
    ],
)
def test_youtube_video_id_formats(url: str) -> None:
    assert youtube_video_id(url) == "dQw4w9WgXcQ"


def test_non_youtube_link_has_no_video_id() -> None:
    assert youtube_video_id("https://vimeo.com/12345") is None


def test_tweet_id_from_status_url() -> None:
    assert tweet_id("https://twitter.com/someone/status/1234567890") == "1234567890"
    assert tweet_id("https://x.com/someone/status/42") == "42"
    assert tweet_id("https://twitter.com/someone") is None


def test_describe_embed_depends_on_content_type() -> None:
    assert describe_embed("video", "https://youtu.be/abc") == {"provider": "youtube", "id": "abc"}
    assert describe_embed("twitter", "https://twitter.com/a/status/9") == {"provider": "twitter", "id": "9"}
    assert describe_embed("article", "https://youtu.be/abc") is None
