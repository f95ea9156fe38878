# tests/test_social_utils.py
import pytest

from unfurl import social_utils
from unfurl.social_utils import fetch_social_preview

POST_URL = "https://x.com/jack/status/20"
POST_API = "https://api.fxtwitter.com/jack/status/20"
PROFILE_API = "https://api.fxtwitter.com/jack"


def tweet(text="just setting up my twttr", media=None, **author):
    author = {"name": "jack", "screen_name": "jack", **author}
    return {"code": 200, "message": "OK", "tweet": {"text": text, "author": author, "media": media or {}}}


def test_post_title_and_photo(fake_json):
    calls = fake_json({POST_API: tweet(media={
        "photos": [{"url": "https://pbs.twimg.com/media/1.jpg"}],
        "videos": [{"thumbnail_url": "https://pbs.twimg.com/v.jpg"}],
    }, avatar_url="https://pbs.twimg.com/avatar.jpg")})
    assert fetch_social_preview(POST_URL) == {
        "title": 'jack: "just setting up my twttr"',
        "image": "https://pbs.twimg.com/media/1.jpg",
    }
    assert [c[0] for c in calls] == [POST_API]


def test_long_post_is_truncated(fake_json):
    text = "a" * 150
    fake_json({POST_API: tweet(text=text)})
    assert fetch_social_preview(POST_URL)["title"] == 'jack: "' + "a" * 100 + '..."'


def test_exactly_100_chars_not_truncated(fake_json):
    fake_json({POST_API: tweet(text="b" * 100)})
    assert fetch_social_preview(POST_URL)["title"] == 'jack: "' + "b" * 100 + '"'


def test_image_preference_video_then_avatar(fake_json):
    fake_json({POST_API: tweet(media={"photos": [], "videos": [{"thumbnail_url": "https://v/t.jpg"}]},
                               avatar_url="https://a/1.jpg")})
    assert fetch_social_preview(POST_URL)["image"] == "https://v/t.jpg"

    fake_json({POST_API: tweet(media={"photos": "garbage"}, avatar_url="https://a/1.jpg")})
    assert fetch_social_preview(POST_URL)["image"] == "https://a/1.jpg"

    fake_json({POST_API: tweet()})
    assert "image" not in fetch_social_preview(POST_URL)


def test_profile_banner_then_avatar(fake_json):
    user = {"screen_name": "jack", "name": "jack", "avatar_url": "https://a/1.jpg",
            "banner_url": "https://b/1.jpg"}
    fake_json({PROFILE_API: {"code": 200, "user": user}})
    assert fetch_social_preview("https://twitter.com/jack") == {
        "title": "@jack on X", "image": "https://b/1.jpg"}

    fake_json({PROFILE_API: {"code": 200, "user": {**user, "banner_url": None}}})
    assert fetch_social_preview("https://x.com/jack")["image"] == "https://a/1.jpg"


@pytest.mark.parametrize("response", [
    None,
    {"code": 404, "message": "NOT_FOUND"},
    {"code": 200},
    {"code": 200, "tweet": {"text": "no author"}},
    {"code": 200, "tweet": "nonsense"},
])
def test_fallback_parses_handle(fake_json, response):
    fake_json(lambda url, headers=None: response)
    assert fetch_social_preview(POST_URL) == {"title": "@jack on X"}


def test_no_handle_gives_network_name(fake_json):
    calls = fake_json({})
    assert fetch_social_preview("https://x.com/") == {"title": "X"}
    assert calls == []


def test_handle_from_url():
    assert social_utils.handle_from_url("https://x.com/@jack/") == "jack"
    assert social_utils.handle_from_url("https://x.com") is None
