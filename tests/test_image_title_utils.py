# tests/test_image_title_utils.py
import pytest

from unfurl.image_utils import normalize_image
from unfurl.title_utils import derive_title_from_url, normalize_title

ART = "https://is1-ssl.mzstatic.com/image/thumb/Music116/v4/aa/bb/cc/source/{}"


def test_apple_artwork_made_square():
    assert normalize_image(ART.format("1200x630bf-60.jpg")) == ART.format("600x600bf-60.jpg")
    assert normalize_image(ART.format("1200x630wp-60.png?x=1")) == ART.format("600x600wp-60.png?x=1")


@pytest.mark.parametrize("url", [
    "https://example.com/img/1200x630bf-60.jpg",
    ART.format("cover.jpg"),
    "https://img.youtube.com/vi/abc/hqdefault.jpg",
    "",
    None,
])
def test_other_images_untouched(url):
    assert normalize_image(url) == url


@pytest.mark.parametrize("raw,expected", [
    ("Tom &amp; Jerry", "Tom & Jerry"),
    ("&quot;Quoted&quot; &#39;single&#39; &#x27;hex&#x27;", "\"Quoted\" 'single' 'hex'"),
    ("a&nbsp;b &ndash; c &mdash; d&#x2F;e", "a b – c — d/e"),
    ("&lt;b&gt;", "<b>"),
    ("caf&eacute; &#233;", "caf&eacute; &#233;"),
    ("", ""),
    (None, ""),
])
def test_normalize_title(raw, expected):
    assert normalize_title(raw) == expected


@pytest.mark.parametrize("url,expected", [
    ("https://example.com/my-cool-post", "My Cool Post"),
    ("https://example.com/482910", "Example.com"),
    ("https://www.example.com/", "Example.com"),
    ("https://example.com", "Example.com"),
    ("https://example.com/blog/some_file_name.html", "Some File Name"),
    ("https://example.com/posts/hello-world/", "Hello World"),
    ("https://www.instagram.com/p/CxYz1234abcdEFGH", "Instagram.com"),
    ("https://example.com/a-much-longer-readable-slug-here", "Example.com"),
    ("https://example.com/this-is-fifteen", "This Is Fifteen"),
    ("https://example.fr/\u00e9t\u00e9-2024", "\u00c9t\u00e9 2024"),
    ("https://example.com/caf\u00e9_cr\u00e8me", "Caf\u00e9 Cr\u00e8me"),
    ("https://www.youtube.com/@channel", "YouTube"),
    ("https://vimeo.com/about", "Vimeo"),
    ("https://open.spotify.com/playlist/abc", "Spotify"),
    ("not a url", "not a url"),
])
def test_derive_title_from_url(url, expected):
    assert derive_title_from_url(url) == expected
