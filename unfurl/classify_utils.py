import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse, parse_qs


class ContentKind(str, Enum):
    VIDEO = "video"
    SOCIAL_POST = "social-post"
    SOCIAL_PROFILE = "social-profile"
    MUSIC_TRACK = "music-track"
    MUSIC_ALBUM = "music-album"
    WEBSITE = "website"


@dataclass(frozen=True)
class LinkTarget:
    url: str
    name: str | None = None


@dataclass(frozen=True)
class ContentClassification:
    kind: ContentKind
    id: str | None = None
    platform: str | None = None


WEBSITE = ContentClassification(ContentKind.WEBSITE)

YOUTUBE_HOSTS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtube-nocookie.com",
    "www.youtube-nocookie.com",
    "youtu.be",
}
VIMEO_HOSTS = {"vimeo.com", "www.vimeo.com", "player.vimeo.com"}
X_HOSTS = {"x.com", "www.x.com", "twitter.com", "www.twitter.com", "mobile.twitter.com"}
SPOTIFY_HOSTS = {"open.spotify.com"}
APPLE_MUSIC_HOSTS = {"music.apple.com"}

YOUTUBE_ID = re.compile(r"^[A-Za-z0-9_-]{11}$")
YOUTUBE_PATH_PREFIXES = ("embed", "shorts", "live", "v")
STATUS_PATH = re.compile(r"/status(?:es)?/(\d+)")
SPOTIFY_PATH = re.compile(r"^/(?:intl-[a-z]{2}(?:-[a-z]{2})?/)?(track|album)/([A-Za-z0-9]+)")
APPLE_ID = re.compile(r"^(?:id)?(\d+)$")


def _host(parsed) -> str:
    return (parsed.hostname or "").lower()


def _segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def youtube_id(parsed) -> str | None:
    host = _host(parsed)
    segments = _segments(parsed.path)
    candidate = None
    if host == "youtu.be":
        candidate = segments[0] if segments else None
    elif parsed.path.rstrip("/") == "/watch":
        candidate = (parse_qs(parsed.query).get("v") or [None])[0]
    elif len(segments) >= 2 and segments[0] in YOUTUBE_PATH_PREFIXES:
        candidate = segments[1]
    if candidate and YOUTUBE_ID.match(candidate):
        return candidate
    return None


def vimeo_id(parsed) -> str | None:
    for segment in _segments(parsed.path):
        if segment.isdigit():
            return segment
    return None


def _classify_music(parsed) -> ContentClassification | None:
    host = _host(parsed)
    if host in SPOTIFY_HOSTS:
        m = SPOTIFY_PATH.match(parsed.path)
        if not m:
            return None
        kind = ContentKind.MUSIC_TRACK if m.group(1) == "track" else ContentKind.MUSIC_ALBUM
        return ContentClassification(kind, m.group(2), "spotify")

    # music.apple.com/us/album/<slug>/<id>?i=<track id>
    segments = _segments(parsed.path)
    track = (parse_qs(parsed.query).get("i") or [None])[0]
    if track and track.isdigit():
        return ContentClassification(ContentKind.MUSIC_TRACK, track, "apple_music")
    for kind, marker in ((ContentKind.MUSIC_TRACK, "song"), (ContentKind.MUSIC_ALBUM, "album")):
        if marker in segments:
            m = APPLE_ID.match(segments[-1])
            return ContentClassification(kind, m.group(1) if m else None, "apple_music")
    return None


def classify(url: str) -> ContentClassification:
    """Map a URL to the kind of preview it needs.

    Total: anything that can't be parsed, or doesn't match a known
    platform rule, comes back as a plain website.
    """
    try:
        parsed = urlparse((url or "").strip())
        host = _host(parsed)
    except ValueError:
        return WEBSITE
    if parsed.scheme not in ("http", "https") or not host:
        return WEBSITE

    if host in YOUTUBE_HOSTS:
        vid = youtube_id(parsed)
        if vid:
            return ContentClassification(ContentKind.VIDEO, vid, "youtube")
    elif host in VIMEO_HOSTS:
        vid = vimeo_id(parsed)
        if vid:
            return ContentClassification(ContentKind.VIDEO, vid, "vimeo")
    elif host in X_HOSTS:
        m = STATUS_PATH.search(parsed.path)
        if m:
            return ContentClassification(ContentKind.SOCIAL_POST, m.group(1), "x")
        return ContentClassification(ContentKind.SOCIAL_PROFILE, None, "x")
    elif host in SPOTIFY_HOSTS or host in APPLE_MUSIC_HOSTS:
        music = _classify_music(parsed)
        if music:
            return music
    return WEBSITE


def is_valid_url(value: str | None) -> bool:
    if not value or not value.strip():
        return False
    try:
        p = urlparse(value.strip())
        return p.scheme in ("http", "https") and bool(p.hostname)
    except ValueError:
        return False


def website_domain(url: str) -> str | None:
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    return host[4:] if host.startswith("www.") else host
