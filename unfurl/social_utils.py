import logging
from urllib.parse import urlparse

from unfurl import http_utils
from unfurl.classify_utils import ContentKind, classify

log = logging.getLogger(__name__)

NETWORK = "X"
FXTWITTER_API = "https://api.fxtwitter.com"
TEXT_PREVIEW_LEN = 100


def _dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _str(value) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _first(items, key: str) -> str | None:
    if not isinstance(items, list):
        return None
    for item in items:
        found = _str(_dict(item).get(key))
        if found:
            return found
    return None


def handle_from_url(url: str) -> str | None:
    try:
        path = urlparse(url).path
    except ValueError:
        return None
    segments = [s for s in path.split("/") if s]
    if not segments:
        return None
    return segments[0].lstrip("@") or None


def fallback_preview(url: str) -> dict:
    handle = handle_from_url(url)
    if handle:
        return {"title": f"@{handle} on {NETWORK}"}
    return {"title": NETWORK}


def _post_preview(tweet: dict) -> dict | None:
    author = _dict(tweet.get("author"))
    name = _str(author.get("name")) or _str(author.get("screen_name"))
    text = _str(tweet.get("text")) or ""
    if not name:
        return None
    snippet = text[:TEXT_PREVIEW_LEN]
    if len(text) > TEXT_PREVIEW_LEN:
        snippet += "..."
    out = {"title": f'{name}: "{snippet}"'}

    media = _dict(tweet.get("media"))
    image = (
        _first(media.get("photos"), "url")
        or _first(media.get("videos"), "thumbnail_url")
        or _str(author.get("avatar_url"))
    )
    if image:
        out["image"] = image
    return out


def _profile_preview(user: dict) -> dict | None:
    handle = _str(user.get("screen_name"))
    if not handle:
        return None
    out = {"title": f"@{handle} on {NETWORK}"}
    image = _str(user.get("banner_url")) or _str(user.get("avatar_url"))
    if image:
        out["image"] = image
    return out


def api_url(url: str) -> str | None:
    """Mirror-API URL for a post or profile link, None if there's no handle."""
    handle = handle_from_url(url)
    if not handle:
        return None
    c = classify(url)
    if c.kind is ContentKind.SOCIAL_POST:
        return f"{FXTWITTER_API}/{handle}/status/{c.id}"
    return f"{FXTWITTER_API}/{handle}"


def fetch_social_preview(url: str) -> dict:
    endpoint = api_url(url)
    if not endpoint:
        return fallback_preview(url)

    data = http_utils.get_json(endpoint)
    if not data or data.get("code") != 200:
        log.debug("social preview fallback for %s", url)
        return fallback_preview(url)

    preview = None
    if isinstance(data.get("tweet"), dict):
        preview = _post_preview(data["tweet"])
    elif isinstance(data.get("user"), dict):
        preview = _profile_preview(data["user"])
    return preview or fallback_preview(url)
