import re
from urllib.parse import urlparse

from unfurl.classify_utils import (
    APPLE_MUSIC_HOSTS, SPOTIFY_HOSTS, VIMEO_HOSTS, X_HOSTS, YOUTUBE_HOSTS,
)

# Deliberately small: anything outside this table is left as written.
ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&nbsp;": " ",
    "&#x27;": "'",
    "&#x2F;": "/",
    "&ndash;": "–",
    "&mdash;": "—",
}
ENTITY = re.compile(r"&[#\w]+;")

BRAND_NAMES = {}
for hosts, name in (
    (YOUTUBE_HOSTS, "YouTube"),
    (VIMEO_HOSTS, "Vimeo"),
    (X_HOSTS, "X"),
    (SPOTIFY_HOSTS, "Spotify"),
    (APPLE_MUSIC_HOSTS, "Apple Music"),
):
    BRAND_NAMES.update(dict.fromkeys(hosts, name))

OPAQUE_ID_MIN_LEN = 16
NUMERIC = re.compile(r"^[0-9]+$")
ID_CHARS = re.compile(r"^[A-Za-z0-9_-]+$")
FILE_EXT = re.compile(r"\.[^.]+$")
WORD_START = re.compile(r"\b\w")


def decode_entities(text: str) -> str:
    return ENTITY.sub(lambda m: ENTITIES.get(m.group(0), m.group(0)), text)


def normalize_title(raw: str | None) -> str:
    if not raw:
        return ""
    return decode_entities(raw)


def is_opaque_id(segment: str) -> bool:
    if NUMERIC.match(segment):
        return True
    # e.g. an Instagram shortcode
    return len(segment) >= OPAQUE_ID_MIN_LEN and bool(ID_CHARS.match(segment))


def _capitalize(domain: str) -> str:
    return domain[:1].upper() + domain[1:]


def slug_to_title(segment: str) -> str:
    candidate = FILE_EXT.sub("", segment)
    candidate = candidate.replace("-", " ").replace("_", " ")
    candidate = " ".join(candidate.split())
    return WORD_START.sub(lambda m: m.group(0).upper(), candidate)


def derive_title_from_url(url: str) -> str:
    """Readable stand-in title for a link nobody has named yet."""
    try:
        parsed = urlparse(url)
        host = (parsed.hostname or "").lower()
    except ValueError:
        return url
    if not host:
        return url

    if host in BRAND_NAMES:
        return BRAND_NAMES[host]
    domain = host[4:] if host.startswith("www.") else host

    segments = [s for s in parsed.path.split("/") if s]
    if not segments:
        return _capitalize(domain)
    last = segments[-1]
    if is_opaque_id(last):
        return _capitalize(domain)
    return slug_to_title(last) or domain
