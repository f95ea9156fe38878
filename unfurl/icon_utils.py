import logging
import os
import re
from urllib.parse import urlparse

from unfurl import http_utils
from unfurl.cache_utils import brand_icon_cache
from unfurl.classify_utils import (
    APPLE_MUSIC_HOSTS, SPOTIFY_HOSTS, VIMEO_HOSTS, X_HOSTS, YOUTUBE_HOSTS,
)

log = logging.getLogger(__name__)

BRANDFETCH_API = "https://api.brandfetch.io/v2/brands/{domain}"

BRAND_ALIASES = {}
for hosts, canonical in (
    (X_HOSTS, "x.com"),
    (YOUTUBE_HOSTS, "youtube.com"),
    (VIMEO_HOSTS, "vimeo.com"),
    (SPOTIFY_HOSTS, "spotify.com"),
    (APPLE_MUSIC_HOSTS, "apple.com"),
):
    BRAND_ALIASES.update(dict.fromkeys(hosts, canonical))

TYPE_PREFERENCE = ("icon", "symbol", "logo")
FORMAT_PREFERENCE = ("svg", "png", "jpeg", "jpg", "webp")
VALID_DOMAIN = re.compile(r"^[a-z0-9-]+(\.[a-z0-9-]+)+$")


def canonical_brand_domain(value: str | None) -> str | None:
    value = (value or "").strip().lower()
    if not value:
        return None
    if "://" in value:
        try:
            value = urlparse(value).hostname or ""
        except ValueError:
            return None
    value = value.split("/")[0].rstrip(".")
    if value in BRAND_ALIASES:
        return BRAND_ALIASES[value]
    if value.startswith("www."):
        value = value[4:]
    return value if VALID_DOMAIN.match(value) else None


def pick_best_logo(data: dict) -> str | None:
    logos = data.get("logos")
    if not isinstance(logos, list):
        return None
    for kind in TYPE_PREFERENCE:
        formats = {}
        for logo in logos:
            if not isinstance(logo, dict) or logo.get("type") != kind:
                continue
            for f in logo.get("formats") or []:
                if not isinstance(f, dict):
                    continue
                src = f.get("src")
                if isinstance(src, str) and src:
                    formats.setdefault(f.get("format"), src)
        for fmt in FORMAT_PREFERENCE:
            if fmt in formats:
                return formats[fmt]
    return None


def resolve_brand_icon(domain: str, api_key: str | None = None, cache=None) -> str | None:
    """Small logo for a site, or None.

    A failed lookup is cached exactly like "this brand has no logo", so a
    broken domain costs one upstream call per TTL window.
    """
    cache = brand_icon_cache if cache is None else cache
    brand = canonical_brand_domain(domain)
    if not brand:
        return None

    entry = cache.get(brand)
    if entry is not None:
        return entry.logo_url

    api_key = api_key or os.getenv("BRANDFETCH_API_KEY")
    if not api_key:
        log.warning("BRANDFETCH_API_KEY not set, skipping logo lookup for %s", brand)
        return None

    data = http_utils.get_json(
        BRANDFETCH_API.format(domain=brand),
        headers={"Authorization": f"Bearer {api_key}"},
    )
    logo = pick_best_logo(data) if data else None
    cache.put(brand, logo)
    return logo
