import logging
from urllib.parse import quote

from unfurl import http_utils
from unfurl.video_utils import watch_url

log = logging.getLogger(__name__)

OEMBED_PROVIDERS = {
    "youtube": "https://www.youtube.com/oembed?url={url}&format=json",
    "vimeo": "https://vimeo.com/api/oembed.json?url={url}",
}


def oembed_endpoint(page_url: str, platform: str) -> str:
    try:
        template = OEMBED_PROVIDERS[platform]
    except KeyError:
        raise ValueError(f"unsupported oEmbed platform: {platform!r}") from None
    return template.format(url=quote(page_url, safe=""))


def fetch_oembed_title(page_url: str, platform: str) -> dict:
    if platform not in OEMBED_PROVIDERS:
        log.debug("no oEmbed provider for %r", platform)
        return {}
    data = http_utils.get_json(oembed_endpoint(page_url, platform))
    title = (data or {}).get("title")
    if isinstance(title, str) and title:
        return {"title": title}
    log.debug("no oEmbed title for %s", page_url)
    return {}


def fetch_video_title(video_id: str, platform: str) -> dict:
    """Fill in a label for a bare video link from the provider's oEmbed."""
    if platform not in OEMBED_PROVIDERS:
        log.debug("no oEmbed provider for %r", platform)
        return {}
    return fetch_oembed_title(watch_url(video_id, platform), platform)
