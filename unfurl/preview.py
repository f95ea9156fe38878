import time
from dataclasses import dataclass, field

from unfurl.classify_utils import ContentKind, classify
from unfurl.image_utils import normalize_image
from unfurl.og_utils import fetch_og
from unfurl.social_utils import fetch_social_preview
from unfurl.title_utils import normalize_title
from unfurl.video_utils import detect_video

SOCIAL_KINDS = {ContentKind.SOCIAL_POST, ContentKind.SOCIAL_PROFILE}


@dataclass(frozen=True)
class EnrichmentResult:
    image_url: str | None = None
    title: str | None = None
    resolved_at: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {"image": self.image_url, "title": self.title}


@dataclass(frozen=True)
class MediaInfo:
    type: str  # "video" | "image" | "none"
    title: str
    url: str | None = None
    embed_url: str | None = None


def fetch_preview(url: str) -> EnrichmentResult:
    if classify(url).kind in SOCIAL_KINDS:
        raw = fetch_social_preview(url)
    else:
        raw = fetch_og(url)
    title = normalize_title(raw.get("title")) or None
    return EnrichmentResult(image_url=normalize_image(raw.get("image")), title=title)


def get_media_info(link: str, image: str | None = None, name: str | None = None) -> MediaInfo:
    """Everything a card needs to draw its media slot, in priority order:
    inline video, a record-supplied image, then whatever the page's OG tags say.
    """
    video = detect_video(link)
    if video:
        return MediaInfo(
            type="video",
            title=name or link,
            url=video.thumbnail_url,
            embed_url=video.embed_url,
        )

    if image:
        return MediaInfo(type="image", title=name or link, url=image)

    result = fetch_preview(link)
    return MediaInfo(
        type="image" if result.image_url else "none",
        title=name or result.title or link,
        url=result.image_url,
    )
