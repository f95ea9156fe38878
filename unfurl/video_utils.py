from dataclasses import dataclass

from unfurl.classify_utils import ContentClassification, ContentKind, classify

EMBED_URLS = {
    "youtube": "https://www.youtube.com/embed/{id}",
    "vimeo": "https://player.vimeo.com/video/{id}",
}

# Vimeo has no predictable thumbnail CDN path; the player embed is enough.
THUMBNAIL_URLS = {
    "youtube": "https://img.youtube.com/vi/{id}/hqdefault.jpg",
}

WATCH_URLS = {
    "youtube": "https://www.youtube.com/watch?v={id}",
    "vimeo": "https://vimeo.com/{id}",
}


@dataclass(frozen=True)
class VideoEmbed:
    embed_url: str
    thumbnail_url: str | None = None


def resolve_embed(classification: ContentClassification) -> VideoEmbed | None:
    if classification.kind is not ContentKind.VIDEO or not classification.id:
        return None
    embed = EMBED_URLS.get(classification.platform)
    if not embed:
        return None
    thumb = THUMBNAIL_URLS.get(classification.platform)
    return VideoEmbed(
        embed_url=embed.format(id=classification.id),
        thumbnail_url=thumb.format(id=classification.id) if thumb else None,
    )


def detect_video(url: str) -> VideoEmbed | None:
    return resolve_embed(classify(url))


def watch_url(video_id: str, platform: str) -> str:
    return WATCH_URLS[platform].format(id=video_id)
