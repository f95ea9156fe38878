"""Per-card lazy enrichment.

A card starts ``pending``. The first time the UI reports it visible it
moves to ``fetching`` and runs at most one metadata fetch, ending in
``done`` whatever the outcome. A card that is unmounted mid-fetch simply
drops the result when it lands.
"""
import logging
import threading
from enum import Enum

from unfurl import icon_utils, oembed_utils, preview
from unfurl.classify_utils import LinkTarget, classify, is_valid_url, website_domain
from unfurl.preview import EnrichmentResult
from unfurl.title_utils import derive_title_from_url, normalize_title
from unfurl.video_utils import resolve_embed

log = logging.getLogger(__name__)

NOTE_TYPE = "Note"


class CardState(str, Enum):
    PENDING = "pending"
    FETCHING = "fetching"
    DONE = "done"


class PreviewCard:
    def __init__(self, item_id, entry: str, record_type: str | None = None,
                 title: str | None = None, image: str | None = None,
                 api_key: str | None = None):
        self.item_id = item_id
        self.entry = entry or ""
        self.record_type = record_type
        self.title = title
        self.image = image
        self.api_key = api_key

        self.is_note = record_type == NOTE_TYPE or not is_valid_url(self.entry)
        self.link = None if self.is_note else self.entry.strip()
        self.target = LinkTarget(self.link, title) if self.link else None
        self.classification = classify(self.link) if self.link else None
        self.embed = resolve_embed(self.classification) if self.classification else None

        self.state = CardState.PENDING
        self.alive = True
        self.result: EnrichmentResult | None = None
        self.brand_logo: str | None = None
        self._lock = threading.Lock()

    @property
    def needs_fetch(self) -> bool:
        if not self.link:
            return False
        if self.embed:
            return not self.title
        return not self.image

    @property
    def website_domain(self) -> str | None:
        return website_domain(self.link) if self.link else None

    @property
    def brand_domain(self) -> str | None:
        return icon_utils.canonical_brand_domain(self.link) if self.link else None

    @property
    def display_title(self) -> str:
        # fetched titles were decoded once on the way in
        if self.title:
            return normalize_title(self.title)
        if self.result and self.result.title:
            return self.result.title
        if self.is_note:
            return self.entry
        return derive_title_from_url(self.link)

    @property
    def display_image(self) -> str | None:
        if self.image:
            return self.image
        if self.result and self.result.image_url:
            return self.result.image_url
        return self.embed.thumbnail_url if self.embed else None

    @property
    def placeholder(self) -> str | None:
        if self.is_note or self.embed or self.display_image:
            return None
        return "Loading..." if self.state is CardState.FETCHING else "No preview"

    def on_visible(self, submit=None) -> bool:
        """Start the card's fetch if it hasn't happened yet.

        ``submit`` schedules the work (e.g. ``executor.submit``); without it
        the fetch runs inline. Returns True only for the call that started it.
        """
        with self._lock:
            if self.state is not CardState.PENDING or not self.alive:
                return False
            if not self.needs_fetch:
                self.state = CardState.DONE
                return False
            self.state = CardState.FETCHING

        if submit is None:
            self._run()
        else:
            submit(self._run)
        return True

    def _fetch(self) -> EnrichmentResult:
        if self.embed:
            c = self.classification
            found = oembed_utils.fetch_video_title(c.id, c.platform)
            return EnrichmentResult(title=normalize_title(found.get("title")) or None)
        return preview.fetch_preview(self.target.url)

    def _run(self) -> None:
        result = None
        try:
            result = self._fetch()
        finally:
            self._complete(result)

    def _complete(self, result: EnrichmentResult | None) -> None:
        with self._lock:
            if not self.alive:
                log.debug("card %s unmounted before fetch finished", self.item_id)
                return
            self.result = result
            self.state = CardState.DONE

    def load_brand_icon(self) -> str | None:
        if self.is_note or not self.brand_domain:
            return None
        logo = icon_utils.resolve_brand_icon(self.brand_domain, api_key=self.api_key)
        with self._lock:
            if self.alive:
                self.brand_logo = logo
        return logo

    def unmount(self) -> None:
        with self._lock:
            self.alive = False

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "entry": self.entry,
            "note": self.is_note,
            "link": self.link,
            "kind": self.classification.kind.value if self.classification else None,
            "title": self.display_title,
            "image": self.display_image,
            "embed_url": self.embed.embed_url if self.embed else None,
            "domain": self.website_domain,
            "brand_domain": self.brand_domain,
            "brand_logo": self.brand_logo,
            "placeholder": self.placeholder,
            "state": self.state.value,
        }
