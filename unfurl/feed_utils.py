from dataclasses import dataclass
from typing import Iterable, Protocol

from unfurl.card import PreviewCard


class RecordStoreError(Exception):
    """The backing store (Baserow, Coda) could not be read or written."""


class ConfigurationError(RecordStoreError):
    """Credentials or table ids for a record store are missing."""


@dataclass(frozen=True)
class FeedItem:
    id: object
    content: str
    type: str | None = None
    created_at: str | None = None
    title: str | None = None
    image: str | None = None


class RecordStore(Protocol):
    def list_items(self) -> Iterable[FeedItem]: ...

    def update_item(self, item_id, patch: dict) -> None: ...

    def delete_item(self, item_id) -> None: ...

    def route_and_delete(self, item_id, destination: str, content: str) -> None: ...


def build_feed(store: RecordStore, api_key: str | None = None) -> list[PreviewCard]:
    # store errors propagate; the page shows one error instead of a feed
    return [
        PreviewCard(
            item.id,
            item.content,
            record_type=item.type,
            title=item.title,
            image=item.image,
            api_key=api_key,
        )
        for item in store.list_items()
    ]
