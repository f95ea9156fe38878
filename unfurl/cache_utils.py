"""Process-wide brand icon cache.

Created empty at import, filled on lookup misses, never torn down. Each
worker process has its own copy; nothing is shared between gunicorn
workers or instances.
"""
import time
from dataclasses import dataclass

BRAND_ICON_TTL = 24 * 60 * 60


@dataclass(frozen=True)
class BrandIconCacheEntry:
    domain: str
    logo_url: str | None
    cached_at: float


class BrandIconCache:
    def __init__(self, ttl: float = BRAND_ICON_TTL, clock=time.time):
        self.ttl = ttl
        self.clock = clock
        self._entries: dict[str, BrandIconCacheEntry] = {}

    def get(self, domain: str) -> BrandIconCacheEntry | None:
        entry = self._entries.get(domain)
        if entry is None or self.clock() - entry.cached_at >= self.ttl:
            return None
        return entry

    def put(self, domain: str, logo_url: str | None, timestamp: float | None = None) -> BrandIconCacheEntry:
        entry = BrandIconCacheEntry(
            domain=domain,
            logo_url=logo_url,
            cached_at=self.clock() if timestamp is None else timestamp,
        )
        self._entries[domain] = entry
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


brand_icon_cache = BrandIconCache()
