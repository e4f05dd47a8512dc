"""In-process cache of CMS responses, invalidated by tag."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CacheEntry:
    """A cached value with its tags and monotonic expiry time."""

    value: Any
    tags: frozenset[str]
    expires_at: float = field(default=0.0)


class ResponseCache:
    """Maps request keys to validated results; entries expire after ``ttl_seconds``."""

    def __init__(self, ttl_seconds: float = 300):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, CacheEntry] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> tuple[bool, Any]:
        """Return ``(hit, value)``; expired entries are dropped."""
        entry = self._entries.get(key)
        if entry is None:
            return False, None
        if entry.expires_at <= time.monotonic():
            del self._entries[key]
            return False, None
        return True, entry.value

    def set(self, key: str, value: Any, tags: list[str] | tuple[str, ...] = ()) -> None:
        if not self.enabled:
            return
        self._entries[key] = CacheEntry(
            value=value,
            tags=frozenset(tags),
            expires_at=time.monotonic() + self.ttl_seconds,
        )

    def invalidate_tag(self, tag: str) -> int:
        """Drop every entry carrying ``tag``. Returns the number dropped."""
        stale = [key for key, entry in self._entries.items() if tag in entry.tags]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()
