"""Read-through response cache for the trending proxy

Entries hold a serialized response (body + headers) and expire after a fixed TTL.
Expired entries are swept on every write.
There is no locking: two requests missing the same key may both go upstream.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from fastapi import Response

logger = logging.getLogger(__name__)


@dataclass
class CachedResponse:
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)
    media_type: str = "application/json"
    status_code: int = 200

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status_code,
            headers=dict(self.headers),
            media_type=self.media_type,
        )


def cache_key(scheme: str, netloc: str, path: str, region: str) -> str:
    """Normalized request URL: only the region survives as query string"""
    return f"{scheme}://{netloc}{path}?region={region}"


class ResponseCache:
    """In-process TTL store keyed by normalized request URL"""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, CachedResponse]] = {}

    def match(self, key: str) -> Optional[CachedResponse]:
        hit = self._entries.get(key)
        if hit is None:
            return None
        expires_at, cached = hit
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return cached

    async def put(self, key: str, cached: CachedResponse, ttl: int) -> None:
        now = self._clock()
        self.purge_expired(now)
        self._entries[key] = (now + ttl, cached)

    def purge_expired(self, now: Optional[float] = None) -> int:
        """Drop every expired entry; returns how many were removed"""
        if now is None:
            now = self._clock()
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for k in expired:
            del self._entries[k]
        return len(expired)

    async def put_quietly(self, key: str, cached: CachedResponse, ttl: int) -> None:
        """Background cache write. A failed write is ignored; the next request just goes upstream."""
        try:
            await self.put(key, cached, ttl)
        except Exception as e:
            logger.debug("cache write failed for %s: %s", key, e)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
