"""GNews top-headlines client (upstream of /api/trending)

Region options:
  world (default) | us | in | gb | ca | au | de | fr | it | es | tech | entertainment
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

DEFAULT_REGION = "world"
COUNTRY_CODES = ("us", "in", "gb", "ca", "au", "de", "fr", "it", "es")
TOPIC_REGIONS = {
    "tech": "technology",
    "entertainment": "entertainment",
}
KNOWN_REGIONS = (DEFAULT_REGION,) + COUNTRY_CODES + tuple(TOPIC_REGIONS)

# Articles per request (GNews caps this by plan)
MAX_ARTICLES = 30


@dataclass
class TrendingItem:
    """Normalized news article"""
    id: str
    title: str
    source: str
    published_at: Optional[str]
    summary: str
    url: Optional[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "source": self.source,
            "publishedAt": self.published_at,
            "summary": self.summary,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TrendingItem":
        return cls(
            id=str(data.get("id") or ""),
            title=data.get("title") or "",
            source=data.get("source") or "",
            published_at=data.get("publishedAt"),
            summary=data.get("summary") or "",
            url=data.get("url"),
        )


def normalize_region(region: Optional[str]) -> str:
    return (region or DEFAULT_REGION).strip().lower() or DEFAULT_REGION


def is_known_region(region: str) -> bool:
    return region in KNOWN_REGIONS


def build_filter_params(region: str) -> dict[str, str]:
    """Region -> the single filter parameter for the upstream query.

    Unknown regions (and "world") get no filter at all.
    """
    if region in COUNTRY_CODES:
        return {"country": region}
    topic = TOPIC_REGIONS.get(region)
    if topic:
        return {"topic": topic}
    return {}


def build_query_params(token: str, region: str) -> dict[str, Any]:
    params: dict[str, Any] = {"token": token, "lang": "en", "max": MAX_ARTICLES}
    params.update(build_filter_params(region))
    return params


async def fetch_top_headlines(client: httpx.AsyncClient, token: str, region: str) -> httpx.Response:
    """Call GNews top-headlines. The raw response is returned; status is checked by the caller."""
    url = f"{settings.GNEWS_BASE_URL}/top-headlines"
    params = build_query_params(token, region)
    logger.info("GNews request region=%s filter=%s", region, build_filter_params(region) or "-")
    return await client.get(url, params=params)


def normalize_articles(payload: Any) -> list[TrendingItem]:
    """Map GNews articles 1:1 to TrendingItem (no dedup, no ranking)"""
    if not isinstance(payload, dict):
        return []
    articles = payload.get("articles") or []
    items: list[TrendingItem] = []
    for idx, a in enumerate(articles):
        source = a.get("source") or {}
        items.append(TrendingItem(
            id=a.get("url") or f"gnews-{idx}",
            title=a.get("title") or "",
            source=(source.get("name") if isinstance(source, dict) else None) or "GNews",
            published_at=a.get("publishedAt"),
            summary=a.get("description") or a.get("content") or "",
            url=a.get("url"),
        ))
    return items
