"""HTTP client the UI uses to reach /api/* (this app or a configured API_BASE_URL)

Failures never reach the user: the trending list degrades to a single local
item, script generation to the local rules, and image generation raises
TransientClientError so the caller can send the user to an image search.
"""
import logging
from datetime import datetime, timezone

import httpx

from app.errors import TransientClientError
from .gnews_service import TrendingItem
from .image_service import clip_prompt
from .script_generator import GeneratedEntry, from_remote, generate_local

logger = logging.getLogger(__name__)


def fallback_items() -> list[TrendingItem]:
    """Shown when /api/trending is unreachable or not configured"""
    return [TrendingItem(
        id="mock-1",
        title="Sample: Configure /api/trending",
        source="local-fallback",
        published_at=datetime.now(timezone.utc).isoformat(),
        summary="No backend configured. Set GNEWS_KEY (or API_BASE_URL) and restart the server.",
        url="",
    )]


class ProxyClient:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def fetch_trending(self, region: str) -> list[TrendingItem]:
        try:
            resp = await self.client.get("/api/trending", params={"region": region})
            if not resp.is_success:
                raise TransientClientError(f"trending proxy answered {resp.status_code}")
            data = resp.json()
            return [TrendingItem.from_dict(x) for x in (data.get("items") or []) if isinstance(x, dict)]
        except (httpx.HTTPError, ValueError, AttributeError, TransientClientError) as e:
            logger.warning("Trending fetch failed (region=%s), using fallback: %s", region, e)
            return fallback_items()

    async def generate_script(self, item: TrendingItem) -> GeneratedEntry:
        """Remote /api/generate-script if available, local rules otherwise"""
        try:
            resp = await self.client.post(
                "/api/generate-script",
                json={"title": item.title, "summary": item.summary, "source": item.source},
            )
            if resp.is_success:
                return from_remote(item, resp.json())
            logger.info("generate-script answered %s, using local generation", resp.status_code)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("generate-script unreachable, using local generation: %s", e)
        return generate_local(item)

    async def generate_image(self, prompt: str) -> str:
        try:
            resp = await self.client.post("/api/generate-image", json={"prompt": clip_prompt(prompt)})
            if not resp.is_success:
                raise TransientClientError(f"image proxy answered {resp.status_code}")
            image_url = resp.json().get("imageUrl")
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            raise TransientClientError(f"image proxy unreachable: {e}") from e
        if not image_url:
            raise TransientClientError("image proxy returned no imageUrl")
        return image_url

    async def aclose(self) -> None:
        await self.client.aclose()
