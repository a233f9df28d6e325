"""Proxy endpoints: /api/trending and /api/generate-image"""
import json
import logging

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse, Response

from app.config import settings
from app.dependencies import get_image_generator, get_response_cache, get_upstream_client
from app.errors import ConfigurationError, InputError, ProxyError, UpstreamError
from app.services.gnews_service import (
    fetch_top_headlines,
    is_known_region,
    normalize_articles,
    normalize_region,
)
from app.services.image_service import ImageGenerator, clip_prompt
from app.services.response_cache import CachedResponse, ResponseCache, cache_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/trending")
async def trending(
    request: Request,
    background_tasks: BackgroundTasks,
    region: str | None = None,
    client: httpx.AsyncClient = Depends(get_upstream_client),
    cache: ResponseCache = Depends(get_response_cache),
):
    """Trending items for a region (GNews top-headlines, cached for TRENDING_CACHE_TTL seconds)"""
    try:
        region = normalize_region(region)
        if settings.TRENDING_STRICT_REGIONS and not is_known_region(region):
            raise InputError(f"Unknown region: {region}", status_code=400)

        token = settings.GNEWS_KEY
        if not token:
            raise ConfigurationError("GNEWS_KEY not configured")

        url = request.url
        key = cache_key(url.scheme, url.netloc, url.path, region)
        cached = cache.match(key)
        if cached is not None:
            return cached.to_response()

        upstream = await fetch_top_headlines(client, token, region)
        if not upstream.is_success:
            logger.warning("GNews answered %s for region=%s", upstream.status_code, region)
            raise UpstreamError("GNews error", upstream.status_code, upstream.text)

        items = normalize_articles(upstream.json())
        ttl = settings.TRENDING_CACHE_TTL
        body = json.dumps({"items": [x.to_dict() for x in items]}).encode("utf-8")
        headers = {"Cache-Control": f"public, max-age={ttl}"}
        response = Response(content=body, media_type="application/json", headers=headers)
        # Runs after the response is sent
        background_tasks.add_task(cache.put_quietly, key, CachedResponse(body=body, headers=headers), ttl)
        return response
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("trending failed")
        return JSONResponse({"error": str(e)}, status_code=500)


@router.api_route("/generate-image", methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"])
async def generate_image(
    request: Request,
    generator: ImageGenerator = Depends(get_image_generator),
):
    """POST {prompt} -> {imageUrl}"""
    if request.method != "POST":
        raise InputError("Use POST", status_code=405)
    try:
        body = await request.json()
        prompt = clip_prompt(body.get("prompt") if isinstance(body, dict) else None)
        return {"imageUrl": generator(prompt)}
    except Exception as e:
        logger.exception("generate-image failed")
        return JSONResponse({"error": str(e)}, status_code=500)
