"""Trending Shorts Studio - FastAPI application"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
logger = logging.getLogger(__name__)

from app.config import settings
from app.errors import ProxyError
from app.routers import api, ui
from app.services.image_service import default_image_generator
from app.services.proxy_client import ProxyClient
from app.services.response_cache import ResponseCache
from app.services.session_state import SessionStore


def _make_proxy_client(app: FastAPI) -> ProxyClient:
    """UI -> /api/* over HTTP. Without API_BASE_URL the calls stay in-process."""
    if settings.API_BASE_URL:
        client = httpx.AsyncClient(base_url=settings.API_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT)
    else:
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://studio.internal",
            timeout=settings.UPSTREAM_TIMEOUT,
        )
    return ProxyClient(client)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Shared HTTP clients, response cache and session store for the app's lifetime"""
    if not settings.GNEWS_KEY:
        logger.warning("GNEWS_KEY is not set; /api/trending will answer 500 until it is configured.")
    app.state.upstream_client = httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT)
    app.state.response_cache = ResponseCache()
    app.state.image_generator = default_image_generator()
    app.state.sessions = SessionStore(max_sessions=settings.MAX_SESSIONS, history_limit=settings.HISTORY_LIMIT)
    app.state.proxy_client = _make_proxy_client(app)
    try:
        yield
    finally:
        await app.state.proxy_client.aclose()
        await app.state.upstream_client.aclose()


app = FastAPI(
    title="Trending Shorts Studio",
    description="Trending news proxy with short-script, hashtag and image helpers",
    lifespan=lifespan,
)

if not settings.SESSION_SECRET:
    logger.warning("SESSION_SECRET is not set; using an insecure development secret.")
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET or "dev-secret-change-me",
    session_cookie="studio_session",
)

static_path = Path(__file__).resolve().parent / "app" / "static"
if static_path.exists():
    app.mount("/static", StaticFiles(directory=str(static_path)), name="static")


@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError):
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


app.include_router(api.router)
app.include_router(ui.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8001, reload=True)
