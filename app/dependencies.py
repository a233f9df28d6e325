"""FastAPI dependencies over the objects created in the app lifespan"""
import httpx
from fastapi import Request

from app.services.image_service import ImageGenerator
from app.services.proxy_client import ProxyClient
from app.services.response_cache import ResponseCache
from app.services.session_state import SessionState, SessionStore

SESSION_KEY = "sid"


def get_upstream_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.upstream_client


def get_response_cache(request: Request) -> ResponseCache:
    return request.app.state.response_cache


def get_image_generator(request: Request) -> ImageGenerator:
    return request.app.state.image_generator


def get_proxy_client(request: Request) -> ProxyClient:
    return request.app.state.proxy_client


def get_session_state(request: Request) -> SessionState:
    """SessionState for the browser session (cookie-backed id)"""
    store: SessionStore = request.app.state.sessions
    sid = request.session.get(SESSION_KEY)
    if not sid:
        sid = store.new_id()
        request.session[SESSION_KEY] = sid
    return store.get(sid)
