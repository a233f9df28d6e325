"""Single-page UI: trending list, script/image generation, history, JSON export"""
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from app.dependencies import get_proxy_client, get_session_state
from app.errors import TransientClientError
from app.services.gnews_service import normalize_region
from app.services.image_service import image_search_url
from app.services.export_service import export_filename, export_json
from app.services.proxy_client import ProxyClient
from app.services.session_state import SLOT_IMAGE, SLOT_SCRIPT, SLOT_TRENDING, SessionState

logger = logging.getLogger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

# Options offered in the region selector
REGION_CHOICES = [
    ("world", "World"),
    ("in", "India"),
    ("us", "USA"),
    ("gb", "UK"),
    ("tech", "Tech"),
    ("entertainment", "Entertainment"),
]


def _format_published(value: str | None) -> str:
    """ISO timestamp -> 'YYYY-MM-DD HH:MM' (raw string if unparsable)"""
    if not value:
        return ""
    try:
        from dateutil import parser as date_parser
        return date_parser.parse(value).strftime("%Y-%m-%d %H:%M")
    except (ValueError, OverflowError):
        return value


templates.env.filters["published"] = _format_published


def _back_to_index() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    region: str | None = None,
    refresh: bool = False,
    state: SessionState = Depends(get_session_state),
    proxy: ProxyClient = Depends(get_proxy_client),
):
    """Trending list for the session's region; refetched on region change or ?refresh=1"""
    if region is not None:
        state.region = normalize_region(region)
    if refresh or state.needs_refresh(state.region):
        wanted = state.region
        token = state.begin(SLOT_TRENDING)
        items = await proxy.fetch_trending(wanted)
        if state.is_current(SLOT_TRENDING, token):
            state.set_items(wanted, items)
        else:
            logger.info("Discarding stale trending response for region=%s", wanted)
    selected = state.selected
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "region": state.region,
            "regions": REGION_CHOICES,
            "items": state.items,
            "selected": selected,
            "image_prompt": f"{selected.item.title} news" if selected else "",
            "history": state.history,
        },
    )


@router.post("/script")
async def generate_script(
    item_id: str = Form(...),
    state: SessionState = Depends(get_session_state),
    proxy: ProxyClient = Depends(get_proxy_client),
):
    """Generate title variants / short script / hashtags for one listed item"""
    item = state.find_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    token = state.begin(SLOT_SCRIPT)
    entry = await proxy.generate_script(item)
    state.add_history(entry)
    if state.is_current(SLOT_SCRIPT, token):
        state.selected = entry
    return _back_to_index()


@router.post("/image")
async def generate_image(
    prompt: str = Form(""),
    state: SessionState = Depends(get_session_state),
    proxy: ProxyClient = Depends(get_proxy_client),
):
    """Attach an image to the selected entry; on failure send the user to an image search"""
    selected = state.selected
    if selected is None:
        return _back_to_index()
    prompt = prompt.strip() or f"{selected.item.title} news"
    token = state.begin(SLOT_IMAGE)
    try:
        image_url = await proxy.generate_image(prompt)
    except TransientClientError as e:
        logger.warning("Image generation failed, redirecting to search: %s", e)
        return RedirectResponse(url=image_search_url(prompt), status_code=303)
    if state.is_current(SLOT_IMAGE, token) and state.selected is selected:
        selected.image_url = image_url
    return _back_to_index()


@router.get("/export.json")
async def export_selected(state: SessionState = Depends(get_session_state)):
    """Download the selected entry as {title, script, image, tags}"""
    if state.selected is None:
        raise HTTPException(status_code=404, detail="Nothing selected")
    return Response(
        content=export_json(state.selected),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(state.selected)}"'},
    )
