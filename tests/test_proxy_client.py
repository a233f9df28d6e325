"""
Tests for the UI's proxy client against a mocked API.
"""
import asyncio

import httpx
import pytest

from app.errors import TransientClientError
from app.services.gnews_service import TrendingItem
from app.services.proxy_client import ProxyClient
from app.services.script_generator import generate_local

ITEM = TrendingItem(
    id="https://news.example.com/a",
    title="Markets Rally After Surprise Announcement",
    source="Example",
    published_at="2024-05-01T10:00:00Z",
    summary="Stocks jumped. Analysts reacted.",
    url="https://news.example.com/a",
)


def make_proxy(handler):
    return ProxyClient(httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api.test"))


def test_fetch_trending_parses_items():
    def handler(request):
        assert request.url.params["region"] == "tech"
        return httpx.Response(200, json={"items": [ITEM.to_dict()]})

    items = asyncio.run(make_proxy(handler).fetch_trending("tech"))
    assert items == [ITEM]


@pytest.mark.parametrize("response", [
    httpx.Response(502, json={"error": "GNews error"}),
    httpx.Response(200, text="<html>not json</html>"),
    httpx.Response(200, json=["unexpected"]),
])
def test_fetch_trending_falls_back(response):
    items = asyncio.run(make_proxy(lambda request: response).fetch_trending("us"))
    assert [x.id for x in items] == ["mock-1"]
    assert items[0].source == "local-fallback"


def test_fetch_trending_network_error_falls_back():
    def handler(request):
        raise httpx.ConnectError("unreachable")

    items = asyncio.run(make_proxy(handler).fetch_trending("us"))
    assert items[0].id == "mock-1"


def test_generate_script_uses_remote_reply():
    def handler(request):
        assert request.url.path == "/api/generate-script"
        return httpx.Response(200, json={
            "shortScript": "Remote script",
            "titleVariants": ["Remote title"],
            "hashtags": "#remote",
        })

    entry = asyncio.run(make_proxy(handler).generate_script(ITEM))
    assert entry.short_script == "Remote script"
    assert entry.title_variants == ["Remote title"]
    assert entry.item is ITEM


def test_generate_script_falls_back_on_error_status():
    entry = asyncio.run(make_proxy(lambda request: httpx.Response(404)).generate_script(ITEM))
    assert entry == generate_local(ITEM)


def test_generate_script_falls_back_on_network_error():
    def handler(request):
        raise httpx.ReadTimeout("slow")

    entry = asyncio.run(make_proxy(handler).generate_script(ITEM))
    assert entry == generate_local(ITEM)


def test_generate_image_returns_url():
    def handler(request):
        return httpx.Response(200, json={"imageUrl": "https://img.example/x.png"})

    assert asyncio.run(make_proxy(handler).generate_image("prompt")) == "https://img.example/x.png"


@pytest.mark.parametrize("response", [
    httpx.Response(500, json={"error": "boom"}),
    httpx.Response(200, json={}),
    httpx.Response(200, text="oops"),
])
def test_generate_image_failures_raise_transient(response):
    with pytest.raises(TransientClientError):
        asyncio.run(make_proxy(lambda request: response).generate_image("prompt"))
