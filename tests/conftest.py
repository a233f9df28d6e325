"""
Pytest configuration and shared fixtures.

The GNews API is replaced by an httpx.MockTransport so no test touches the network.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.dependencies import get_upstream_client
from main import app


def gnews_article(n, **overrides):
    article = {
        "title": f"Headline number {n} about something notable",
        "description": f"Description {n}. More detail follows.",
        "content": f"Content {n}",
        "url": f"https://news.example.com/story-{n}",
        "publishedAt": "2024-05-01T10:00:00Z",
        "source": {"name": "Example Times", "url": "https://news.example.com"},
    }
    article.update(overrides)
    return article


class FakeGNews:
    """Records upstream requests and answers with a canned payload."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.payload = {"totalArticles": 2, "articles": [gnews_article(1), gnews_article(2)]}
        self.text = None
        self.error = None

    def __call__(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_params(self):
        return dict(self.requests[-1].url.params)


@pytest.fixture
def gnews():
    return FakeGNews()


@pytest.fixture
def client(gnews, monkeypatch):
    """TestClient with a configured GNews key and the fake upstream."""
    monkeypatch.setattr(settings, "GNEWS_KEY", "test-key")
    monkeypatch.setattr(settings, "TRENDING_STRICT_REGIONS", False)
    upstream = httpx.AsyncClient(transport=httpx.MockTransport(gnews))
    app.dependency_overrides[get_upstream_client] = lambda: upstream
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
