"""
Tests for the JSON export of a generated entry.
"""
import json

from app.services.export_service import export_filename, export_json, export_payload
from app.services.gnews_service import TrendingItem
from app.services.script_generator import GeneratedEntry, generate_local


def make_item(**overrides):
    fields = dict(
        id="https://news.example.com/a?b=1",
        title="Solar Eclipse Draws Crowds",
        source="Example",
        published_at=None,
        summary="Thousands gathered. Skies were clear.",
        url="https://news.example.com/a?b=1",
    )
    fields.update(overrides)
    return TrendingItem(**fields)


def test_payload_from_generated_entry():
    entry = generate_local(make_item())
    entry.image_url = "https://img.example/1.png"
    assert export_payload(entry) == {
        "title": "Solar Eclipse Draws Crowds",
        "script": "Solar Eclipse Draws Crowds. Thousands gathered",
        "image": "https://img.example/1.png",
        "tags": "#solar #eclipse #draws #crowds",
    }


def test_payload_falls_back_to_item_fields():
    entry = GeneratedEntry(item=make_item())
    assert export_payload(entry) == {
        "title": "Solar Eclipse Draws Crowds",
        "script": "Thousands gathered. Skies were clear.",
        "image": "",
        "tags": "#solar #eclipse #draws #crowds",
    }


def test_filename_replaces_unsafe_characters():
    entry = GeneratedEntry(item=make_item())
    assert export_filename(entry) == "short_https___news_example_com_a_b_1.json"


def test_filename_defaults_to_news():
    assert export_filename(GeneratedEntry(item=make_item(id=""))) == "short_news.json"


def test_json_is_indented():
    text = export_json(generate_local(make_item()))
    assert text.startswith('{\n  "title"')
    assert json.loads(text)["title"] == "Solar Eclipse Draws Crowds"
