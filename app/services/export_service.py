"""JSON export of one generated entry (title / script / image / tags)"""
import json
import re

from .script_generator import GeneratedEntry, make_hashtags

_FILENAME_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def export_payload(entry: GeneratedEntry) -> dict[str, str]:
    item = entry.item
    return {
        "title": entry.display_title,
        "script": entry.short_script or item.summary,
        "image": entry.image_url or "",
        "tags": entry.hashtags or make_hashtags(item.title),
    }


def export_filename(entry: GeneratedEntry) -> str:
    return f"short_{_FILENAME_UNSAFE_RE.sub('_', entry.id or 'news')}.json"


def export_json(entry: GeneratedEntry) -> str:
    return json.dumps(export_payload(entry), ensure_ascii=False, indent=2)
