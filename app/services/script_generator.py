"""Short script / title / hashtag generation

The remote /api/generate-script collaborator is optional. These local rules
are what the UI falls back to, and they are deterministic.
"""
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from .gnews_service import TrendingItem

MAX_SCRIPT_LEN = 220
SHORT_TITLE_MAX_LEN = 45
SHORT_TITLE_WORDS = 7
MAX_HASHTAGS = 5
ELLIPSIS = "..."

# ASCII word class, underscore counted as a separator
_NON_WORD_RE = re.compile(r"[\W_]+", re.ASCII)


@dataclass
class GeneratedEntry:
    """A TrendingItem plus the generated copy and optional image"""
    item: TrendingItem
    title_variants: list[str] = field(default_factory=list)
    short_script: str = ""
    hashtags: str = ""
    image_url: Optional[str] = None

    @property
    def id(self) -> str:
        return self.item.id

    @property
    def display_title(self) -> str:
        return self.title_variants[0] if self.title_variants else self.item.title

    def to_dict(self) -> dict[str, Any]:
        data = self.item.to_dict()
        data.update({
            "titleVariants": list(self.title_variants),
            "shortScript": self.short_script,
            "hashtags": self.hashtags,
            "imageUrl": self.image_url,
        })
        return data


def clip_script(text: str) -> str:
    if len(text) > MAX_SCRIPT_LEN:
        return text[: MAX_SCRIPT_LEN - len(ELLIPSIS)] + ELLIPSIS
    return text


def short_script(title: Optional[str], summary: Optional[str]) -> str:
    """Title plus the first sentence of the summary, at most 220 chars"""
    summary = summary or ""
    first_sentence = summary.split(".")[0] or summary
    return clip_script(f"{title or ''}. {first_sentence}")


def make_short_title(title: Optional[str]) -> str:
    if not title:
        return ""
    if len(title) <= SHORT_TITLE_MAX_LEN:
        return title
    return " ".join(title.split()[:SHORT_TITLE_WORDS]) + ELLIPSIS


def make_hashtags(title: Optional[str]) -> str:
    if not title:
        return "#news"
    words = _NON_WORD_RE.sub(" ", title.lower()).split(" ")
    tags = [w for w in words if len(w) > 3][:MAX_HASHTAGS]
    if not tags:
        return "#news"
    return "#" + " #".join(tags)


def title_variants(title: Optional[str]) -> list[str]:
    return [title or "", make_short_title(title)]


def generate_local(item: TrendingItem) -> GeneratedEntry:
    """Offline generation from title and summary"""
    return GeneratedEntry(
        item=item,
        title_variants=title_variants(item.title),
        short_script=short_script(item.title, item.summary),
        hashtags=make_hashtags(item.title),
    )


def from_remote(item: TrendingItem, data: Any) -> GeneratedEntry:
    """Merge a /api/generate-script reply over the item.

    Missing fields are filled from the local rules; the script is clipped
    to the same 220 chars as local output.
    """
    local = generate_local(item)
    if not isinstance(data, dict):
        return local
    variants = data.get("titleVariants")
    if isinstance(variants, str):
        variants = [variants]
    hashtags = data.get("hashtags")
    if isinstance(hashtags, list):
        hashtags = " ".join(str(h) if str(h).startswith("#") else f"#{h}" for h in hashtags)
    script = data.get("shortScript")
    return GeneratedEntry(
        item=item,
        title_variants=[str(v) for v in variants] if variants else local.title_variants,
        short_script=clip_script(str(script)) if script else local.short_script,
        hashtags=hashtags or local.hashtags,
        image_url=data.get("imageUrl"),
    )
