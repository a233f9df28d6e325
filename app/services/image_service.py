"""Image generation (placeholder)

The image source is a plain callable ``prompt -> image URL``. The default one
does no generation at all and points at a placeholder service; a real provider
only has to be another callable with the same shape.
"""
from typing import Callable, Optional
from urllib.parse import quote

from app.config import settings

ImageGenerator = Callable[[str], str]

DEFAULT_PROMPT = "news illustration"
MAX_PROMPT_LEN = 120
IMAGE_WIDTH = 1280
IMAGE_HEIGHT = 720

# Same characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "!~*'()"


def clip_prompt(prompt: Optional[str]) -> str:
    return (prompt or DEFAULT_PROMPT)[:MAX_PROMPT_LEN]


def placeholder_image_url(prompt: str, width: int = IMAGE_WIDTH, height: int = IMAGE_HEIGHT) -> str:
    """Deterministic placeholder URL embedding the prompt text"""
    text = quote(prompt, safe=_URI_COMPONENT_SAFE)
    return f"{settings.IMAGE_PLACEHOLDER_BASE}/{width}x{height}.png?text={text}"


def image_search_url(prompt: str) -> str:
    """External image search for the prompt (used when generation fails)"""
    return f"{settings.IMAGE_SEARCH_URL}?q={quote(prompt or '', safe=_URI_COMPONENT_SAFE)}"


def default_image_generator() -> ImageGenerator:
    return placeholder_image_url
