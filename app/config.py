"""Application settings"""
import os
from pathlib import Path

_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    with open(_env_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                os.environ.setdefault(k.strip(), v.strip().strip('"\''))


def _flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings:
    # GNews token; the trending proxy refuses to run without it
    GNEWS_KEY: str = os.getenv("GNEWS_KEY", "").strip()
    GNEWS_BASE_URL: str = os.getenv("GNEWS_BASE_URL", "https://gnews.io/api/v4").rstrip("/")
    TRENDING_CACHE_TTL: int = int(os.getenv("TRENDING_CACHE_TTL", "300"))
    # Reject unknown region codes with 400 instead of serving the unfiltered feed
    TRENDING_STRICT_REGIONS: bool = _flag("TRENDING_STRICT_REGIONS")
    IMAGE_PLACEHOLDER_BASE: str = os.getenv("IMAGE_PLACEHOLDER_BASE", "https://via.placeholder.com").rstrip("/")
    IMAGE_SEARCH_URL: str = os.getenv("IMAGE_SEARCH_URL", "https://www.bing.com/images/search")
    # Where the UI reaches /api/*. Empty means this same app, in-process.
    API_BASE_URL: str = os.getenv("API_BASE_URL", "").rstrip("/")
    UPSTREAM_TIMEOUT: float = float(os.getenv("UPSTREAM_TIMEOUT", "15"))
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "").strip()
    HISTORY_LIMIT: int = int(os.getenv("HISTORY_LIMIT", "50"))
    MAX_SESSIONS: int = int(os.getenv("MAX_SESSIONS", "500"))

settings = Settings()
