from __future__ import annotations

import os


def env_str(name: str, default: str) -> str:
    return os.getenv(name, default).strip() or default


def api_region(explicit: str | None = None) -> str:
    if explicit and explicit.strip():
        return explicit.strip().lower()
    return env_str("LOGZIO_API_REGION", "eu").lower()


def api_base_url(region: str) -> str:
    """Base URL for a Logz.io region; LOGZIO_API_URL overrides it entirely."""
    override = os.getenv("LOGZIO_API_URL", "").strip()
    if override:
        return override.rstrip("/")
    if region == "us":
        return "https://api.logz.io"
    return f"https://api-{region}.logz.io"


def scroll_page_size() -> int:
    try:
        return int(env_str("LOGZIO_SCROLL_SIZE", "1000"))
    except Exception:
        return 1000
