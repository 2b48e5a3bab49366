"""
Environment-backed settings.

Every value is read lazily on call so tests can monkeypatch the environment.
"""

from __future__ import annotations

import os


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_list(name: str, default: list[str]) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()


def cors_origins() -> list[str]:
    return env_list(
        "CORS_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
    )


def default_page_size() -> int:
    return max(1, env_int("QNA_PAGE_SIZE", 10))


def max_page_size() -> int:
    return max(default_page_size(), env_int("QNA_MAX_PAGE_SIZE", 100))


def legacy_product_id() -> int:
    # Placeholder product for clients still posting to `POST /qna` without a product.
    return env_int("QNA_LEGACY_PRODUCT_ID", 1)
