"""Row factories shaped like the dicts the repositories return."""

from __future__ import annotations

from datetime import datetime
from typing import Any


def make_qna_row(**overrides: Any) -> dict[str, Any]:
    row = {
        "id": 1,
        "title": "Size?",
        "content": "Is this true to size?",
        "answer": None,
        "secret": False,
        "created_at": datetime(2025, 3, 4, 15, 7, 42),
        "updated_at": None,
        "answered_at": None,
        "answered_by": None,
        "user_id": "alice",
        "product_id": 7,
    }
    row.update(overrides)
    return row


def make_account_row(username: str, **overrides: Any) -> dict[str, Any]:
    row = {
        "username": username,
        "password_hash": "",
        "is_active": True,
        "is_admin": False,
        "created_at": datetime(2025, 1, 1, 0, 0, 0),
    }
    row.update(overrides)
    return row


def make_product_row(product_id: int = 7) -> dict[str, Any]:
    return {"id": product_id, "name": f"Product {product_id}", "created_at": datetime(2025, 1, 1)}
