"""
Identity store lookups (users and sellers).
"""

from __future__ import annotations

from core import db

from .identity import Role


def normalize_username(username: str) -> str:
    return (username or "").strip()


async def get_user_by_username(username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT username, password_hash, is_active, false AS is_admin, created_at
        FROM users
        WHERE username = $1
        """,
        normalize_username(username),
    )


async def get_seller_by_username(username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT username, password_hash, is_active, is_admin, created_at
        FROM sellers
        WHERE username = $1
        """,
        normalize_username(username),
    )


async def get_account(username: str, *, role: Role) -> dict | None:
    if role is Role.SELLER:
        return await get_seller_by_username(username)
    return await get_user_by_username(username)
